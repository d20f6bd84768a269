"""
Scribe - Health Router
======================

Health check endpoint.
"""

from typing import Any, Optional

from fastapi import APIRouter, Depends

from src.api.dependencies import get_bot
from src.api.models import HealthResponse
from src.core.config import get_config


router = APIRouter(prefix="/health", tags=["Health"])


@router.get("", response_model=HealthResponse)
async def health_check(bot: Optional[Any] = Depends(get_bot)) -> HealthResponse:
    """
    Basic health check endpoint.

    Reports Discord connection status when the API runs inside the bot.
    """
    connected = bool(bot is not None and bot.is_ready())
    return HealthResponse(
        connected=connected,
        guilds=len(bot.guilds) if connected else 0,
        template=get_config().transcript_template,
    )
