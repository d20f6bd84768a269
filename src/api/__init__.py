"""
Scribe - API Package
====================

FastAPI service that serves transcript links.

Usage with bot:
    from src.api import APIService

    api_service = APIService(bot, transcript_service)
    await api_service.start()

    # On shutdown
    await api_service.stop()
"""

import asyncio
from typing import TYPE_CHECKING, Optional

import uvicorn

from src.core.config import get_config
from src.core.logger import logger
from src.api.app import create_app
from src.services.transcripts import TranscriptService

if TYPE_CHECKING:
    from src.bot import ScribeBot


# =============================================================================
# API Service
# =============================================================================

class APIService:
    """
    Manages the FastAPI server lifecycle within the Discord bot.

    This service runs the API server in a background task, allowing
    the bot and API to run concurrently.
    """

    def __init__(self, bot: "ScribeBot", service: TranscriptService) -> None:
        self._bot = bot
        self._config = get_config()
        self._app = create_app(bot, service)
        self._server: Optional[uvicorn.Server] = None
        self._task: Optional[asyncio.Task] = None

    @property
    def is_running(self) -> bool:
        """Check if the API server is running."""
        return self._task is not None and not self._task.done()

    async def start(self) -> None:
        """Start the API server in a background task."""
        if self.is_running:
            logger.warning("API Already Running")
            return

        config = uvicorn.Config(
            app=self._app,
            host=self._config.api_host,
            port=self._config.api_port,
            log_level="warning",
            access_log=False,
        )
        self._server = uvicorn.Server(config)
        self._task = asyncio.create_task(self._run_server(), name="API Server")

        logger.tree("API Service Started", [
            ("Host", self._config.api_host),
            ("Port", str(self._config.api_port)),
        ], emoji="🌐")

    async def _run_server(self) -> None:
        """Run the uvicorn server."""
        try:
            await self._server.serve()
        except asyncio.CancelledError:
            logger.debug("API Server Cancelled")
        except Exception as e:
            logger.error("API Server Error", [
                ("Error Type", type(e).__name__),
                ("Error", str(e)[:100]),
            ])

    async def stop(self) -> None:
        """Stop the API server gracefully."""
        if not self.is_running:
            return

        logger.tree("API Service Stopping", [], emoji="🛑")

        if self._server:
            self._server.should_exit = True

        if self._task:
            try:
                await asyncio.wait_for(self._task, timeout=5.0)
            except asyncio.TimeoutError:
                self._task.cancel()
                try:
                    await self._task
                except asyncio.CancelledError:
                    pass

        self._server = None
        self._task = None

        logger.tree("API Service Stopped", [], emoji="✅")


__all__ = ["APIService", "create_app"]
