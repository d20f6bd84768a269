"""
Scribe - Configuration Module
=============================

Centralized configuration management with environment variable validation.

DESIGN:
    This module provides a single source of truth for all configuration,
    loaded from environment variables at startup. Using a dataclass keeps
    settings typed and read-only once loaded.

    Key patterns:
    - Singleton pattern via get_config() ensures one Config instance
    - Validation happens once at load time, not on every access
"""

import os
from dataclasses import dataclass
from datetime import timezone
from pathlib import Path
from typing import Optional


# =============================================================================
# Timezone Configuration
# =============================================================================

UTC_TZ = timezone.utc
"""
Zone used for every transcript timestamp and log line.

DESIGN:
    Transcripts are read by staff across many regions, so timestamps are
    rendered in UTC with the reader's locale rather than the server's zone.
"""


# =============================================================================
# Paths
# =============================================================================

# Path: src/core/config.py -> go up 3 levels to reach project root
PROJECT_ROOT: Path = Path(__file__).parent.parent.parent
DEFAULT_TEMPLATES_DIR: Path = PROJECT_ROOT / "templates"


# =============================================================================
# Configuration Dataclass
# =============================================================================

@dataclass
class Config:
    """
    Bot configuration loaded from environment variables.

    DESIGN:
        Required fields raise ConfigValidationError if missing.
        Optional fields have sensible defaults for development.

    Attributes:
        discord_token: Discord bot authentication token.
        encryption_key: Deployment secret used to decrypt archived fields.
        tickets_url: Public base URL transcripts are linked from.
        transcript_template: Template identifier, e.g. "transcript.md".
        templates_dir: Directory holding "<identifier>.mustache" files.
        default_locale: Locale used when a guild has none or an unknown one.
    """

    # -------------------------------------------------------------------------
    # Required
    # -------------------------------------------------------------------------

    discord_token: str
    encryption_key: str

    # -------------------------------------------------------------------------
    # Optional: Transcripts
    # -------------------------------------------------------------------------

    tickets_url: Optional[str] = None
    transcript_template: str = "transcript.md"
    templates_dir: Path = DEFAULT_TEMPLATES_DIR
    default_locale: str = "en-GB"

    # -------------------------------------------------------------------------
    # Optional: Command Limits
    # -------------------------------------------------------------------------

    autocomplete_limit: int = 25

    # -------------------------------------------------------------------------
    # Optional: Transcript API
    # -------------------------------------------------------------------------

    api_enabled: bool = False
    api_host: str = "0.0.0.0"
    api_port: int = 8087

    # -------------------------------------------------------------------------
    # Optional: Webhooks
    # -------------------------------------------------------------------------

    error_webhook_url: Optional[str] = None


# =============================================================================
# Validation
# =============================================================================

class ConfigValidationError(Exception):
    """
    Raised when required configuration is missing or invalid.

    DESIGN:
        Custom exception type allows callers to distinguish config
        errors from other startup failures.
    """

    pass


def _parse_int_with_default(value: Optional[str], default: int, name: str, min_val: int = None, max_val: int = None) -> int:
    """
    Parse optional integer with default and range validation.

    Args:
        value: String value from environment variable.
        default: Default value if not set or invalid.
        name: Variable name for warning messages.
        min_val: Minimum allowed value (inclusive).
        max_val: Maximum allowed value (inclusive).

    Returns:
        Parsed integer within valid range, or default.
    """
    if not value:
        return default
    try:
        parsed = int(value)
        if min_val is not None and parsed < min_val:
            from src.core.logger import logger
            logger.warning(f"Config {name}={parsed} below min {min_val}, using {min_val}")
            return min_val
        if max_val is not None and parsed > max_val:
            from src.core.logger import logger
            logger.warning(f"Config {name}={parsed} above max {max_val}, using {max_val}")
            return max_val
        return parsed
    except ValueError:
        from src.core.logger import logger
        logger.warning(f"Config {name}='{value}' invalid, using default {default}")
        return default


def _parse_bool(value: Optional[str], default: bool = False) -> bool:
    """Parse "1"/"true"/"yes"/"on" style flags."""
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _validate_url(value: Optional[str], name: str) -> Optional[str]:
    """
    Validate URL format for links and webhooks.

    Args:
        value: URL string to validate.
        name: Variable name for warning messages.

    Returns:
        URL without trailing slash if valid, None if invalid or empty.
    """
    if not value:
        return None
    if not value.startswith(("https://", "http://")):
        from src.core.logger import logger
        logger.warning(f"Config {name} invalid URL format, ignoring")
        return None
    return value.rstrip("/")


# =============================================================================
# Configuration Loading
# =============================================================================

def load_config() -> Config:
    """
    Load and validate configuration from environment variables.

    DESIGN:
        Validates all required variables upfront before creating the
        Config object. This fail-fast approach prevents partial
        initialization and unclear runtime errors.

    Returns:
        Validated Config object with all settings.

    Raises:
        ConfigValidationError: If any required variable is missing or invalid.
    """
    missing = []

    discord_token = os.getenv("DISCORD_TOKEN")
    if not discord_token:
        missing.append("DISCORD_TOKEN")

    encryption_key = os.getenv("ENCRYPTION_KEY")
    if not encryption_key:
        missing.append("ENCRYPTION_KEY")

    if missing:
        raise ConfigValidationError(
            f"Missing required environment variables: {', '.join(missing)}"
        )

    transcript_template = os.getenv("TRANSCRIPT_TEMPLATE", "transcript.md").strip()
    if not transcript_template:
        raise ConfigValidationError("TRANSCRIPT_TEMPLATE must not be empty")

    templates_dir_str = os.getenv("TEMPLATES_DIR")
    templates_dir = Path(templates_dir_str) if templates_dir_str else DEFAULT_TEMPLATES_DIR

    return Config(
        discord_token=discord_token,
        encryption_key=encryption_key,
        tickets_url=_validate_url(os.getenv("TICKETS_URL"), "TICKETS_URL"),
        transcript_template=transcript_template,
        templates_dir=templates_dir,
        default_locale=os.getenv("DEFAULT_LOCALE", "en-GB"),
        autocomplete_limit=_parse_int_with_default(
            os.getenv("AUTOCOMPLETE_LIMIT"), 25, "AUTOCOMPLETE_LIMIT", min_val=1, max_val=25
        ),
        api_enabled=_parse_bool(os.getenv("API_ENABLED")),
        api_host=os.getenv("API_HOST", "0.0.0.0"),
        api_port=_parse_int_with_default(
            os.getenv("API_PORT"), 8087, "API_PORT", min_val=1, max_val=65535
        ),
        error_webhook_url=_validate_url(os.getenv("ERROR_WEBHOOK_URL"), "ERROR_WEBHOOK_URL"),
    )


# =============================================================================
# Global Config Instance
# =============================================================================

_config: Optional[Config] = None


def get_config() -> Config:
    """
    Get the global configuration instance, loading if needed.

    Returns:
        The global Config instance.

    Raises:
        ConfigValidationError: On first call if config is invalid.
    """
    global _config
    if _config is None:
        _config = load_config()
    return _config


def validate_and_log_config() -> None:
    """
    Validate configuration and log results at startup.

    Raises:
        ConfigValidationError: If required configuration is missing.
    """
    from src.core.logger import logger

    config = get_config()

    if not config.tickets_url:
        logger.info("Optional config not set: TICKETS_URL")

    logger.tree("Configuration Validated", [
        ("Required", "✅ All required variables set"),
        ("Template", config.transcript_template),
        ("Templates Dir", str(config.templates_dir)),
        ("Default Locale", config.default_locale),
        ("Transcript API", f"{config.api_host}:{config.api_port}" if config.api_enabled else "Disabled"),
    ], emoji="⚙️")


# =============================================================================
# Module Export
# =============================================================================

__all__ = [
    "UTC_TZ",
    "PROJECT_ROOT",
    "DEFAULT_TEMPLATES_DIR",
    "Config",
    "ConfigValidationError",
    "load_config",
    "get_config",
    "validate_and_log_config",
]
