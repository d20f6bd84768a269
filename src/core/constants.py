"""
Scribe - Centralized Constants
==============================

All magic numbers and constants are defined here for maintainability.
Import from this module instead of hardcoding values.
"""

# =============================================================================
# Database Constants
# =============================================================================

# SQLite connection timeout (seconds)
DB_CONNECTION_TIMEOUT = 30.0

# SQLite busy timeout (milliseconds)
SQLITE_BUSY_TIMEOUT = 5000

# =============================================================================
# Encryption Constants
# =============================================================================

# Field ciphertext layout: salt | iv | tag | ciphertext (hex encoded)
CIPHER_SALT_LENGTH = 64
CIPHER_IV_LENGTH = 16
CIPHER_TAG_LENGTH = 16
CIPHER_KEY_LENGTH = 32
CIPHER_PBKDF2_ITERATIONS = 100_000

# =============================================================================
# Transcript Constants
# =============================================================================

# Locale used when the guild locale is missing or unknown
FALLBACK_LOCALE = "en-GB"

# Line appended to a message for each embed (embed bodies are not rendered)
EMBED_PLACEHOLDER = "[embedded content]"

# Prefix of thread labels (M1, M2, ...)
MESSAGE_LABEL_PREFIX = "M"

# Separator used when joining pinned message labels
PINNED_SEPARATOR = ", "

# Template file suffix appended to the configured template identifier
TEMPLATE_SUFFIX = ".mustache"

# =============================================================================
# Discord Limits
# =============================================================================

# Maximum autocomplete choices Discord accepts
MAX_AUTOCOMPLETE_CHOICES = 25

# Maximum length of an autocomplete choice name
MAX_CHOICE_NAME_LENGTH = 100

# =============================================================================
# Embed Colors
# =============================================================================

COLOR_GOLD = 0xE6B84A
