import os

# ============================================================================
# CONFIGURATION CLASS
# ============================================================================

HASHIDS_DEFAULT_ALPHABET = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ1234567890"


class Config:
    """Centralized configuration with validation"""
    # Codec
    HASHIDS_SALT: str = os.getenv("HASHSEQ_SALT", "")
    HASHIDS_MIN_LENGTH: int = int(os.getenv("HASHSEQ_MIN_LENGTH", "4"))
    HASHIDS_ALPHABET: str = os.getenv("HASHSEQ_ALPHABET", HASHIDS_DEFAULT_ALPHABET)

    # Value range of an ID (unsigned 64-bit)
    UINT64_LIMIT: int = 2**64

    # Logging
    LOG_LEVEL: str = os.getenv("HASHSEQ_LOG_LEVEL", "INFO")
    LOG_FILE: str | None = os.getenv("HASHSEQ_LOG_FILE")
    LOG_MAX_BYTES: int = 10_485_760
    LOG_BACKUP_COUNT: int = 5

    @classmethod
    def validate(cls):
        """Validate configuration on startup"""
        if cls.HASHIDS_MIN_LENGTH < 0:
            raise ValueError("HASHSEQ_MIN_LENGTH must not be negative")
        if len(set(cls.HASHIDS_ALPHABET)) < 16:
            raise ValueError("HASHSEQ_ALPHABET must contain at least 16 unique characters")
        if any(c.isspace() for c in cls.HASHIDS_ALPHABET):
            raise ValueError("HASHSEQ_ALPHABET may not contain whitespace")
        if cls.LOG_LEVEL.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown HASHSEQ_LOG_LEVEL: {cls.LOG_LEVEL}")

# ============================================================================
# SINGLETON INSTANCE & DERIVED CONSTANTS
# ============================================================================

config = Config()

# --- Expose class attributes as module constants for convenience ---
for attr in [a for a in dir(config) if not a.startswith('__') and not callable(getattr(config, a))]:
    globals()[attr] = getattr(config, attr)
