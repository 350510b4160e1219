import logging
from logging.handlers import RotatingFileHandler

from fastapi import HTTPException, status

import config

# --- LOGGING SETUP ---

def setup_logging() -> logging.Logger:
    """Configure the package logger, with rotation when a log file is set"""
    logger = logging.getLogger("hashseq")
    logger.setLevel(config.config.LOG_LEVEL.upper())

    if not logger.handlers:
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s'
        )

        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

        if config.config.LOG_FILE:
            file_handler = RotatingFileHandler(
                config.config.LOG_FILE,
                maxBytes=config.config.LOG_MAX_BYTES,
                backupCount=config.config.LOG_BACKUP_COUNT
            )
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

    return logger

logger = setup_logging()

# --- CODEC EXCEPTIONS ---

class HashIDError(Exception):
    """Base class for every hashid codec failure."""

class EncoderConfigError(HashIDError, RuntimeError):
    """The Hashids encoder could not be built from the current configuration."""

class EncodeError(HashIDError, ValueError):
    pass

class DecodeError(HashIDError, ValueError):
    pass

class FatalDecodeError(HashIDError, RuntimeError):
    """
    Raised by must_decode_string. Not a DecodeError, so handlers written for
    untrusted input never catch it.
    """

class ScanTypeError(HashIDError, TypeError):
    pass

# --- HTTP EXCEPTIONS (USED BY DEPENDENCIES) ---

class ValidationException(HTTPException):
    def __init__(self, detail: str):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)

class ResourceNotFoundException(HTTPException):
    def __init__(self, detail: str = "Resource not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)
