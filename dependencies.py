"""FastAPI dependencies and lifespan for services exposing hashids."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Path

import config
from core_logic import DecodeError, ResourceNotFoundException, ValidationException, logger
from encoding import get_codec, init_codec
from identifier import ID


@asynccontextmanager
async def codec_lifespan(app: FastAPI):
    """Validates configuration and builds the codec before serving requests"""
    try:
        config.config.validate()
        init_codec()
        logger.info("Hashid codec ready")
        yield
    finally:
        logger.info("Application shutdown complete")


def hashid_path(hashid: str = Path(..., description="The obfuscated identifier")) -> ID:
    """
    Decodes a hashid path parameter. Characters outside the alphabet are a
    malformed request (400); anything else that fails to decode is treated
    as an unknown resource (404).
    """
    alphabet = get_codec().alphabet
    if any(c not in alphabet for c in hashid):
        raise ValidationException("Malformed identifier")
    try:
        return ID.from_hashid(hashid)
    except DecodeError:
        raise ResourceNotFoundException(f"Unknown identifier: {hashid}")
