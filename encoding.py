"""
Handles the encoding and decoding of database IDs into short, non-sequential,
and reversible strings using the hashids library.

This is obfuscation, not encryption: the salt can be recovered from enough
samples, so never rely on it to protect data that must stay secret.
"""
import logging
import threading
from typing import Optional

from hashids import Hashids

import config
from core_logic import DecodeError, EncodeError, EncoderConfigError, FatalDecodeError

logger = logging.getLogger("hashseq.encoding")

DEFAULT_ALPHABET = config.HASHIDS_DEFAULT_ALPHABET
DEFAULT_MIN_LENGTH = 4
UINT64_LIMIT = config.Config.UINT64_LIMIT


def is_uint64(n) -> bool:
    """True for plain integers in the unsigned 64-bit range (bools excluded)."""
    return isinstance(n, int) and not isinstance(n, bool) and 0 <= n < UINT64_LIMIT


class HashCodec:
    """
    Holds the alphabet, minimum length and salt, and the Hashids encoder
    derived from them.

    The encoder is built lazily by get_encoder() and rebuilt eagerly by
    set_salt(). A lock guards every build so the salt may be changed while
    other threads encode.
    """

    def __init__(self, salt: str = "", min_length: int = DEFAULT_MIN_LENGTH,
                 alphabet: str = DEFAULT_ALPHABET):
        self._salt = salt
        self._min_length = min_length
        self._alphabet = alphabet
        self._hashids: Optional[Hashids] = None
        self._lock = threading.Lock()

    @property
    def salt(self) -> str:
        return self._salt

    @property
    def min_length(self) -> int:
        return self._min_length

    @property
    def alphabet(self) -> str:
        return self._alphabet

    def _build(self, salt: str) -> Hashids:
        if self._min_length < 0:
            raise EncoderConfigError("Minimum length must not be negative")
        if any(c.isspace() for c in self._alphabet):
            raise EncoderConfigError("Alphabet may not contain whitespace")
        try:
            return Hashids(salt=salt, min_length=self._min_length, alphabet=self._alphabet)
        except (TypeError, ValueError) as e:
            raise EncoderConfigError(f"Could not build hashids encoder: {e}") from e

    def get_encoder(self) -> Hashids:
        """Returns the encoder, building it on first use."""
        hashids = self._hashids
        if hashids is not None:
            return hashids
        with self._lock:
            if self._hashids is None:
                try:
                    self._hashids = self._build(self._salt)
                except EncoderConfigError as e:
                    logger.critical(f"Hashids encoder construction failed: {e}")
                    raise
            return self._hashids

    def set_salt(self, salt: str) -> None:
        """
        Replaces the salt and rebuilds the encoder immediately, so a bad
        configuration fails here rather than on the next encode. The same
        salt is a no-op. On failure the previous salt and encoder are kept.
        """
        with self._lock:
            if salt == self._salt:
                return
            try:
                hashids = self._build(salt)
            except EncoderConfigError as e:
                logger.critical(f"Hashids encoder construction failed: {e}")
                raise
            self._salt = salt
            self._hashids = hashids
        logger.info("Hashids salt updated, previously issued hashids are no longer valid")

    def encode(self, n: int) -> str:
        """Encodes a single unsigned 64-bit integer."""
        if not is_uint64(n):
            raise EncodeError(f"Cannot encode {n!r}: expected an integer in [0, 2**64)")
        encoded = self.get_encoder().encode(n)
        if not encoded:
            raise EncodeError(f"Hashids returned an empty string for {n!r}")
        return encoded

    def decode(self, s: str) -> int:
        """
        Decodes a hashid back into its integer. Raises DecodeError when the
        string is malformed, was produced under another salt or alphabet, or
        holds a number outside the unsigned 64-bit range. When the hashid
        encodes several numbers the first one is returned.
        """
        if not isinstance(s, str) or not s:
            raise DecodeError("Cannot decode an empty hashid")
        numbers = self.get_encoder().decode(s)
        if not numbers:
            raise DecodeError(f"Invalid hashid: {s!r}")
        if not is_uint64(numbers[0]):
            raise DecodeError(f"Hashid {s!r} decodes outside the unsigned 64-bit range")
        return numbers[0]


# --- PROCESS-WIDE CODEC ---

_codec = HashCodec(
    salt=config.config.HASHIDS_SALT,
    min_length=config.config.HASHIDS_MIN_LENGTH,
    alphabet=config.config.HASHIDS_ALPHABET,
)


def get_codec() -> HashCodec:
    return _codec


def init_codec(salt: Optional[str] = None, min_length: Optional[int] = None,
               alphabet: Optional[str] = None) -> HashCodec:
    """
    Startup-time initialisation of the process-wide codec. Builds the
    encoder right away so a bad configuration aborts bootstrap instead of
    the first request.
    """
    global _codec
    codec = HashCodec(
        salt=config.config.HASHIDS_SALT if salt is None else salt,
        min_length=config.config.HASHIDS_MIN_LENGTH if min_length is None else min_length,
        alphabet=config.config.HASHIDS_ALPHABET if alphabet is None else alphabet,
    )
    codec.get_encoder()
    _codec = codec
    logger.info(f"Hashids codec initialised (min_length={codec.min_length}, alphabet size={len(codec.alphabet)})")
    return codec


def get_encoder() -> Hashids:
    return _codec.get_encoder()


def set_salt(salt: str) -> None:
    """Set the salt to use for ID obfuscation"""
    _codec.set_salt(salt)


def encode_id(n: int) -> str:
    """Encodes a single integer ID into a short, non-sequential string."""
    return _codec.encode(n)


def decode_id(s: str) -> int | None:
    """Decodes a short string back into an integer ID, or None if invalid."""
    try:
        return _codec.decode(s)
    except DecodeError:
        return None


def decode_string(s: str) -> int:
    return _codec.decode(s)


def decode(data: bytes) -> int:
    """Decodes a hashid given as bytes."""
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise DecodeError(f"Expected bytes, got {type(data).__name__}")
    try:
        s = bytes(data).decode("utf-8")
    except UnicodeDecodeError as e:
        raise DecodeError(f"Hashid is not valid UTF-8: {e}") from e
    return _codec.decode(s)


def must_decode_string(s: str) -> int:
    """
    Decodes input that is already known to be valid. A failure here is a
    programming error and raises FatalDecodeError.
    """
    try:
        return _codec.decode(s)
    except DecodeError as e:
        raise FatalDecodeError(str(e)) from e
