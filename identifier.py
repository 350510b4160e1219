"""
The ID value type: an unsigned 64-bit integer that presents itself as a
hashid everywhere it leaves the process (str, JSON, pydantic models) and as
the raw integer where it is stored (database adapters).
"""
import json
import logging

from pydantic_core import core_schema

import encoding
from core_logic import DecodeError, EncodeError, ScanTypeError

logger = logging.getLogger("hashseq.identifier")


class ID:
    """ID masking using hash ids. Wraps a uint64; compares and hashes like it."""

    __slots__ = ("_value",)

    def __init__(self, value: int = 0):
        if not isinstance(value, int) or isinstance(value, bool):
            raise TypeError(f"ID expects an int, got {type(value).__name__}")
        if not encoding.is_uint64(value):
            raise ValueError(f"ID value {value} is outside the unsigned 64-bit range")
        self._value = value

    @classmethod
    def from_hashid(cls, hashid: str) -> "ID":
        return cls(encoding.decode_string(hashid))

    def uint64(self) -> int:
        return self._value

    def __int__(self) -> int:
        return self._value

    def __index__(self) -> int:
        return self._value

    def __eq__(self, other):
        if isinstance(other, ID):
            return self._value == other._value
        if isinstance(other, int) and not isinstance(other, bool):
            return self._value == other
        return NotImplemented

    def __hash__(self):
        return hash(self._value)

    def __repr__(self):
        return f"ID({self._value})"

    def __str__(self):
        # Legacy behaviour: an encode failure renders as an empty string.
        # Use encode() when the failure matters.
        try:
            return self.encode()
        except EncodeError as e:
            logger.debug(f"Suppressed encode failure for {self!r}: {e}")
            return ""

    def encode(self) -> str:
        """Return the hashid as an obfuscated string"""
        return encoding.encode_id(self._value)

    # --- JSON ---

    def marshal_json(self) -> bytes:
        """Returns the hashid as a JSON string literal."""
        return json.dumps(self.encode()).encode("utf-8")

    def unmarshal_json(self, data) -> None:
        """Parse a JSON string holding a hashid and take on its integer."""
        try:
            hashid = json.loads(data)
        except (TypeError, ValueError) as e:
            raise DecodeError(f"Malformed JSON for ID: {e}") from e
        if not isinstance(hashid, str):
            raise DecodeError(f"Expected a JSON string for ID, got {type(hashid).__name__}")
        self._value = encoding.decode_string(hashid)

    # --- Database driver ---

    def scan(self, value) -> None:
        """Take on a value read from the database. None leaves the ID unchanged."""
        if value is None:
            return
        if not isinstance(value, int) or isinstance(value, bool):
            raise ScanTypeError(f"Invalid format: can't convert {type(value).__name__} into ID")
        if not encoding.is_uint64(value):
            raise ScanTypeError(f"Invalid format: {value} is outside the unsigned 64-bit range of ID")
        self._value = value

    def value(self) -> int:
        """This is called when saving the ID to a database"""
        return self._value

    # --- pydantic ---

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type, handler):
        from_hashid = core_schema.no_info_after_validator_function(
            cls.from_hashid, core_schema.str_schema()
        )
        from_int = core_schema.no_info_after_validator_function(
            cls, core_schema.int_schema(strict=True, ge=0)
        )
        return core_schema.json_or_python_schema(
            json_schema=from_hashid,
            python_schema=core_schema.union_schema(
                [core_schema.is_instance_schema(cls), from_int, from_hashid]
            ),
            serialization=core_schema.plain_serializer_function_ser_schema(
                cls.encode, when_used="json"
            ),
        )


class IDJSONEncoder(json.JSONEncoder):
    """json.dumps(..., cls=IDJSONEncoder) renders every ID as its hashid."""

    def default(self, o):
        if isinstance(o, ID):
            return o.encode()
        return super().default(o)
