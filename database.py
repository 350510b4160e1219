import sqlite3
import logging

from identifier import ID

# --- Constants and Logger ---

logger = logging.getLogger("hashseq.database")

# Declared column type that sqlite3 converts back into ID on read
HASHID_COLUMN_TYPE = "HASHID"

_registered = False

# --- Adapters ---

def adapt_id(id_: ID) -> int:
    """Stores the raw integer, never the hashid."""
    return id_.value()

def convert_hashid(raw: bytes) -> ID:
    """Converter for HASHID columns. sqlite3 hands converters the raw bytes."""
    id_ = ID()
    id_.scan(int(raw))
    return id_

def register_adapters() -> None:
    """Registers the ID adapter and the HASHID converter with sqlite3."""
    global _registered
    if _registered:
        return
    sqlite3.register_adapter(ID, adapt_id)
    sqlite3.register_converter(HASHID_COLUMN_TYPE, convert_hashid)
    _registered = True
    logger.debug("Registered sqlite3 adapters for ID")

# --- Database Connection ---

def get_db_connection(db_file: str = ":memory:") -> sqlite3.Connection:
    """Returns a connection that reads HASHID columns back as ID."""
    register_adapters()
    conn = sqlite3.connect(db_file, detect_types=sqlite3.PARSE_DECLTYPES)
    conn.row_factory = sqlite3.Row
    return conn
