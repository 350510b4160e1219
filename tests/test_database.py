import pytest

import database
from database import get_db_connection, register_adapters
from identifier import ID


@pytest.fixture
def conn():
    """An in-memory database with a table keyed by HASHID columns."""
    connection = get_db_connection(":memory:")
    connection.execute("CREATE TABLE items (id HASHID PRIMARY KEY, parent HASHID, name TEXT)")
    yield connection
    connection.close()


def test_register_adapters_is_idempotent():
    register_adapters()
    register_adapters()
    assert database._registered


def test_ids_are_stored_as_raw_integers(conn, codec):
    conn.execute("INSERT INTO items (id, name) VALUES (?, ?)", (ID(42), "widget"))
    row = conn.execute("SELECT typeof(id) AS kind, id + 0 AS raw FROM items").fetchone()
    assert row["kind"] == "integer"
    assert row["raw"] == 42


def test_hashid_columns_read_back_as_ids(conn, codec):
    conn.execute("INSERT INTO items (id, parent, name) VALUES (?, ?, ?)", (ID(7), ID(3), "child"))
    row = conn.execute("SELECT id, parent, name FROM items").fetchone()
    assert isinstance(row["id"], ID)
    assert row["id"] == ID(7)
    assert row["parent"] == ID(3)


def test_null_hashid_column_reads_back_as_none(conn):
    conn.execute("INSERT INTO items (id, name) VALUES (?, ?)", (ID(1), "orphan"))
    row = conn.execute("SELECT parent FROM items").fetchone()
    assert row["parent"] is None


def test_lookup_by_decoded_hashid(conn, codec):
    conn.execute("INSERT INTO items (id, name) VALUES (?, ?)", (ID(1001), "target"))
    public = str(ID(1001))
    row = conn.execute("SELECT name FROM items WHERE id = ?", (ID.from_hashid(public),)).fetchone()
    assert row["name"] == "target"


def test_values_beyond_signed_64_bit_overflow(conn):
    with pytest.raises(OverflowError):
        conn.execute("INSERT INTO items (id, name) VALUES (?, ?)", (ID(2**63), "too big"))
