import asyncio

import pytest
from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient
from pydantic import BaseModel

import config
import encoding
from dependencies import codec_lifespan, hashid_path
from encoding import HashCodec, encode_id
from identifier import ID

LIFESPAN_SALT = "lifespan salt"


class ItemResponse(BaseModel):
    id: ID
    raw: int


def _make_test_app() -> FastAPI:
    app = FastAPI(lifespan=codec_lifespan)

    @app.get("/items/{hashid}", response_model=ItemResponse)
    async def read_item(item_id: ID = Depends(hashid_path)):
        return ItemResponse(id=item_id, raw=item_id.value())

    return app


@pytest.fixture
def client(codec, monkeypatch):
    """A test client whose lifespan initialises the codec from config."""
    monkeypatch.setattr(config.Config, "HASHIDS_SALT", LIFESPAN_SALT)
    with TestClient(_make_test_app()) as test_client:
        yield test_client


def test_lifespan_initialises_codec_from_config(client):
    assert encoding.get_codec().salt == LIFESPAN_SALT
    assert encoding.get_codec()._hashids is not None


def test_valid_hashid_resolves(client):
    hashid = encode_id(12345)
    response = client.get(f"/items/{hashid}")
    assert response.status_code == 200
    assert response.json() == {"id": hashid, "raw": 12345}


def test_malformed_hashid_is_a_bad_request(client):
    response = client.get("/items/bad!id")
    assert response.status_code == 400
    assert response.json()["detail"] == "Malformed identifier"


def test_foreign_hashid_is_not_found(client):
    foreign = HashCodec(salt="another deployment").encode(12345)
    response = client.get(f"/items/{foreign}")
    assert response.status_code == 404
    assert foreign in response.json()["detail"]


def test_lifespan_rejects_invalid_configuration(codec, monkeypatch):
    monkeypatch.setattr(config.Config, "HASHIDS_ALPHABET", "abc")

    async def start():
        async with codec_lifespan(FastAPI()):
            pass

    with pytest.raises(ValueError):
        asyncio.run(start())
    assert encoding.get_codec() is codec
