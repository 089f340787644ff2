import uuid

import mongomock
import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.db import open_store
from app.main import create_app


def make_store(backend):
    if backend == "sql":
        return open_store("sqlite://")
    # fresh database per test so documents never leak between tests
    return open_store(
        f"mongodb://localhost/catalog_{uuid.uuid4().hex}",
        mongo_client_class=mongomock.MongoClient,
    )


def make_settings(**overrides):
    values = {"DATABASE_URL": "sqlite://", "STORE_PING_SECONDS": 0}
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture(params=["sql", "mongo"])
def store(request):
    s = make_store(request.param)
    yield s
    s.close()


@pytest.fixture
def client(store):
    with TestClient(create_app(make_settings(), store)) as c:
        yield c
