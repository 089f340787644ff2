import pytest
from fastapi.testclient import TestClient

from app.main import create_app
from app.repositories.product_repo import ProductRepository, StoreError
from conftest import make_settings

VALID_ID = "64b7f0c2a1b2c3d4e5f60718"


class UnreachableStore(ProductRepository):
    """Every data operation fails the way a dropped connection would."""

    backend = "broken"

    def _fail(self, *args, **kwargs):
        raise StoreError("connection closed")

    create = list = get = update = delete = _fail

    def ping(self):
        return False

    def close(self):
        pass


@pytest.fixture
def broken_client():
    with TestClient(create_app(make_settings(), UnreachableStore())) as c:
        yield c


def test_create_store_failure_is_conflict(broken_client):
    res = broken_client.post("/api/products", json={"name": "A", "price": 1})
    assert res.status_code == 409
    assert res.json() == {"message": "connection closed"}


def test_create_validation_runs_before_store(broken_client):
    res = broken_client.post("/api/products", json={"name": "A", "price": -1})
    assert res.status_code == 409
    assert "Price cannot be negative" in res.json()["message"]


def test_list_store_failure_is_not_found(broken_client):
    res = broken_client.get("/api/products")
    assert res.status_code == 404
    assert res.json() == {"message": "connection closed"}


@pytest.mark.parametrize(
    "method,kwargs",
    [("get", {}), ("put", {"json": {"price": 3}}), ("delete", {})],
)
def test_single_product_store_failure_is_not_found(broken_client, method, kwargs):
    res = getattr(broken_client, method)(f"/api/products/{VALID_ID}", **kwargs)
    assert res.status_code == 404
    assert res.json() == {"message": "connection closed"}
