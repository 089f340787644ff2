import importlib.util
import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from app.schemas.product_schema import ProductIn, validation_message
from app.services.product_service import (
    ProductNotFound,
    ProductService,
    ProductValidationError,
)
from app.utils.object_id import InvalidProductId

SEED_SCRIPT = Path(__file__).resolve().parents[1] / "scripts" / "seed_products.py"


def _load_seed_module():
    loader_spec = importlib.util.spec_from_file_location("seed_products", SEED_SCRIPT)
    module = importlib.util.module_from_spec(loader_spec)
    loader_spec.loader.exec_module(module)
    return module


def test_validation_message_lists_every_failure():
    with pytest.raises(ValidationError) as exc:
        ProductIn.model_validate({"name": " ", "price": -2})
    assert validation_message(exc.value) == (
        "Product validation failed: name: Product name is required, "
        "price: Price cannot be negative"
    )


def test_service_crud(store):
    svc = ProductService(store)
    created = svc.create({"name": "Tea", "price": 3})
    assert created.available is True
    assert svc.get(created.id) == created

    updated = svc.update(created.id, {"available": False})
    assert updated.model_dump() == {
        "id": created.id,
        "name": "Tea",
        "price": 3.0,
        "available": False,
    }
    assert [p.id for p in svc.list()] == [created.id]

    svc.delete(created.id)
    with pytest.raises(ProductNotFound, match="Product not found"):
        svc.get(created.id)
    assert svc.list() == []


def test_service_ignores_unknown_fields(store):
    svc = ProductService(store)
    created = svc.create({"name": "Tea", "price": 3, "colour": "green", "id": "nope"})
    assert created.id != "nope"
    assert "colour" not in created.model_dump()


def test_service_checks_id_before_body(store):
    svc = ProductService(store)
    with pytest.raises(InvalidProductId):
        svc.update("bad", {"price": -1})


def test_service_rejects_invalid_create(store):
    svc = ProductService(store)
    with pytest.raises(ProductValidationError):
        svc.create(None)
    assert svc.list() == []


def test_seed_creates_valid_entries_and_reports_the_rest(store, tmp_path):
    seed_products = _load_seed_module()
    source = tmp_path / "catalogue.json"
    source.write_text(
        json.dumps(
            {
                "products": [
                    {"name": "Tea 100g", "price": 3.0},
                    {"name": "Coffee 200g", "price": 6.0, "available": False},
                    {"name": "Broken", "price": -1},
                    "not a product",
                ]
            }
        )
    )

    created, skipped = seed_products.seed(store, seed_products.load_entries(source))

    assert sorted(p.name for p in created) == ["Coffee 200g", "Tea 100g"]
    assert [i for i, _ in skipped] == [2, 3]
    assert "Price cannot be negative" in skipped[0][1]
    assert len(store.list()) == 2


def test_seed_main_reports_unreadable_file(tmp_path, capsys):
    seed_products = _load_seed_module()
    rc = seed_products.main(["--file", str(tmp_path / "missing.json"), "--url", "sqlite://"])
    assert rc == 1
    assert "Could not read" in capsys.readouterr().err
