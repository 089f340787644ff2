import pytest
from bson import ObjectId

from app.utils.object_id import InvalidProductId, new_product_id, parse_product_id


def test_parse_valid_id():
    raw = "64b7f0c2a1b2c3d4e5f60718"
    assert parse_product_id(raw) == ObjectId(raw)


def test_parse_passes_object_ids_through():
    oid = ObjectId()
    assert parse_product_id(oid) is oid


@pytest.mark.parametrize("raw", ["abc", "64b7f0c2a1b2c3d4e5f6071g", "", "123456789012"])
def test_parse_rejects_malformed_ids(raw):
    with pytest.raises(InvalidProductId) as exc:
        parse_product_id(raw)
    assert str(exc.value) == (
        f'Cast to ObjectId failed for value "{raw}" (type string) '
        'at path "_id" for model "Product"'
    )


def test_parse_rejects_non_strings():
    with pytest.raises(InvalidProductId, match=r"\(type int\)"):
        parse_product_id(42)


def test_new_ids_are_unique_and_parseable():
    a, b = new_product_id(), new_product_id()
    assert a != b
    assert str(parse_product_id(a)) == a
