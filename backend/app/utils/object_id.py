from bson import ObjectId


class InvalidProductId(ValueError):
    pass


def parse_product_id(raw) -> ObjectId:
    """
    Turn a path parameter into an ObjectId.

    Raises InvalidProductId when the value is not a 24 character hex string,
    using the same wording the document store uses for a failed cast.
    """
    if isinstance(raw, ObjectId):
        return raw
    if not isinstance(raw, str) or not ObjectId.is_valid(raw):
        kind = "string" if isinstance(raw, str) else type(raw).__name__
        raise InvalidProductId(
            f'Cast to ObjectId failed for value "{raw}" (type {kind}) '
            f'at path "_id" for model "Product"'
        )
    return ObjectId(raw)


def new_product_id() -> str:
    return str(ObjectId())
