import logging
from typing import Any, List

from pydantic import ValidationError

from app.repositories.product_repo import ProductRepository
from app.schemas.product_schema import (
    ProductIn,
    ProductOut,
    ProductUpdate,
    validation_message,
)
from app.utils.object_id import parse_product_id

log = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Product not found"
NOT_AN_OBJECT_MESSAGE = "Product validation failed: body: Request body must be a JSON object"


class ProductServiceException(Exception):
    pass


class ProductValidationError(ProductServiceException):
    pass


class ProductNotFound(ProductServiceException):
    def __init__(self, message: str = NOT_FOUND_MESSAGE):
        super().__init__(message)


class ProductService:
    """
    Create/list/get/update/delete over a single product store.

    Ids are parsed before the store is touched (InvalidProductId), and
    request bodies are validated before any document is built
    (ProductValidationError). StoreError from the repository propagates.
    """

    def __init__(self, repo: ProductRepository):
        self.repo = repo

    def _body(self, payload: Any) -> dict:
        if payload is None:
            return {}
        if not isinstance(payload, dict):
            log.warning("rejected non-object body: %r", payload)
            raise ProductValidationError(NOT_AN_OBJECT_MESSAGE)
        return payload

    def create(self, payload: Any) -> ProductOut:
        body = self._body(payload)
        try:
            data = ProductIn.model_validate(body)
        except ValidationError as e:
            msg = validation_message(e)
            log.warning("create rejected: %s", msg)
            raise ProductValidationError(msg) from e
        product = self.repo.create(data.model_dump())
        log.info("created product %s", product.id)
        return product

    def list(self) -> List[ProductOut]:
        return self.repo.list()

    def get(self, raw_id) -> ProductOut:
        oid = parse_product_id(raw_id)
        product = self.repo.get(oid)
        if not product:
            raise ProductNotFound()
        return product

    def update(self, raw_id, payload: Any) -> ProductOut:
        oid = parse_product_id(raw_id)
        body = self._body(payload)
        try:
            changes = ProductUpdate.model_validate(body).changes()
        except ValidationError as e:
            msg = validation_message(e)
            log.warning("update of %s rejected: %s", raw_id, msg)
            raise ProductValidationError(msg) from e
        product = self.repo.update(oid, changes)
        if not product:
            raise ProductNotFound()
        log.info("updated product %s (%s)", product.id, ", ".join(changes) or "no changes")
        return product

    def delete(self, raw_id) -> ProductOut:
        oid = parse_product_id(raw_id)
        product = self.repo.delete(oid)
        if not product:
            raise ProductNotFound()
        log.info("deleted product %s", product.id)
        return product
