import logging
from typing import List, Optional

from bson import ObjectId
from mongoengine import connect, disconnect
from mongoengine.connection import ConnectionFailure
from mongoengine.errors import OperationError, ValidationError
from pymongo.errors import PyMongoError

from app.models.product_document import MONGO_ALIAS, ProductDocument
from app.repositories.product_repo import ProductRepository, StoreError
from app.schemas.product_schema import ProductOut

log = logging.getLogger(__name__)

# errors the driver or the ODM may raise for a single operation
DRIVER_ERRORS = (PyMongoError, ConnectionFailure, OperationError, ValidationError)


def _to_out(doc: ProductDocument) -> ProductOut:
    return ProductOut(
        id=str(doc.id), name=doc.name, price=doc.price, available=doc.available
    )


class MongoProductRepository(ProductRepository):
    backend = "mongodb"

    def __init__(self, client, alias: str = MONGO_ALIAS):
        self.client = client
        self.alias = alias

    @classmethod
    def connect(cls, uri: str, **client_kwargs) -> "MongoProductRepository":
        """
        Register the mongoengine connection used by ProductDocument.

        Extra keyword arguments go to the client constructor, e.g.
        serverSelectionTimeoutMS, or mongo_client_class for an in-process
        client.
        """
        # a previous handle may not have been closed (e.g. a failed startup)
        disconnect(alias=MONGO_ALIAS)
        try:
            client = connect(host=uri, alias=MONGO_ALIAS, **client_kwargs)
        except DRIVER_ERRORS as e:
            raise StoreError(str(e)) from e
        return cls(client)

    def create(self, fields: dict) -> ProductOut:
        try:
            doc = ProductDocument(**fields)
            doc.save()
        except DRIVER_ERRORS as e:
            raise StoreError(str(e)) from e
        return _to_out(doc)

    def list(self) -> List[ProductOut]:
        try:
            return [_to_out(doc) for doc in ProductDocument.objects()]
        except DRIVER_ERRORS as e:
            raise StoreError(str(e)) from e

    def _find(self, oid: ObjectId) -> Optional[ProductDocument]:
        return ProductDocument.objects(id=oid).first()

    def get(self, oid: ObjectId) -> Optional[ProductOut]:
        try:
            doc = self._find(oid)
        except DRIVER_ERRORS as e:
            raise StoreError(str(e)) from e
        return _to_out(doc) if doc else None

    def update(self, oid: ObjectId, changes: dict) -> Optional[ProductOut]:
        try:
            doc = self._find(oid)
            if not doc:
                return None
            for key, value in changes.items():
                setattr(doc, key, value)
            if changes:
                doc.save()
        except DRIVER_ERRORS as e:
            raise StoreError(str(e)) from e
        return _to_out(doc)

    def delete(self, oid: ObjectId) -> Optional[ProductOut]:
        try:
            doc = self._find(oid)
            if not doc:
                return None
            out = _to_out(doc)
            doc.delete()
        except DRIVER_ERRORS as e:
            raise StoreError(str(e)) from e
        return out

    def ping(self) -> bool:
        try:
            self.client.server_info()
            return True
        except PyMongoError:
            log.warning("MongoDB ping failed", exc_info=True)
            return False

    def close(self) -> None:
        disconnect(alias=self.alias)
