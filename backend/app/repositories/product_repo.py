from abc import ABC, abstractmethod
from typing import List, Optional

from bson import ObjectId

from app.schemas.product_schema import ProductOut


class StoreError(Exception):
    """Raised when the underlying store fails; carries the driver's message."""


class StoreConfigError(StoreError):
    pass


class ProductRepository(ABC):
    """
    Handle on the product store. One instance is opened at startup, held by
    the application for its lifetime and closed at shutdown.

    get/update/delete return None when the id is well formed but matches
    nothing; driver failures surface as StoreError.
    """

    backend: str = "unknown"

    @abstractmethod
    def create(self, fields: dict) -> ProductOut: ...

    @abstractmethod
    def list(self) -> List[ProductOut]: ...

    @abstractmethod
    def get(self, oid: ObjectId) -> Optional[ProductOut]: ...

    @abstractmethod
    def update(self, oid: ObjectId, changes: dict) -> Optional[ProductOut]: ...

    @abstractmethod
    def delete(self, oid: ObjectId) -> Optional[ProductOut]: ...

    @abstractmethod
    def ping(self) -> bool: ...

    @abstractmethod
    def close(self) -> None: ...
