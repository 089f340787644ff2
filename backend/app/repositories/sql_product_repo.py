import logging
from typing import List, Optional

from bson import ObjectId
from sqlalchemy import create_engine, text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.db.base import Base
from app.models.product import Product
from app.repositories.product_repo import ProductRepository, StoreError
from app.schemas.product_schema import ProductOut
from app.utils.object_id import new_product_id
from app.utils.transactions import session_scope

log = logging.getLogger(__name__)


def _to_out(p: Product) -> ProductOut:
    return ProductOut.model_validate(p)


class SqlProductRepository(ProductRepository):
    backend = "sql"

    def __init__(self, engine):
        self.engine = engine
        self.SessionLocal = sessionmaker(
            autocommit=False, autoflush=False, expire_on_commit=False, bind=engine
        )

    @classmethod
    def connect(cls, url: str) -> "SqlProductRepository":
        kwargs = {"future": True, "echo": False}
        try:
            parsed = make_url(url)
        except SQLAlchemyError as e:
            raise StoreError(str(e)) from e
        if parsed.get_backend_name() == "sqlite":
            kwargs["connect_args"] = {"check_same_thread": False}
            # an in-memory database only lives as long as its connection
            if parsed.database in (None, "", ":memory:"):
                kwargs["poolclass"] = StaticPool
        try:
            engine = create_engine(url, **kwargs)
            Base.metadata.create_all(bind=engine)
        except SQLAlchemyError as e:
            raise StoreError(str(e)) from e
        log.info("SQL store ready (%s)", parsed.render_as_string(hide_password=True))
        return cls(engine)

    def create(self, fields: dict) -> ProductOut:
        try:
            with session_scope(self.SessionLocal) as db:
                p = Product(id=new_product_id(), **fields)
                db.add(p)
                db.flush()
                return _to_out(p)
        except SQLAlchemyError as e:
            raise StoreError(str(e)) from e

    def list(self) -> List[ProductOut]:
        try:
            with session_scope(self.SessionLocal) as db:
                return [_to_out(p) for p in db.query(Product).all()]
        except SQLAlchemyError as e:
            raise StoreError(str(e)) from e

    def get(self, oid: ObjectId) -> Optional[ProductOut]:
        try:
            with session_scope(self.SessionLocal) as db:
                p = db.get(Product, str(oid))
                return _to_out(p) if p else None
        except SQLAlchemyError as e:
            raise StoreError(str(e)) from e

    def update(self, oid: ObjectId, changes: dict) -> Optional[ProductOut]:
        try:
            with session_scope(self.SessionLocal) as db:
                p = db.get(Product, str(oid))
                if not p:
                    return None
                for key, value in changes.items():
                    setattr(p, key, value)
                db.flush()
                return _to_out(p)
        except SQLAlchemyError as e:
            raise StoreError(str(e)) from e

    def delete(self, oid: ObjectId) -> Optional[ProductOut]:
        try:
            with session_scope(self.SessionLocal) as db:
                p = db.get(Product, str(oid))
                if not p:
                    return None
                out = _to_out(p)
                db.delete(p)
                return out
        except SQLAlchemyError as e:
            raise StoreError(str(e)) from e

    def ping(self) -> bool:
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError:
            log.warning("SQL store ping failed", exc_info=True)
            return False

    def close(self) -> None:
        self.engine.dispose()
