import logging

from fastapi import Request

from app.repositories.product_repo import (
    ProductRepository,
    StoreConfigError,
    StoreError,
)

log = logging.getLogger(__name__)

MONGO_SCHEMES = ("mongodb", "mongodb+srv")


def open_store(url, **kwargs) -> ProductRepository:
    """
    Open the product store named by `url` and check that it answers.

    mongodb:// and mongodb+srv:// URLs use the document store; anything else
    is handed to SQLAlchemy (e.g. sqlite:///./dev.db). Extra keyword
    arguments are passed to the Mongo client.
    """
    if not url:
        raise StoreConfigError(
            "The MongoDB URI is not defined in the environment variables."
        )

    scheme = url.split("://", 1)[0].lower()
    if scheme in MONGO_SCHEMES:
        from app.repositories.mongo_product_repo import MongoProductRepository

        repo = MongoProductRepository.connect(url, **kwargs)
    else:
        from app.repositories.sql_product_repo import SqlProductRepository

        repo = SqlProductRepository.connect(url)

    if not repo.ping():
        repo.close()
        raise StoreError(f"Could not reach the {repo.backend} store")
    return repo


def get_store(request: Request) -> ProductRepository:
    return request.app.state.store
