from fastapi import APIRouter, Depends

from app.db import get_store
from app.repositories.product_repo import ProductRepository

router = APIRouter()


@router.get("/health", tags=["health"])
def health(store: ProductRepository = Depends(get_store)):
    db_ok = store.ping()
    return {
        "status": "ok" if db_ok else "degraded",
        "db": db_ok,
        "backend": store.backend,
    }
