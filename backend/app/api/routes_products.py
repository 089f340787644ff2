from typing import Any, List

from fastapi import APIRouter, Body, Depends, status
from fastapi.responses import JSONResponse

from app.db import get_store
from app.repositories.product_repo import ProductRepository, StoreError
from app.schemas.product_schema import MessageOut, ProductOut
from app.services.product_service import (
    ProductNotFound,
    ProductService,
    ProductValidationError,
)
from app.utils.object_id import InvalidProductId

router = APIRouter(tags=["products"])

PRODUCT_BODY_EXAMPLE = {"name": "Widget", "price": 9.99, "available": True}
NOT_FOUND = {404: {"model": MessageOut, "description": "Product not found"}}


def _message(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message})


@router.post(
    "",
    summary="Create a product",
    status_code=status.HTTP_201_CREATED,
    response_model=ProductOut,
    responses={409: {"model": MessageOut, "description": "Validation failed"}},
)
def create_product(
    payload: Any = Body(None, examples=[PRODUCT_BODY_EXAMPLE]),
    store: ProductRepository = Depends(get_store),
):
    """Body: { "name": str, "price": number >= 0, "available": bool (default true) }"""
    svc = ProductService(store)
    try:
        return svc.create(payload)
    except (ProductValidationError, StoreError) as e:
        return _message(status.HTTP_409_CONFLICT, str(e))


@router.get(
    "",
    summary="List all products",
    response_model=List[ProductOut],
    responses={404: {"model": MessageOut}},
)
def list_products(store: ProductRepository = Depends(get_store)):
    svc = ProductService(store)
    try:
        return svc.list()
    except StoreError as e:
        return _message(status.HTTP_404_NOT_FOUND, str(e))


@router.get(
    "/{product_id}",
    summary="Get a product by id",
    response_model=ProductOut,
    responses=NOT_FOUND,
)
def get_product(product_id: str, store: ProductRepository = Depends(get_store)):
    svc = ProductService(store)
    try:
        return svc.get(product_id)
    except (InvalidProductId, ProductNotFound, StoreError) as e:
        return _message(status.HTTP_404_NOT_FOUND, str(e))


@router.put(
    "/{product_id}",
    summary="Update a product",
    response_model=ProductOut,
    responses=NOT_FOUND,
)
def update_product(
    product_id: str,
    payload: Any = Body(None, examples=[PRODUCT_BODY_EXAMPLE]),
    store: ProductRepository = Depends(get_store),
):
    """
    Replaces the fields present in the body; omitted fields keep their
    stored values. Validation failures are reported as 404 like a missing id.
    """
    svc = ProductService(store)
    try:
        return svc.update(product_id, payload)
    except (
        InvalidProductId,
        ProductNotFound,
        ProductValidationError,
        StoreError,
    ) as e:
        return _message(status.HTTP_404_NOT_FOUND, str(e))


@router.delete(
    "/{product_id}",
    summary="Delete a product",
    response_model=MessageOut,
    responses=NOT_FOUND,
)
def delete_product(product_id: str, store: ProductRepository = Depends(get_store)):
    svc = ProductService(store)
    try:
        svc.delete(product_id)
    except (InvalidProductId, ProductNotFound, StoreError) as e:
        return _message(status.HTTP_404_NOT_FOUND, str(e))
    return {"message": "Product deleted successfully"}
