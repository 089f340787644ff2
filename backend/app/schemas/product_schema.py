# backend/app/schemas/product_schema.py
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

REQUIRED_MESSAGES = {
    "name": "Product name is required",
    "price": "Product price is required",
    "available": "Product availability is required",
}


class ProductIn(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    name: str = Field(..., min_length=1)
    price: float = Field(..., ge=0, allow_inf_nan=False)
    available: bool = True

    @field_validator("name", "price", "available", mode="before")
    @classmethod
    def _not_null(cls, v, info):
        if v is None:
            raise ValueError(REQUIRED_MESSAGES[info.field_name])
        return v


class ProductUpdate(BaseModel):
    """Partial update: only fields present in the request body are applied."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    name: Optional[str] = Field(None, min_length=1)
    price: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    available: Optional[bool] = None

    # defaults are not validated, so this only fires for an explicit null
    @field_validator("name", "price", "available", mode="before")
    @classmethod
    def _not_null(cls, v, info):
        if v is None:
            raise ValueError(REQUIRED_MESSAGES[info.field_name])
        return v

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


class ProductOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str
    name: str
    price: float
    available: bool


class MessageOut(BaseModel):
    message: str


def _field_message(err: dict) -> str:
    field = str(err["loc"][0]) if err.get("loc") else "body"
    kind = err.get("type")
    if kind == "missing" or (kind == "string_too_short" and field == "name"):
        return REQUIRED_MESSAGES.get(field, f"Path `{field}` is required")
    if kind == "greater_than_equal" and field == "price":
        return "Price cannot be negative"
    if kind == "value_error":
        return str(err["ctx"]["error"])
    return err["msg"]


def validation_message(exc: ValidationError) -> str:
    """Render a pydantic ValidationError as a single human readable line."""
    parts = []
    for err in exc.errors():
        field = str(err["loc"][0]) if err.get("loc") else "body"
        parts.append(f"{field}: {_field_message(err)}")
    return "Product validation failed: " + ", ".join(parts)
