from pydantic import BaseModel, Field, ConfigDict, field_validator
from datetime import datetime
from typing import Any, Optional

# Accepted spellings of a boolean availability flag.
BOOLEAN_STRINGS = {"true", "false", "0", "1"}


def check_boolean(value: Any) -> Any:
    """Allow only true/false, 0/1 and their string forms."""
    if isinstance(value, bool):
        return value
    if type(value) is int and value in (0, 1):
        return value
    if isinstance(value, str) and value in BOOLEAN_STRINGS:
        return value
    raise ValueError("availability must be true, false, 0 or 1")


class ProductBase(BaseModel):
    """Base schema for Product with common attributes."""
    # Numeric names are stored as their text.
    model_config = ConfigDict(coerce_numbers_to_str=True)

    name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Product name",
        examples=["Monitor Curvo de 49 Pulgadas"],
    )
    price: float = Field(
        ...,
        gt=0,
        allow_inf_nan=False,
        description="Product price (must be positive)",
        examples=[300],
    )


class ProductCreate(ProductBase):
    """Schema for creating a new product. Availability defaults to true."""
    availability: bool = Field(True, description="Product availability", examples=[True])

    @field_validator("availability", mode="before")
    @classmethod
    def check_availability(cls, value: Any) -> Any:
        return check_boolean(value)


class ProductUpdate(ProductBase):
    """Schema for replacing every mutable field of a product."""
    availability: bool = Field(..., description="Product availability", examples=[True])

    @field_validator("availability", mode="before")
    @classmethod
    def check_availability(cls, value: Any) -> Any:
        return check_boolean(value)


class ProductResponse(ProductBase):
    """Schema for product response including all fields."""
    id: int = Field(..., description="The Product ID", examples=[1])
    availability: bool = Field(..., description="Product availability", examples=[True])
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ProductEnvelope(BaseModel):
    """Single product wrapped under `data`."""
    data: ProductResponse


class ProductListEnvelope(BaseModel):
    """Product list wrapped under `data`, newest first."""
    data: list[ProductResponse]


class MessageEnvelope(BaseModel):
    """Confirmation message wrapped under `data`."""
    data: str = Field(..., examples=["Producto Eliminado"])


class ErrorResponse(BaseModel):
    """Body returned for 404 and 500 responses."""
    error: str = Field(..., examples=["Producto No Encontrado"])


class ValidationErrorItem(BaseModel):
    """One rejected input value."""
    type: str = Field(..., examples=["field"])
    value: Optional[Any] = None
    msg: str = Field(..., examples=["El precio no puede ser menor a 0"])
    param: str = Field(..., examples=["price"])
    location: str = Field(..., examples=["body"])


class ValidationErrorResponse(BaseModel):
    """Body returned for 400 responses."""
    errors: list[ValidationErrorItem]
