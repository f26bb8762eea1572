from typing import Annotated

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.orm import Session

from app.api.errors import error_boundary
from app.database import get_db
from app.services.product_service import ProductService
from app.schemas.product import (
    ErrorResponse,
    MessageEnvelope,
    ProductCreate,
    ProductEnvelope,
    ProductListEnvelope,
    ProductResponse,
    ProductUpdate,
    ValidationErrorResponse,
)

router = APIRouter(prefix="/products", tags=["Products"])

DELETED_MESSAGE = "Producto Eliminado"

INVALID_INPUT = {400: {"model": ValidationErrorResponse, "description": "Bad Request - invalid input data"}}
INVALID_ID = {400: {"model": ValidationErrorResponse, "description": "Bad Request - Invalid ID"}}
NOT_FOUND = {404: {"model": ErrorResponse, "description": "Product Not Found"}}
SERVER_ERROR = {500: {"model": ErrorResponse, "description": "Internal server error"}}

# Row IDs are 64-bit signed integers in every supported database.
MAX_ID = 2**63 - 1

ProductId = Annotated[
    int,
    Path(description="The ID of the product", ge=-MAX_ID - 1, le=MAX_ID, examples=[1]),
]


@router.get(
    "",
    response_model=ProductListEnvelope,
    responses={**SERVER_ERROR},
    summary="Get a list of products",
    description="Return every product, newest first."
)
@error_boundary
def get_products(db: Session = Depends(get_db)):
    """List all products ordered by descending ID."""
    service = ProductService(db)
    products = service.get_all()
    return ProductListEnvelope(data=[ProductResponse.model_validate(p) for p in products])


@router.get(
    "/{product_id}",
    response_model=ProductEnvelope,
    responses={**INVALID_ID, **NOT_FOUND, **SERVER_ERROR},
    summary="Get a product by ID",
    description="Return a product based on its unique ID."
)
@error_boundary
def get_product_by_id(
    product_id: ProductId,
    db: Session = Depends(get_db)
):
    service = ProductService(db)
    product = service.get_by_id(product_id)
    return ProductEnvelope(data=ProductResponse.model_validate(product))


@router.post(
    "",
    response_model=ProductEnvelope,
    status_code=status.HTTP_201_CREATED,
    responses={**INVALID_INPUT, **SERVER_ERROR},
    summary="Creates a new product",
    description="Store a new product and return it with its assigned ID."
)
@error_boundary
def create_product(
    product_data: ProductCreate,
    db: Session = Depends(get_db)
):
    """
    Create a new product.

    - **name**: Product name, must not be empty (required)
    - **price**: Product price, must be greater than 0 (required)
    - **availability**: Defaults to true (optional)
    """
    service = ProductService(db)
    product = service.create(product_data)
    return ProductEnvelope(data=ProductResponse.model_validate(product))


@router.put(
    "/{product_id}",
    response_model=ProductEnvelope,
    responses={**INVALID_INPUT, **NOT_FOUND, **SERVER_ERROR},
    summary="Updates a product with user input",
    description="Replace name, price and availability of a product and return it."
)
@error_boundary
def update_product(
    product_data: ProductUpdate,
    product_id: ProductId,
    db: Session = Depends(get_db)
):
    """
    Update a product.

    All fields are required; this is a full replacement, not a partial update.
    """
    service = ProductService(db)
    product = service.update(product_id, product_data)
    return ProductEnvelope(data=ProductResponse.model_validate(product))


@router.patch(
    "/{product_id}",
    response_model=ProductEnvelope,
    responses={**INVALID_ID, **NOT_FOUND, **SERVER_ERROR},
    summary="Update Product availability",
    description="Flip the availability of a product and return it."
)
@error_boundary
def update_availability(
    product_id: ProductId,
    db: Session = Depends(get_db)
):
    service = ProductService(db)
    product = service.toggle_availability(product_id)
    return ProductEnvelope(data=ProductResponse.model_validate(product))


@router.delete(
    "/{product_id}",
    response_model=MessageEnvelope,
    responses={**INVALID_ID, **NOT_FOUND, **SERVER_ERROR},
    summary="Deletes a Product by a given ID",
    description="Delete a product and return a confirmation message."
)
@error_boundary
def delete_product(
    product_id: ProductId,
    db: Session = Depends(get_db)
):
    """Delete a product."""
    service = ProductService(db)
    service.delete(product_id)
    return MessageEnvelope(data=DELETED_MESSAGE)
