"""
Error responses for the API.

Domain exceptions become `{"error": message}` bodies with their status
code, and request validation failures become 400 responses listing each
rejected value under `errors`.
"""

import logging
import math
from functools import wraps

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.exceptions import AppError, InternalServerError

logger = logging.getLogger(__name__)

ID_MESSAGE = "ID No valido"
NAME_MESSAGE = "El nombre de Producto no puede ir vacio"
PRICE_TYPE_MESSAGE = "El precio debe ser Numerico"
PRICE_MISSING_MESSAGE = "El precio de Producto no puede ir vacio"
PRICE_RANGE_MESSAGE = "El precio no puede ser menor a 0"
AVAILABILITY_MESSAGE = "valor para disponibilidad no valido"

# Messages per field, keyed by pydantic error type. "*" matches any type.
FIELD_MESSAGES = {
    "product_id": {"*": ID_MESSAGE},
    "name": {"*": NAME_MESSAGE},
    "price": {
        "missing": PRICE_MISSING_MESSAGE,
        "greater_than": PRICE_RANGE_MESSAGE,
        "*": PRICE_TYPE_MESSAGE,
    },
    "availability": {"*": AVAILABILITY_MESSAGE},
}


def json_safe(value):
    """Replace non-finite floats, which JSON cannot carry, with their text."""
    if isinstance(value, float) and not math.isfinite(value):
        return str(value)
    if isinstance(value, dict):
        return {key: json_safe(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [json_safe(item) for item in value]
    return value


def format_validation_error(error: dict) -> dict:
    """Convert one pydantic error into the public error item shape."""
    loc = error.get("loc", ())
    location = str(loc[0]) if loc else ""
    param = ".".join(str(part) for part in loc[1:])
    error_type = error.get("type", "")

    messages = FIELD_MESSAGES.get(param, {})
    msg = messages.get(error_type) or messages.get("*") or error.get("msg", "")

    return {
        "type": "field",
        "value": json_safe(error.get("input")),
        "msg": msg,
        "param": param,
        "location": location,
    }


def error_boundary(func):
    """
    Guarantee a response from a request handler.

    Application errors pass through to the registered handlers; anything
    else is logged and reported as a 500.
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except AppError:
            raise
        except Exception as e:
            logger.exception(f"Unhandled error in {func.__name__}: {e}")
            raise InternalServerError() from e
    return wrapper


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Render an application exception as `{"error": message}`."""
    if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render request validation failures as a 400 with the error list."""
    errors = [format_validation_error(error) for error in exc.errors()]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=jsonable_encoder({"errors": errors}),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the API's exception handlers to the application."""
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
