"""
Application exceptions.

Each exception carries the HTTP status code and the message sent to the
client under the `error` key.
"""

from fastapi import status

PRODUCT_NOT_FOUND_MESSAGE = "Producto No Encontrado"
INTERNAL_ERROR_MESSAGE = "Error interno del servidor"


class AppError(Exception):
    """Base exception for all application errors."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ProductNotFoundError(AppError):
    """Raised when the requested product doesn't exist."""

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, product_id: int):
        self.product_id = product_id
        super().__init__(PRODUCT_NOT_FOUND_MESSAGE)


class StorageError(AppError):
    """Raised when the database fails while serving a request."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(INTERNAL_ERROR_MESSAGE)


class InternalServerError(AppError):
    """Raised for any unexpected failure escaping a request handler."""

    def __init__(self):
        super().__init__(INTERNAL_ERROR_MESSAGE)
