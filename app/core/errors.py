# app/core/errors.py
from fastapi import status


class CatalogError(Exception):
    """
    Base class for every failure raised by the service layer.

    Each subclass carries the HTTP status the router layer should answer
    with, so handlers never need to inspect the message text.
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(CatalogError):
    """Malformed or missing input."""

    status_code = status.HTTP_400_BAD_REQUEST


class InvalidIdError(ValidationError):
    """Id missing or not numeric."""


class InvalidFilterKeyError(ValidationError):
    pass


class UnauthorizedError(CatalogError):
    """Bad credentials, disabled account, or missing/invalid token."""

    status_code = status.HTTP_401_UNAUTHORIZED


class ForbiddenError(CatalogError):
    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(CatalogError):
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(CatalogError):
    """Uniqueness violation (duplicate email, category name)."""

    status_code = status.HTTP_409_CONFLICT


class StoreError(CatalogError):
    """Unclassified failure from the database or credential layer."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
