"""
Custom exceptions for the Vendorflow API.
Provides consistent error handling across the application.
"""
from fastapi import HTTPException, status


class VendorflowException(Exception):
    """Base exception for Vendorflow"""
    def __init__(self, message: str = "An error occurred"):
        self.message = message
        super().__init__(self.message)


class NotFoundError(VendorflowException):
    """Resource not found"""
    def __init__(self, resource: str = "Resource", resource_id: str = None):
        message = f"{resource} not found"
        if resource_id:
            message = f"{resource} with id '{resource_id}' not found"
        super().__init__(message)


class ValidationError(VendorflowException):
    """Validation failed"""
    def __init__(self, message: str = "Validation failed", field: str = None):
        if field:
            message = f"Validation failed for field '{field}': {message}"
        super().__init__(message)


class ConflictError(VendorflowException):
    """Request conflicts with the current state of a resource"""
    def __init__(self, resource: str = "Resource", message: str = None):
        msg = f"{resource} is not in a valid state for this action"
        if message:
            msg = f"{resource}: {message}"
        super().__init__(msg)


# HTTP Exception helpers
def raise_not_found(resource: str = "Resource", resource_id: str = None):
    """Raise 404 HTTPException"""
    err = NotFoundError(resource, resource_id)
    raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=err.message)


def raise_validation_error(message: str = "Validation failed", field: str = None):
    """Raise 422 HTTPException"""
    err = ValidationError(message, field)
    raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=err.message)


def raise_conflict(resource: str = "Resource", message: str = None):
    """Raise 409 HTTPException"""
    err = ConflictError(resource, message)
    raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=err.message)
