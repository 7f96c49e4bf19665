"""Standardized API Response Schemas"""

from typing import Generic, List, TypeVar
from pydantic import BaseModel


T = TypeVar('T')


class SuccessResponse(BaseModel, Generic[T]):
    """
    Standard success response envelope.

    Example:
        {
            "success": true,
            "data": {...},
            "message": "Data inserted successfully"
        }
    """
    success: bool = True
    data: T
    message: str = "Operation successful"


class FieldError(BaseModel):
    """A single violated field and the reason it was rejected"""
    field: str
    message: str
    type: str


class ValidationErrorResponse(BaseModel):
    """
    Client error returned before any storage access.

    Example:
        {
            "success": false,
            "message": "Validation failed",
            "errors": [
                {"field": "name", "message": "Field required", "type": "missing"}
            ]
        }
    """
    success: bool = False
    message: str = "Validation failed"
    errors: List[FieldError]
