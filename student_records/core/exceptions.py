from typing import Any, Dict, Optional
from fastapi import status

class BaseAPIException(Exception):
    """
    Parent class for every custom error raised by the service.
    Keeps the error format returned to the frontend uniform.
    """
    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)

# =========================================================
# 1. COMMON ERRORS
# =========================================================

class NotFoundException(BaseAPIException):
    """404: resource not found (unknown or malformed identifier)"""
    def __init__(self, message: str = "Resource not found"):
        super().__init__(
            message=message,
            code="NOT_FOUND",
            status_code=status.HTTP_404_NOT_FOUND
        )

# =========================================================
# 2. STUDENT RECORD ERRORS
# =========================================================

class ValidationFailure(BaseAPIException):
    """
    400: a submitted record is missing a required field or carries
    a value outside the field's domain.
    """
    def __init__(
        self,
        field: str,
        rule: str,
        message: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.field = field
        self.rule = rule
        super().__init__(
            message=message or f"{field}: {rule}",
            code="VALIDATION_ERROR",
            status_code=status.HTTP_400_BAD_REQUEST,
            details=details if details is not None else {field: rule}
        )

class DuplicateKeyException(BaseAPIException):
    """409: a write would break the uniqueness of rollNumber or email."""
    def __init__(self, field: str, value: Any = None):
        self.field = field
        self.value = value
        super().__init__(
            message=f"{field} already exists",
            code="DUPLICATE_KEY",
            status_code=status.HTTP_409_CONFLICT,
            details={"field": field, "value": value}
        )

class StoreFault(BaseAPIException):
    """
    500: MongoDB is unreachable or rejected the operation
    for a reason other than a duplicate key.
    """
    def __init__(self, message: str):
        super().__init__(
            message=f"Database Error: {message}",
            code="STORE_ERROR",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
        )
