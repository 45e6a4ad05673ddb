from typing import Dict, Any
from fastapi import HTTPException, status
from fastapi.exceptions import RequestValidationError


def format_validation_error(validation_error: RequestValidationError) -> Dict[str, Any]:
    """Format a request ValidationError into a structured response

    Example output:
    {
        "detail": "Validation failed",
        "type": "validation_error",
        "errors": [
            {
                "field": "email",
                "message": "value is not a valid email address",
                "type": "value_error",
                "input": "not-an-email"
            }
        ],
        "error_count": 1
    }
    """
    errors = []

    for error in validation_error.errors():
        field_path = ".".join(str(loc) for loc in error["loc"])

        # Clean up field names for better readability
        field_display = field_path.replace("body.", "").replace("__root__.", "")

        errors.append({
            "field": field_display,
            "message": error["msg"],
            "type": error["type"],
            "input": str(error.get("input", ""))[:100]  # Limit input length
        })

    return {
        "detail": "Validation failed",
        "type": ValidationFailedError.kind,
        "errors": errors,
        "error_count": len(errors)
    }


def format_custom_error(message: str, kind: str, field: str | None = None) -> Dict[str, Any]:
    """Format an application error

    Example output:
    {
        "detail": "Post not found",
        "type": "not_found"
    }
    """
    error_detail = {
        "detail": message,
        "type": kind
    }

    if field:
        error_detail["field"] = field

    return error_detail


class AppException(HTTPException):
    """Base for errors raised by services; ``kind`` is the stable machine-readable code"""
    kind = "internal_error"
    default_status = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, field: str | None = None):
        self.message = message
        super().__init__(
            status_code=self.default_status,
            detail=format_custom_error(message, self.kind, field)
        )


class UnauthorizedError(AppException):
    kind = "unauthorized"
    default_status = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "Unauthorized", field: str | None = None):
        super().__init__(message, field)
        self.headers = {"WWW-Authenticate": "Bearer"}


class ForbiddenError(AppException):
    kind = "forbidden"
    default_status = status.HTTP_403_FORBIDDEN


class NotFoundError(AppException):
    kind = "not_found"
    default_status = status.HTTP_404_NOT_FOUND


class ValidationFailedError(AppException):
    kind = "validation_error"
    default_status = status.HTTP_400_BAD_REQUEST


class InternalError(AppException):
    kind = "internal_error"
    default_status = status.HTTP_500_INTERNAL_SERVER_ERROR
