"""REST API error response models.

Structured error responses that provide consistent format for all HTTP errors.
"""

from pydantic import BaseModel, ConfigDict


class ErrorDetail(BaseModel):
    """Individual error detail for field-level errors."""

    field: str
    message: str
    code: str | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "field": "minPrice",
                "message": "String should match pattern '^\\d+(\\.\\d{1,2})?$'",
                "code": "string_pattern_mismatch",
            }
        }
    )


class ErrorResponse(BaseModel):
    """Structured error response format.

    Examples:
        Simple error:
            {"detail": "min_price cannot be greater than max_price", "code": "VALIDATION_ERROR"}

        Validation error with multiple fields:
            {
                "detail": "Invalid request parameters",
                "code": "VALIDATION_ERROR",
                "errors": [{"field": "page", "message": "...", "code": "greater_than_equal"}]
            }
    """

    detail: str
    code: str | None = None
    errors: list[ErrorDetail] | None = None
