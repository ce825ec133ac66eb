"""Error response schemas."""

from pydantic import BaseModel, ConfigDict, Field


class ErrorResponse(BaseModel):
    """Standard error response schema.

    Used for all workflow error responses (4xx, 5xx) across the API.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "error": "not_found",
                    "message": "Workflow not found",
                },
                {
                    "error": "invalid_transition",
                    "message": "Transition from 'in_review' to 'published' is not permitted",
                },
                {
                    "error": "validation_failed",
                    "message": "Workflow validation failed: Initial state is required",
                    "details": {"errors": ["Initial state is required"]},
                },
            ]
        }
    )

    error: str = Field(
        ...,
        description="Error category identifier",
        examples=["not_found", "invalid_transition", "comment_required"],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
        examples=["A comment is required for 'Reject'"],
    )
    details: dict | None = Field(
        None,
        description="Additional error context (validation messages, etc.)",
        examples=[{"errors": ["Duplicate state key: draft"]}],
    )
