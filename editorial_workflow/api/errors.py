"""Mapping of workflow error categories onto HTTP error responses."""

from fastapi import Request, status
from fastapi.responses import JSONResponse

from editorial_workflow.core.errors import ErrorCategory, ValidationFailedError, WorkflowError
from editorial_workflow.schemas.errors import ErrorResponse

STATUS_BY_CATEGORY: dict[ErrorCategory, int] = {
    ErrorCategory.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCategory.INVALID_TRANSITION: status.HTTP_409_CONFLICT,
    ErrorCategory.COMMENT_REQUIRED: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorCategory.VALIDATION_FAILED: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorCategory.PERSISTENCE_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def error_response(
    category: ErrorCategory,
    message: str,
    details: dict | None = None,
) -> JSONResponse:
    body = ErrorResponse(error=category.value, message=message, details=details)
    return JSONResponse(
        status_code=STATUS_BY_CATEGORY[category],
        content=body.model_dump(exclude_none=True),
    )


async def workflow_error_handler(request: Request, exc: WorkflowError) -> JSONResponse:
    """Convert service-layer workflow errors into ``ErrorResponse`` bodies."""
    details = None
    if isinstance(exc, ValidationFailedError):
        details = {"errors": exc.errors}
    return error_response(exc.category, exc.message, details)
