"""Mapping from domain errors to HTTP responses."""

import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse

from domain.model.errors import (
    CollaboratorError,
    DomainError,
    DuplicateError,
    InvalidEmailError,
    InvalidJWTError,
    InvalidPasswordError,
    NotFoundError,
    UserNotActivatedError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# First match wins; subclasses before their bases
STATUS_BY_ERROR: list[tuple[type[DomainError], int]] = [
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (InvalidJWTError, status.HTTP_401_UNAUTHORIZED),
    (InvalidEmailError, status.HTTP_401_UNAUTHORIZED),
    (InvalidPasswordError, status.HTTP_401_UNAUTHORIZED),
    (UserNotActivatedError, status.HTTP_403_FORBIDDEN),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (DuplicateError, status.HTTP_409_CONFLICT),
    (CollaboratorError, status.HTTP_502_BAD_GATEWAY),
]


def status_for(error: DomainError) -> int:
    # A collaborator rejecting the caller's input (e.g. an expired token) is the caller's fault
    if isinstance(error, CollaboratorError) and error.status_code and 400 <= error.status_code < 500:
        return status.HTTP_400_BAD_REQUEST
    for error_type, status_code in STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return status_code
    return status.HTTP_400_BAD_REQUEST


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    status_code = status_for(exc)
    if status_code >= 500:
        logger.error(
            "Collaborator failure",
            extra={"path": request.url.path, "errorType": type(exc).__name__, "error": str(exc)},
        )
    return JSONResponse(status_code=status_code, content={"error": str(exc) or "unknown"})
