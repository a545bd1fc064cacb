import logging
from typing import Any, Dict, Optional
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from leads_backend.errors import (
    AccountDeactivated,
    DomainError,
    DuplicateAssignment,
    DuplicateEntity,
    Forbidden,
    InvalidOperation,
    NotFound,
    NotParticipant,
    ReferenceInactive,
    ReferenceNotFound,
    Unauthenticated,
)
from leads_backend.repositories.base import RepositoryError
from leads_backend.settings import settings

logger = logging.getLogger(__name__)

class NotFoundException(HTTPException):
    def __init__(self,detail: Any = None, headers: Optional[Dict[str, str]] = None):
        self.headers = headers
        self.status_code = status.HTTP_404_NOT_FOUND
        self.detail = detail or "Not found"

class ForbiddenException(HTTPException):
    def __init__(self,detail: Any = None, headers: Optional[Dict[str, str]] = None):
        self.headers = headers
        self.status_code = status.HTTP_403_FORBIDDEN
        self.detail = detail or "Forbidden"

class BadRequestException(HTTPException):
    def __init__(self,detail: Any = None, headers: Optional[Dict[str, str]] = None):
        self.headers = headers
        self.status_code = status.HTTP_400_BAD_REQUEST
        self.detail = detail or "Bad request"

class UnauthorizedException(HTTPException):
    def __init__(self,detail: Any = None, headers: Optional[Dict[str, str]] = None):
        self.headers = headers or {"WWW-Authenticate": "Bearer"}
        self.status_code = status.HTTP_401_UNAUTHORIZED
        self.detail = detail or "Unauthorized"

class InternalServerException(HTTPException):
    def __init__(self,detail: Any = None, headers: Optional[Dict[str, str]] = None):
        self.headers = headers
        self.status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
        self.detail = detail or "Internal server error"

# Most specific classes first
_DOMAIN_ERRORS = [
    (Unauthenticated, UnauthorizedException),
    (AccountDeactivated, UnauthorizedException),
    (Forbidden, ForbiddenException),
    (NotParticipant, ForbiddenException),
    (NotFound, NotFoundException),
    (ReferenceNotFound, BadRequestException),
    (ReferenceInactive, BadRequestException),
    (DuplicateAssignment, BadRequestException),
    (DuplicateEntity, BadRequestException),
    (InvalidOperation, BadRequestException),
    (RepositoryError, InternalServerException),
]

def _internal_detail(error: Exception) -> str:
    if settings.DEBUG_MODE != "development":
        return "Internal server error"
    return str(error)

def domain_error_to_http_exception(error: DomainError) -> HTTPException:
    for error_type, exception_type in _DOMAIN_ERRORS:
        if isinstance(error, error_type):
            if exception_type is InternalServerException:
                return InternalServerException(detail=_internal_detail(error))
            return exception_type(detail=error.message)
    return InternalServerException(detail=_internal_detail(error))

async def domain_error_handler(request: Request, error: DomainError):
    exception = domain_error_to_http_exception(error)
    return JSONResponse(
        status_code=exception.status_code,
        content={"detail": exception.detail},
        headers=exception.headers,
    )

async def storage_error_handler(request: Request, error: SQLAlchemyError):
    logger.error(f"Unhandled storage error on {request.method} {request.url.path}: {error}", exc_info=error)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": _internal_detail(error)},
    )

def register_exception_handlers(app: FastAPI):
    app.add_exception_handler(DomainError, domain_error_handler)
    app.add_exception_handler(SQLAlchemyError, storage_error_handler)
