"""Exception handlers that render every failure in the API's JSON envelope."""
from __future__ import annotations

import logging
from typing import Any, Sequence

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from perfume_catalog.core.config import get_settings
from perfume_catalog.schemas.perfume import ValidationIssue
from perfume_catalog.services.errors import CatalogError, PerfumeValidationError, StoreError
from perfume_catalog.services.perfume_validator import issues_from_pydantic

logger = logging.getLogger(__name__)


def error_response(
    status_code: int,
    error: str,
    *,
    message: str | None = None,
    details: Sequence[ValidationIssue] | None = None,
) -> JSONResponse:
    """Build a ``{success: false, error, message?, details?}`` response."""
    body: dict[str, Any] = {"success": False, "error": error}
    if message:
        body["message"] = message
    if details is not None:
        body["details"] = [issue.model_dump() for issue in details]
    return JSONResponse(status_code=status_code, content=body)


def _internal_message(exc: Exception) -> str:
    if get_settings().is_production:
        return "Something went wrong"
    return str(exc)


async def catalog_error_handler(request: Request, exc: CatalogError) -> JSONResponse:
    details = exc.issues if isinstance(exc, PerfumeValidationError) else None
    logger.info(f"{request.method} {request.url.path} -> {exc.status_code} {exc.error}: {exc.message}")
    return error_response(exc.status_code, exc.error, message=exc.message, details=details)


async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
    logger.error(f"{request.method} {request.url.path} failed with a store error: {exc.message}")
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "Database operation failed",
        message=_internal_message(exc),
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return error_response(
        status.HTTP_400_BAD_REQUEST,
        PerfumeValidationError.error,
        details=issues_from_pydantic(exc.errors(), from_request=True),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        return error_response(
            exc.status_code,
            "Endpoint not found",
            message=f"Path {request.url.path} does not exist",
        )
    return error_response(exc.status_code, str(exc.detail))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "Internal server error",
        message=_internal_message(exc),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CatalogError, catalog_error_handler)
    app.add_exception_handler(StoreError, store_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
