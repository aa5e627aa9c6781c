"""
FastAPI application entry point for the logo backend.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from logo_backend.config import get_settings
from logo_backend.db import DuplicateRecordError
from logo_backend.dependencies import request_locale
from logo_backend.envelope import fail
from logo_backend.routes import router
from logo_shared.shapes import UnsupportedShapeError
from logo_shared.types import EntityNotFoundError

logger = logging.getLogger(__name__)


def _not_found(request: Request, exc: EntityNotFoundError) -> JSONResponse:
    body = fail(request_locale(request), f"{exc.kind.value}NotFound")
    return JSONResponse(status_code=404, content=body)


def _duplicate(request: Request, exc: DuplicateRecordError) -> JSONResponse:
    body = fail(request_locale(request), "duplicateRecord", field=exc.field)
    return JSONResponse(status_code=409, content=body)


def _unsupported_shape(request: Request, exc: UnsupportedShapeError) -> JSONResponse:
    body = fail(request_locale(request), "invalidData", details=str(exc))
    return JSONResponse(status_code=400, content=body)


def _http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 404:
        key = "notFound"
    elif exc.status_code >= 500:
        key = "serverError"
    else:
        key = "invalidData"
    body = fail(request_locale(request), key, details=exc.detail)
    return JSONResponse(status_code=exc.status_code, content=body, headers=exc.headers)


def _invalid_request(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = jsonable_encoder(exc.errors())
    body = fail(request_locale(request), "invalidData", details=details)
    return JSONResponse(status_code=422, content=body)


def _server_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content=fail(request_locale(request), "serverError"))


def create_app() -> FastAPI:
    settings = get_settings()
    logging.basicConfig(level=settings.log_level.upper())
    app = FastAPI(title="Logo Studio Backend (FastAPI)", version="0.1.0")
    app.add_exception_handler(EntityNotFoundError, _not_found)
    app.add_exception_handler(DuplicateRecordError, _duplicate)
    app.add_exception_handler(UnsupportedShapeError, _unsupported_shape)
    app.add_exception_handler(StarletteHTTPException, _http_error)
    app.add_exception_handler(RequestValidationError, _invalid_request)
    app.add_exception_handler(Exception, _server_error)
    app.include_router(router, prefix=settings.api_prefix)
    return app


app = create_app()
