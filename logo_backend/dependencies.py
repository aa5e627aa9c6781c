"""
Dependency wiring for the FastAPI app.
"""

from __future__ import annotations

from typing import Optional

from fastapi import Header, Query, Request

from logo_backend.config import get_settings
from logo_backend.db import DbClient, InMemoryDbClient, SqlDbClient
from logo_shared.locale import select_request_locale
from logo_shared.types import LocaleSelection

_db_client: DbClient | None = None


def get_db_client() -> DbClient:
    """
    Return a singleton DB client so state persists across requests.
    """
    global _db_client
    if _db_client:
        return _db_client

    settings = get_settings()
    if settings.use_in_memory_backends or not settings.database_url:
        _db_client = InMemoryDbClient()
    else:
        _db_client = SqlDbClient(settings.database_url)
    return _db_client


def get_locale(
    lang: Optional[str] = Query(None, description="Response language (en|ar)"),
    language: Optional[str] = Query(None, include_in_schema=False),
    accept_language: Optional[str] = Header(None),
) -> LocaleSelection:
    query_lang = lang if lang is not None else language
    return select_request_locale(query_lang, accept_language)


def request_locale(request: Request) -> LocaleSelection:
    """Locale for code paths outside dependency injection (exception handlers)."""
    params = request.query_params
    query_lang = params.get("lang")
    if query_lang is None:
        query_lang = params.get("language")
    return select_request_locale(query_lang, request.headers.get("accept-language"))
