"""
Request language selection.

Unsupported or missing language tokens silently degrade to English; picking a
language must never fail a request.
"""

from __future__ import annotations

from typing import Any, List, Optional

from logo_shared.types import (
    DEFAULT_LOCALE,
    LOCALE_DIRECTIONS,
    Locale,
    LocaleSelection,
    TextDirection,
)

_LOCALES_BY_CODE = {locale.value: locale for locale in Locale}


def supported_locales() -> List[str]:
    return list(_LOCALES_BY_CODE)


def direction_for(locale: Locale) -> TextDirection:
    return LOCALE_DIRECTIONS[locale]


def select_locale(raw: Any = None) -> LocaleSelection:
    """
    Map a raw language token to a supported locale and its text direction.

    Matching is exact and case-sensitive: "ar" selects Arabic, "AR" or "ar-SA"
    do not. Anything that is not a supported code selects the default locale.
    """
    locale = DEFAULT_LOCALE
    if isinstance(raw, str) and raw in _LOCALES_BY_CODE:
        locale = _LOCALES_BY_CODE[raw]
    return LocaleSelection(locale=locale, direction=direction_for(locale))


def _parse_accept_language(value: str) -> List[str]:
    """Primary subtags from an Accept-Language header, highest q first."""
    weighted: list[tuple[float, int, str]] = []
    for index, part in enumerate(value.split(",")):
        part = part.strip()
        if not part:
            continue
        tag, _, params = part.partition(";")
        q = 1.0
        params = params.strip()
        if params.startswith("q="):
            try:
                q = float(params[2:])
            except ValueError:
                q = 0.0
        primary = tag.strip().split("-", 1)[0].split("_", 1)[0].lower()
        if primary:
            weighted.append((q, index, primary))
    weighted.sort(key=lambda item: (-item[0], item[1]))
    return [primary for q, _, primary in weighted if q > 0]


def locale_from_accept_language(header: Optional[str]) -> Optional[Locale]:
    """First supported locale listed in an Accept-Language header, if any."""
    if not header:
        return None
    for candidate in _parse_accept_language(header):
        if candidate in _LOCALES_BY_CODE:
            return _LOCALES_BY_CODE[candidate]
    return None


def select_request_locale(
    query_lang: Optional[str] = None,
    accept_language: Optional[str] = None,
) -> LocaleSelection:
    """
    Resolve the locale for an HTTP request.

    An explicit query value always wins, even when unsupported (it then
    degrades to the default). The header is only consulted when the client
    did not pass a query value at all.
    """
    if query_lang is not None:
        return select_locale(query_lang)
    header_locale = locale_from_accept_language(accept_language)
    if header_locale is not None:
        return select_locale(header_locale.value)
    return select_locale(None)
