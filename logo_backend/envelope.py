"""
Success/failure envelopes wrapped around every JSON response body.
"""

from __future__ import annotations

from typing import Any, Optional

from logo_shared.messages import get_message
from logo_shared.types import LocaleSelection


def ok(
    payload: Any,
    selection: LocaleSelection,
    message_key: str = "requestOk",
    **params: object,
) -> dict:
    return {
        "success": True,
        "message": get_message(selection.locale, message_key, **params),
        "language": selection.locale.value,
        "direction": selection.direction.value,
        "data": payload,
    }


def fail(
    selection: LocaleSelection,
    message_key: str,
    details: Optional[Any] = None,
    **params: object,
) -> dict:
    body = {
        "success": False,
        "message": get_message(selection.locale, message_key, **params),
        "language": selection.locale.value,
        "direction": selection.direction.value,
    }
    if details is not None:
        body["details"] = details
    return body
