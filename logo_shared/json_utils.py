from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Mapping

from logo_shared.dates import to_iso


def snake_to_camel(key: str) -> str:
    head, *rest = key.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def camelize_keys(data: Mapping[str, Any]) -> Dict[str, Any]:
    """Rename top-level keys only; nested values such as `meta` are client data."""
    return {snake_to_camel(k): v for k, v in data.items()}


def to_jsonable(value: Any) -> Any:
    """Datetimes become ISO-8601 strings and tuples become lists."""
    if isinstance(value, datetime):
        return to_iso(value)
    if isinstance(value, Mapping):
        return {k: to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(item) for item in value]
    return value
