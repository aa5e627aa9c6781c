from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from types import MappingProxyType
from typing import Mapping


class Locale(StrEnum):
    EN = "en"
    AR = "ar"


class TextDirection(StrEnum):
    LTR = "ltr"
    RTL = "rtl"


DEFAULT_LOCALE = Locale.EN

# Populated once at import; read-only afterwards.
LOCALE_DIRECTIONS: Mapping[Locale, TextDirection] = MappingProxyType(
    {
        Locale.EN: TextDirection.LTR,
        Locale.AR: TextDirection.RTL,
    }
)


@dataclass(frozen=True)
class LocaleSelection:
    locale: Locale
    direction: TextDirection


class ResponseShape(StrEnum):
    CANONICAL = "canonical"
    LEGACY = "legacy"
    MOBILE = "mobile"
    MOBILE_STRUCTURED = "mobile-structured"


class LayerType(StrEnum):
    TEXT = "TEXT"
    SHAPE = "SHAPE"
    ICON = "ICON"
    IMAGE = "IMAGE"
    BACKGROUND = "BACKGROUND"


class EntityKind(StrEnum):
    LOGO = "logo"
    CATEGORY = "category"
    ASSET = "asset"
    USER = "user"


class EntityNotFoundError(LookupError):
    """Raised when a shaped response is requested for a missing entity."""

    def __init__(self, kind: EntityKind | str, entity_id: str | None = None):
        self.kind = EntityKind(kind)
        self.entity_id = entity_id
        super().__init__(f"{self.kind.value} not found: {entity_id}")
