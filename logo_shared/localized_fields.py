"""
Per-locale field resolution for records that store localizable attributes as
column triplets: a legacy unsuffixed column `A`, plus `A_en` and `A_ar`.

For a requested locale each attribute is reduced to one value by walking an
ordered list of column names (see `fallback_chain`); the first populated
column wins and a type-appropriate empty value is used when none is.
Resolution only reads the record.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from logo_shared.types import (
    DEFAULT_LOCALE,
    EntityKind,
    Locale,
    LocaleSelection,
    TextDirection,
)


class FieldKind(StrEnum):
    TEXT = "text"
    LIST = "list"


@dataclass(frozen=True)
class LocalizedField:
    name: str
    kind: FieldKind = FieldKind.TEXT

    def column(self, locale: Optional[Locale] = None) -> str:
        if locale is None:
            return self.name
        return f"{self.name}_{locale.value}"

    def columns(self) -> Tuple[str, ...]:
        return (self.name,) + tuple(self.column(locale) for locale in Locale)

    def empty_value(self) -> Any:
        return () if self.kind == FieldKind.LIST else ""


@dataclass(frozen=True)
class EntitySchema:
    kind: EntityKind
    localized_fields: Tuple[LocalizedField, ...]
    structural_fields: Tuple[str, ...] = ()

    def localized_columns(self) -> set[str]:
        out: set[str] = set()
        for localized in self.localized_fields:
            out.update(localized.columns())
        return out


LOGO = EntitySchema(
    kind=EntityKind.LOGO,
    localized_fields=(
        LocalizedField("title"),
        LocalizedField("description"),
        LocalizedField("tags", FieldKind.LIST),
    ),
    structural_fields=(
        "id",
        "owner_id",
        "category_id",
        "template_id",
        "canvas_w",
        "canvas_h",
        "dpi",
        "thumbnail_url",
        "is_template",
        "colors_used",
        "vertical_align",
        "horizontal_align",
        "responsive_version",
        "responsive_description",
        "scaling_method",
        "position_method",
        "fully_responsive",
        "version",
        "responsive",
        "export_format",
        "export_transparent_background",
        "export_quality",
        "export_scalable",
        "export_maintain_aspect_ratio",
        "canvas_background_type",
        "canvas_background_solid_color",
        "canvas_background_gradient",
        "canvas_background_image_type",
        "canvas_background_image_path",
        "legacy_format_supported",
        "mobile_optimized",
        "legacy_compatibility_version",
        "created_at",
        "updated_at",
    ),
)

CATEGORY = EntitySchema(
    kind=EntityKind.CATEGORY,
    localized_fields=(
        LocalizedField("name"),
        LocalizedField("description"),
    ),
    structural_fields=(
        "id",
        "slug",
        "parent_id",
        "icon_asset_id",
        "sort_order",
        "is_active",
        "meta",
        "created_at",
        "updated_at",
    ),
)

ASSET = EntitySchema(
    kind=EntityKind.ASSET,
    localized_fields=(
        LocalizedField("name"),
        LocalizedField("description"),
        LocalizedField("tags", FieldKind.LIST),
    ),
    structural_fields=(
        "id",
        "kind",
        "url",
        "width",
        "height",
        "has_alpha",
        "vector_svg",
        "category_id",
        "meta",
        "created_at",
        "updated_at",
    ),
)

SCHEMAS: Mapping[EntityKind, EntitySchema] = MappingProxyType(
    {schema.kind: schema for schema in (LOGO, CATEGORY, ASSET)}
)


@dataclass(frozen=True)
class ResolvedView:
    """One record projected onto one locale. Built per request, never mutated."""

    entity_kind: EntityKind
    fields: Mapping[str, Any]
    structural: Mapping[str, Any]
    locale: Locale = DEFAULT_LOCALE
    direction: TextDirection = TextDirection.LTR
    variants: Mapping[str, Mapping[str, Any]] = field(
        default_factory=lambda: MappingProxyType({})
    )


def fallback_chain(localized: LocalizedField, locale: Locale) -> Tuple[str, ...]:
    """
    Ordered column names to try for `localized` in `locale`:
    the locale's own column, the legacy column, then English for other locales.
    """
    chain = [localized.column(locale), localized.column()]
    if locale != Locale.EN:
        chain.append(localized.column(Locale.EN))
    return tuple(chain)


def _coerce_list(value: Any) -> Optional[Tuple[Any, ...]]:
    if isinstance(value, (list, tuple)):
        return tuple(value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text.startswith("["):
            try:
                parsed = json.loads(text)
            except ValueError:
                parsed = None
            if isinstance(parsed, list):
                return tuple(parsed)
        return tuple(part.strip() for part in text.split(",") if part.strip())
    return None


def _populated(localized: LocalizedField, value: Any) -> Any:
    """Return the usable value for `localized`, or None when `value` is empty."""
    if value is None:
        return None
    if localized.kind == FieldKind.LIST:
        items = _coerce_list(value)
        return items if items else None
    if isinstance(value, str):
        return value if value.strip() else None
    return str(value)


def _first_populated(
    record: Mapping[str, Any], localized: LocalizedField, locale: Locale
) -> Tuple[Optional[str], Any]:
    for column in fallback_chain(localized, locale):
        value = _populated(localized, record.get(column))
        if value is not None:
            return column, value
    return None, localized.empty_value()


def resolve_field(
    record: Mapping[str, Any], localized: LocalizedField, locale: Locale
) -> Any:
    return _first_populated(record, localized, locale)[1]


def resolve_field_source(
    record: Mapping[str, Any], localized: LocalizedField, locale: Locale
) -> Optional[str]:
    """Column that supplied the resolved value; None when it fell back to empty."""
    return _first_populated(record, localized, locale)[0]


def localized_variants(
    record: Mapping[str, Any], localized: LocalizedField
) -> Dict[str, Any]:
    return {locale.value: resolve_field(record, localized, locale) for locale in Locale}


def _structural_values(
    record: Mapping[str, Any], schema: EntitySchema
) -> Dict[str, Any]:
    localized_columns = schema.localized_columns()
    if schema.structural_fields:
        return {name: record.get(name) for name in schema.structural_fields}
    return {k: v for k, v in record.items() if k not in localized_columns}


def resolve_entity(
    record: Mapping[str, Any],
    schema: EntitySchema,
    selection: LocaleSelection,
    *,
    include_variants: bool = False,
) -> ResolvedView:
    resolved = {
        localized.name: resolve_field(record, localized, selection.locale)
        for localized in schema.localized_fields
    }
    variants: Dict[str, Mapping[str, Any]] = {}
    if include_variants:
        for localized in schema.localized_fields:
            variants[localized.name] = MappingProxyType(
                localized_variants(record, localized)
            )
    return ResolvedView(
        entity_kind=schema.kind,
        fields=MappingProxyType(resolved),
        structural=MappingProxyType(_structural_values(record, schema)),
        locale=selection.locale,
        direction=selection.direction,
        variants=MappingProxyType(variants),
    )


def resolve_many(
    records: Iterable[Mapping[str, Any]],
    schema: EntitySchema,
    selection: LocaleSelection,
    *,
    include_variants: bool = False,
) -> list[ResolvedView]:
    return [
        resolve_entity(record, schema, selection, include_variants=include_variants)
        for record in records
    ]
