"""
Response shapes built from a ResolvedView.

Each shape is a plain formatter function registered in FORMATTERS and picked
by an explicit ResponseShape value. Formatters only rearrange and rename what
the view already holds; localization happens before they run.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

from logo_shared import mobile
from logo_shared.dates import format_timestamp, to_iso
from logo_shared.json_utils import camelize_keys, to_jsonable
from logo_shared.localized_fields import ResolvedView
from logo_shared.types import EntityKind, EntityNotFoundError, ResponseShape


class UnsupportedShapeError(ValueError):
    """The requested shape does not exist for this kind of entity."""


@dataclass(frozen=True)
class ShapeContext:
    """Non-localized extras a formatter may need besides the view itself."""

    layers: Optional[Sequence[Mapping[str, Any]]] = None
    category: Optional[ResolvedView] = None
    legacy_gradient: bool = False


Formatter = Callable[[ResolvedView, ShapeContext], Dict[str, Any]]

# Localizable attribute -> dotted key in the legacy document.
LEGACY_FIELD_NAMES: Mapping[EntityKind, Mapping[str, str]] = MappingProxyType(
    {
        EntityKind.LOGO: MappingProxyType(
            {"title": "name", "description": "description", "tags": "metadata.tags"}
        ),
        EntityKind.CATEGORY: MappingProxyType(
            {"name": "name", "description": "description"}
        ),
        EntityKind.ASSET: MappingProxyType(
            {"name": "name", "description": "description", "tags": "tags"}
        ),
    }
)

LEGACY_ID_KEYS: Mapping[EntityKind, str] = MappingProxyType(
    {
        EntityKind.LOGO: "logoId",
        EntityKind.CATEGORY: "categoryId",
        EntityKind.ASSET: "assetId",
    }
)


def legacy_field_names(kind: EntityKind) -> Dict[str, str]:
    return dict(LEGACY_FIELD_NAMES[kind])


def get_path(document: Mapping[str, Any], dotted: str) -> Any:
    current: Any = document
    for part in dotted.split("."):
        if not isinstance(current, Mapping):
            return None
        current = current.get(part)
    return current


def legacy_to_canonical(document: Mapping[str, Any], kind: EntityKind) -> Dict[str, Any]:
    """Read the localizable values of a legacy document back under their base names."""
    return {
        name: get_path(document, legacy_name)
        for name, legacy_name in LEGACY_FIELD_NAMES[kind].items()
    }


def _resolved_fields(view: ResolvedView) -> Dict[str, Any]:
    return {name: to_jsonable(value) for name, value in view.fields.items()}


def _language_fields(view: ResolvedView) -> Dict[str, str]:
    return {"language": view.locale.value, "direction": view.direction.value}


def _canonical_layer(layer: Mapping[str, Any]) -> Dict[str, Any]:
    return to_jsonable(dict(layer))


def format_canonical(view: ResolvedView, context: ShapeContext) -> Dict[str, Any]:
    document = to_jsonable(dict(view.structural))
    document.update(_resolved_fields(view))
    for name, per_locale in view.variants.items():
        for locale, value in per_locale.items():
            document[f"{name}_{locale}"] = to_jsonable(value)
    if view.entity_kind == EntityKind.LOGO:
        if context.category is not None:
            document["category_name"] = context.category.fields.get("name", "")
        if context.layers is not None:
            document["layers"] = [_canonical_layer(layer) for layer in context.layers]
    document.update(_language_fields(view))
    return document


def _mobile_layers(context: ShapeContext, *, legacy: bool = False, structured: bool = False) -> List[Dict[str, Any]]:
    return [
        mobile.build_layer(layer, legacy=legacy, structured=structured)
        for layer in context.layers or ()
    ]


def _mobile_header(view: ResolvedView, *, default_description: bool) -> Dict[str, Any]:
    logo = view.structural
    description = view.fields.get("description", "")
    if not description and default_description:
        description = f"Logo created on {to_iso(logo.get('created_at'))}"
    template_id = logo.get("template_id")
    return {
        "logoId": str(logo.get("id")),
        "templateId": str(template_id) if template_id else None,
        "userId": logo.get("owner_id") or "current_user",
        "name": view.fields.get("title", ""),
        "description": description,
    }


def _mobile_metadata(view: ResolvedView, *, default_tags: bool) -> Dict[str, Any]:
    logo = view.structural
    tags = list(view.fields.get("tags", ()))
    if not tags and default_tags:
        tags = list(mobile.DEFAULT_TAGS)
    responsive = logo.get("responsive")
    return {
        "createdAt": to_iso(logo.get("created_at")),
        "updatedAt": to_iso(logo.get("updated_at")),
        "tags": tags,
        "version": logo.get("version") or 3,
        "responsive": True if responsive is None else bool(responsive),
    }


def _require_logo(view: ResolvedView, shape: ResponseShape) -> None:
    if view.entity_kind != EntityKind.LOGO:
        raise UnsupportedShapeError(
            f"{shape.value} shape is only available for logos, not {view.entity_kind.value}"
        )


def format_mobile(view: ResolvedView, context: ShapeContext) -> Dict[str, Any]:
    _require_logo(view, ResponseShape.MOBILE)
    logo = view.structural
    canvas = mobile.build_canvas(logo)
    if context.legacy_gradient:
        canvas = mobile.apply_legacy_gradient(canvas)
    metadata = _mobile_metadata(view, default_tags=True)
    metadata["createdAtFormatted"] = format_timestamp(logo.get("created_at"), view.locale)
    metadata["updatedAtFormatted"] = format_timestamp(logo.get("updated_at"), view.locale)
    document = _mobile_header(view, default_description=True)
    document.update(
        {
            "canvas": canvas,
            "layers": _mobile_layers(context),
            "colorsUsed": mobile.select_colors_used(
                logo.get("colors_used"), context.layers or ()
            ),
            "alignments": mobile.build_alignments(logo),
            "responsive": mobile.build_responsive(logo),
            "metadata": metadata,
            "export": mobile.build_export(logo),
        }
    )
    document.update(_language_fields(view))
    return document


def format_mobile_structured(view: ResolvedView, context: ShapeContext) -> Dict[str, Any]:
    _require_logo(view, ResponseShape.MOBILE_STRUCTURED)
    logo = view.structural
    document = _mobile_header(view, default_description=True)
    document.update(
        {
            "canvas": mobile.build_canvas(logo, structured=True),
            "layers": _mobile_layers(context, structured=True),
            "colorsUsed": mobile.select_colors_used(
                logo.get("colors_used"), context.layers or (), structured=True
            ),
            "alignments": mobile.build_alignments(logo),
            "responsive": mobile.build_responsive(logo),
            "metadata": _mobile_metadata(view, default_tags=True),
            "export": mobile.build_export(logo),
        }
    )
    document.update(_language_fields(view))
    return document


def _format_logo_legacy(view: ResolvedView, context: ShapeContext) -> Dict[str, Any]:
    logo = view.structural
    metadata = _mobile_metadata(view, default_tags=False)
    metadata.update(
        {
            "legacyFormat": True,
            "legacyVersion": logo.get("legacy_compatibility_version") or "1.0",
            "mobileOptimized": True
            if logo.get("mobile_optimized") is None
            else bool(logo.get("mobile_optimized")),
        }
    )
    document = _mobile_header(view, default_description=False)
    document.update(
        {
            "canvas": mobile.build_canvas(logo, legacy=True),
            "layers": _mobile_layers(context, legacy=True),
            "colorsUsed": mobile.select_colors_used(
                logo.get("colors_used"), context.layers or ()
            ),
            "alignments": mobile.build_alignments(logo),
            "responsive": mobile.build_responsive(logo),
            "metadata": metadata,
            "export": mobile.build_export(logo),
        }
    )
    document.update(_language_fields(view))
    return document


def format_legacy(view: ResolvedView, context: ShapeContext) -> Dict[str, Any]:
    if view.entity_kind == EntityKind.LOGO:
        return _format_logo_legacy(view, context)
    structural = dict(view.structural)
    document: Dict[str, Any] = {LEGACY_ID_KEYS[view.entity_kind]: structural.pop("id", None)}
    document.update(camelize_keys(to_jsonable(structural)))
    for name, legacy_name in LEGACY_FIELD_NAMES[view.entity_kind].items():
        document[legacy_name] = to_jsonable(view.fields.get(name))
    document["metadata"] = {
        **(document.get("metadata") or {}),
        "legacyFormat": True,
    }
    document.update(_language_fields(view))
    return document


FORMATTERS: Mapping[ResponseShape, Formatter] = MappingProxyType(
    {
        ResponseShape.CANONICAL: format_canonical,
        ResponseShape.LEGACY: format_legacy,
        ResponseShape.MOBILE: format_mobile,
        ResponseShape.MOBILE_STRUCTURED: format_mobile_structured,
    }
)


def shape_view(
    view: Optional[ResolvedView],
    shape: ResponseShape | str,
    context: Optional[ShapeContext] = None,
    *,
    kind: EntityKind | str = EntityKind.LOGO,
    entity_id: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Render `view` in `shape`. A missing view is reported as EntityNotFoundError
    for every shape so callers never receive a partial document.
    """
    if view is None:
        raise EntityNotFoundError(kind, entity_id)
    formatter = FORMATTERS[ResponseShape(shape)]
    return formatter(view, context or ShapeContext())
