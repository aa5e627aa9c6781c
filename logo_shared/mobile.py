"""
Builders for the nested logo document consumed by the mobile clients.

Mobile deserializers expect a fixed shape, so every key is always emitted;
attributes missing from the stored row become explicit defaults or None.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Optional

from logo_shared.types import LayerType

DEFAULT_TAGS = ("logo", "design", "responsive")
DEFAULT_RESPONSIVE_DESCRIPTION = (
    "Fully responsive logo data - no absolute sizes stored"
)


def _num(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        return value
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _num_or(value: Any, default: Any) -> Any:
    number = _num(value)
    return default if number is None else number


def _flag(value: Any, default: bool = True) -> bool:
    return default if value is None else bool(value)


def to_legacy_gradient(gradient: Any) -> Optional[Dict[str, Any]]:
    """
    Rewrite `{angle, stops: [{hex, offset}]}` into the older
    `{angle, stops: [{color, position}]}` form. Legacy input is returned as is.
    """
    if not isinstance(gradient, Mapping):
        return None
    stops = gradient.get("stops")
    if not isinstance(stops, list):
        return None
    if stops and isinstance(stops[0], Mapping) and "color" in stops[0]:
        return dict(gradient)
    legacy_stops = []
    last = max(len(stops) - 1, 1)
    for index, stop in enumerate(stops):
        if isinstance(stop, str):
            # Bare colour strings are spread evenly across the gradient.
            legacy_stops.append({"color": stop, "position": index / last})
            continue
        stop = stop if isinstance(stop, Mapping) else {}
        position = stop.get("offset")
        if position is None:
            position = stop.get("position", 0)
        legacy_stops.append(
            {
                "color": stop.get("hex") or stop.get("color") or "#000000",
                "position": position,
            }
        )
    return {"angle": gradient.get("angle") or 0.0, "stops": legacy_stops}


def to_legacy_background(background: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Legacy canvas background: keys with no value are omitted, not nulled."""
    if not isinstance(background, Mapping):
        return {"type": "solid", "gradient": None}
    result: Dict[str, Any] = {"type": background.get("type") or "solid"}
    legacy_gradient = to_legacy_gradient(background.get("gradient"))
    if legacy_gradient:
        result["gradient"] = legacy_gradient
    image = background.get("image")
    if isinstance(image, Mapping):
        result["image"] = {
            "type": image.get("type") or "imported",
            "path": image.get("path") or image.get("url"),
        }
    if background.get("solidColor"):
        result["solidColor"] = background["solidColor"]
    return result


def apply_legacy_gradient(canvas: Dict[str, Any]) -> Dict[str, Any]:
    """
    For `format=legacy` on the mobile document: a gradient background keeps
    only its type and legacy gradient. Other backgrounds are untouched.
    """
    background = canvas.get("background") or {}
    if background.get("type") != "gradient":
        return canvas
    gradient = to_legacy_gradient(background.get("gradient"))
    if not gradient or not gradient["stops"]:
        return canvas
    return {
        **canvas,
        "background": {
            "type": "gradient",
            "gradient": gradient,
        },
    }


def build_canvas(
    logo: Mapping[str, Any],
    *,
    legacy: bool = False,
    structured: bool = False,
) -> Dict[str, Any]:
    canvas_w = _num(logo.get("canvas_w"))
    canvas_h = _num(logo.get("canvas_h"))
    image_path = logo.get("canvas_background_image_path")
    background = {
        "type": logo.get("canvas_background_type") or "solid",
        "solidColor": logo.get("canvas_background_solid_color")
        or (None if structured else "#ffffff"),
        "gradient": logo.get("canvas_background_gradient") or None,
        "image": {
            "type": logo.get("canvas_background_image_type") or "imported",
            "path": image_path,
        }
        if image_path
        else None,
    }
    return {
        "aspectRatio": canvas_w / canvas_h if canvas_w and canvas_h else 1.0,
        "background": to_legacy_background(background) if legacy else background,
    }


def _base_layer(layer: Mapping[str, Any]) -> Dict[str, Any]:
    return {
        "layerId": str(layer.get("id")),
        "type": str(layer.get("type") or "").lower(),
        "visible": bool(layer.get("is_visible")),
        "order": int(_num_or(layer.get("z_index"), 0)),
        "position": {
            "x": _num_or(layer.get("x_norm"), 0.5),
            "y": _num_or(layer.get("y_norm"), 0.5),
        },
        "scaleFactor": _num_or(layer.get("scale"), 1),
        "rotation": _num_or(layer.get("rotation_deg"), 0),
        "opacity": _num_or(layer.get("opacity"), 1),
        "flip": {
            "horizontal": bool(layer.get("flip_horizontal")),
            "vertical": bool(layer.get("flip_vertical")),
        },
    }


def _text_block(props: Mapping[str, Any], *, legacy: bool, structured: bool) -> Dict[str, Any]:
    text = {
        "value": props.get("content") or "",
        "font": props.get("font_family") or "Arial",
        "fontColor": props.get("fill_hex") or "#000000",
        "fontWeight": props.get("font_weight") or "normal",
        "fontStyle": props.get("font_style") or "normal",
        "alignment": props.get("align") or "center",
        "lineHeight": _num_or(props.get("line_height"), 1.0),
        "letterSpacing": _num_or(props.get("letter_spacing"), 0),
    }
    if structured:
        return text
    gradient = props.get("gradient") or None
    if legacy and gradient:
        gradient = to_legacy_gradient(gradient)
    text.update(
        {
            "fontSize": _num_or(props.get("font_size"), 48),
            "baseline": props.get("baseline") or "alphabetic",
            "fillAlpha": _num_or(props.get("fill_alpha"), 1.0),
            "strokeHex": props.get("stroke_hex") or None,
            "strokeAlpha": _num(props.get("stroke_alpha")),
            "strokeWidth": _num(props.get("stroke_width")),
            "strokeAlign": props.get("stroke_align") or None,
            "gradient": gradient,
            "underline": bool(props.get("underline")),
            "underlineDirection": props.get("underline_direction") or "horizontal",
            "textCase": props.get("text_case") or "normal",
            "textDecoration": props.get("text_decoration") or "none",
            "textTransform": props.get("text_transform") or "none",
            "fontVariant": props.get("font_variant") or "normal",
        }
    )
    return text


def _icon_src(props: Mapping[str, Any], *, structured: bool) -> str:
    asset_id = props.get("asset_id")
    fallback = f"icon_{asset_id}" if asset_id else ""
    if structured:
        return props.get("asset_name") or fallback
    return props.get("asset_url") or props.get("asset_name") or fallback


def _shape_src(meta: Any) -> Optional[str]:
    if isinstance(meta, Mapping):
        return meta.get("src")
    return None


def build_layer(
    layer: Mapping[str, Any],
    *,
    legacy: bool = False,
    structured: bool = False,
) -> Dict[str, Any]:
    """One stored layer as a mobile layer with its per-type sub-object."""
    base = _base_layer(layer)
    props = layer.get("properties") or {}
    layer_type = str(layer.get("type") or "").upper()

    if layer_type == LayerType.TEXT:
        base["text"] = _text_block(props, legacy=legacy, structured=structured)
    elif layer_type == LayerType.ICON:
        base["icon"] = {
            "src": _icon_src(props, structured=structured),
            "color": props.get("tint_hex") or "#000000",
        }
    elif layer_type == LayerType.IMAGE:
        url = props.get("asset_url")
        if structured:
            base["image"] = {"type": "imported", "path": url or ""}
        else:
            base["image"] = {"type": "imported", "path": url} if url else None
    elif layer_type == LayerType.SHAPE and not structured:
        base["shape"] = {
            "src": _shape_src(props.get("meta")),
            "type": props.get("shape_kind") or "rect",
            "color": props.get("fill_hex") or "#000000",
            "strokeColor": props.get("stroke_hex") or None,
            "strokeWidth": _num_or(props.get("stroke_width"), 0),
        }
    elif layer_type == LayerType.BACKGROUND:
        url = props.get("asset_url")
        image = None
        if url:
            image = {"type": "imported", "path": url}
            if not structured:
                image["src"] = props.get("asset_name") or url
            if legacy:
                image["url"] = url
        base["background"] = {
            "type": props.get("mode") or "solid",
            "color": props.get("fill_hex") or "#ffffff",
            "image": image,
        }
    return base


def derive_colors_used(
    layers: Iterable[Mapping[str, Any]], *, structured: bool = False
) -> List[Dict[str, str]]:
    """Distinct (role, color) pairs from text fills, icon tints and shape fills."""
    colors: List[Dict[str, str]] = []
    seen: set[tuple[str, str]] = set()
    for layer in layers:
        props = layer.get("properties") or {}
        layer_type = str(layer.get("type") or "").upper()
        candidate = None
        if layer_type == LayerType.TEXT and props.get("fill_hex"):
            candidate = ("text", props["fill_hex"])
        elif layer_type == LayerType.ICON and props.get("tint_hex"):
            candidate = ("icon", props["tint_hex"])
        elif not structured and layer_type == LayerType.IMAGE and props.get("tint_hex"):
            candidate = ("icon", props["tint_hex"])
        elif not structured and layer_type == LayerType.SHAPE and props.get("fill_hex"):
            candidate = ("shape", props["fill_hex"])
        if candidate and candidate not in seen:
            seen.add(candidate)
            colors.append({"role": candidate[0], "color": candidate[1]})
    return colors


def select_colors_used(
    stored: Any, layers: Iterable[Mapping[str, Any]], *, structured: bool = False
) -> List[Any]:
    if isinstance(stored, list) and stored:
        return list(stored)
    return derive_colors_used(layers, structured=structured)


def build_alignments(logo: Mapping[str, Any]) -> Dict[str, str]:
    return {
        "verticalAlign": logo.get("vertical_align") or "center",
        "horizontalAlign": logo.get("horizontal_align") or "center",
    }


def build_responsive(logo: Mapping[str, Any]) -> Dict[str, Any]:
    return {
        "version": logo.get("responsive_version") or "3.0",
        "description": logo.get("responsive_description")
        or DEFAULT_RESPONSIVE_DESCRIPTION,
        "scalingMethod": logo.get("scaling_method") or "scaleFactor",
        "positionMethod": logo.get("position_method") or "relative",
        "fullyResponsive": _flag(logo.get("fully_responsive")),
    }


def build_export(logo: Mapping[str, Any]) -> Dict[str, Any]:
    return {
        "format": logo.get("export_format") or "png",
        "transparentBackground": _flag(logo.get("export_transparent_background")),
        "quality": logo.get("export_quality") or 100,
        "responsive": {
            "scalable": _flag(logo.get("export_scalable")),
            "maintainAspectRatio": _flag(logo.get("export_maintain_aspect_ratio")),
        },
    }


def _section(document: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = document.get(key)
    return value if isinstance(value, Mapping) else {}


def _present(**values: Any) -> Dict[str, Any]:
    return {k: v for k, v in values.items() if v is not None}


def _looks_like_url(value: Any) -> bool:
    return isinstance(value, str) and ("/" in value or value.startswith("data:"))


def logo_from_mobile(document: Mapping[str, Any], locale: str) -> Dict[str, Any]:
    """
    Stored logo columns for a mobile document. Localizable values land in the
    columns of `locale`; sections the client left out keep the column defaults.
    """
    canvas = _section(document, "canvas")
    background = _section(canvas, "background")
    image = _section(background, "image")
    alignments = _section(document, "alignments")
    responsive = _section(document, "responsive")
    metadata = _section(document, "metadata")
    export = _section(document, "export")
    export_responsive = _section(export, "responsive")

    aspect_ratio = _num(canvas.get("aspectRatio"))
    canvas_h = round(1080 / aspect_ratio) if aspect_ratio else None
    tags = metadata.get("tags")
    template_id = document.get("templateId")

    return _present(
        **{
            f"title_{locale}": document.get("name") or None,
            f"description_{locale}": document.get("description") or None,
            f"tags_{locale}": list(tags) if isinstance(tags, list) and tags else None,
        },
        template_id=template_id,
        is_template=bool(template_id) if template_id is not None else None,
        canvas_w=1080.0 if canvas_h else None,
        canvas_h=float(canvas_h) if canvas_h else None,
        canvas_background_type=background.get("type"),
        canvas_background_solid_color=background.get("solidColor"),
        canvas_background_gradient=background.get("gradient"),
        canvas_background_image_type=image.get("type"),
        canvas_background_image_path=image.get("path") or image.get("url"),
        colors_used=document.get("colorsUsed") or None,
        vertical_align=alignments.get("verticalAlign"),
        horizontal_align=alignments.get("horizontalAlign"),
        responsive_version=responsive.get("version"),
        responsive_description=responsive.get("description"),
        scaling_method=responsive.get("scalingMethod"),
        position_method=responsive.get("positionMethod"),
        fully_responsive=responsive.get("fullyResponsive"),
        version=metadata.get("version"),
        responsive=metadata.get("responsive"),
        export_format=export.get("format"),
        export_transparent_background=export.get("transparentBackground"),
        export_quality=export.get("quality"),
        export_scalable=export_responsive.get("scalable"),
        export_maintain_aspect_ratio=export_responsive.get("maintainAspectRatio"),
    )


def _text_properties(text: Mapping[str, Any]) -> Dict[str, Any]:
    return _present(
        content=text.get("value"),
        font_family=text.get("font"),
        fill_hex=text.get("fontColor"),
        font_weight=text.get("fontWeight"),
        font_style=text.get("fontStyle"),
        align=text.get("alignment"),
        line_height=text.get("lineHeight"),
        letter_spacing=text.get("letterSpacing"),
        font_size=text.get("fontSize"),
        baseline=text.get("baseline"),
        fill_alpha=text.get("fillAlpha"),
        stroke_hex=text.get("strokeHex"),
        stroke_alpha=text.get("strokeAlpha"),
        stroke_width=text.get("strokeWidth"),
        stroke_align=text.get("strokeAlign"),
        gradient=text.get("gradient"),
        underline=text.get("underline"),
        underline_direction=text.get("underlineDirection"),
        text_case=text.get("textCase"),
        text_decoration=text.get("textDecoration"),
        text_transform=text.get("textTransform"),
        font_variant=text.get("fontVariant"),
    )


def layer_from_mobile(layer: Mapping[str, Any]) -> Dict[str, Any]:
    """Stored layer columns (with per-type `properties`) for one mobile layer."""
    layer_type = str(layer.get("type") or "").upper()
    position = _section(layer, "position")
    flip = _section(layer, "flip")
    order = int(_num_or(layer.get("order"), 0))

    properties: Dict[str, Any] = {}
    if layer_type == LayerType.TEXT:
        properties = _text_properties(_section(layer, "text"))
    elif layer_type == LayerType.ICON:
        icon = _section(layer, "icon")
        src = icon.get("src")
        properties = _present(
            asset_url=src if _looks_like_url(src) else None,
            asset_name=None if _looks_like_url(src) else src,
            tint_hex=icon.get("color"),
        )
    elif layer_type == LayerType.IMAGE:
        image = _section(layer, "image")
        properties = _present(asset_url=image.get("path") or image.get("src"))
    elif layer_type == LayerType.SHAPE:
        shape = _section(layer, "shape")
        properties = _present(
            shape_kind=shape.get("type"),
            fill_hex=shape.get("color"),
            stroke_hex=shape.get("strokeColor"),
            stroke_width=shape.get("strokeWidth"),
            meta={"src": shape["src"]} if shape.get("src") else None,
        )
    elif layer_type == LayerType.BACKGROUND:
        background = _section(layer, "background")
        image = _section(background, "image")
        properties = _present(
            mode=background.get("type"),
            fill_hex=background.get("color"),
            asset_url=image.get("path") or image.get("url"),
            asset_name=image.get("src"),
        )

    return _present(
        type=layer_type,
        name=f"{layer_type.lower()}_layer_{order}",
        z_index=order,
        is_visible=layer.get("visible"),
        x_norm=_num(position.get("x")),
        y_norm=_num(position.get("y")),
        scale=_num(layer.get("scaleFactor")),
        rotation_deg=_num(layer.get("rotation")),
        opacity=_num(layer.get("opacity")),
        flip_horizontal=flip.get("horizontal"),
        flip_vertical=flip.get("vertical"),
        properties=properties,
    )
