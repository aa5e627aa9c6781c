"""
Pydantic request schemas for the logo backend.

Response bodies are shaped dictionaries (see `logo_shared.shapes`) wrapped in
the envelope, so only inputs are modelled here.
"""

from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from logo_shared.types import LayerType


class _Payload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    def changes(self) -> dict:
        """Only the fields the client actually sent."""
        return self.model_dump(exclude_unset=True, mode="json")


class UserCreate(_Payload):
    email: str = Field(..., max_length=320, pattern=r"^[^@\s]+@[^@\s]+$")
    display_name: Optional[str] = Field(None, max_length=200)
    avatar_url: Optional[str] = None
    is_active: bool = True


class UserUpdate(_Payload):
    email: Optional[str] = Field(None, max_length=320, pattern=r"^[^@\s]+@[^@\s]+$")
    display_name: Optional[str] = Field(None, max_length=200)
    avatar_url: Optional[str] = None
    is_active: Optional[bool] = None


class CategoryPayload(_Payload):
    name: Optional[str] = Field(None, max_length=200)
    name_en: Optional[str] = Field(None, max_length=200)
    name_ar: Optional[str] = Field(None, max_length=200)
    description: Optional[str] = None
    description_en: Optional[str] = None
    description_ar: Optional[str] = None
    slug: Optional[str] = Field(None, max_length=200)
    parent_id: Optional[str] = None
    icon_asset_id: Optional[str] = None
    sort_order: Optional[int] = None
    is_active: Optional[bool] = None
    meta: Optional[dict] = None


class AssetPayload(_Payload):
    kind: Optional[Literal["icon", "image", "shape", "background", "font"]] = None
    url: Optional[str] = None
    width: Optional[int] = Field(None, ge=0)
    height: Optional[int] = Field(None, ge=0)
    has_alpha: Optional[bool] = None
    vector_svg: Optional[str] = None
    category_id: Optional[str] = None
    meta: Optional[dict] = None
    name: Optional[str] = Field(None, max_length=200)
    name_en: Optional[str] = Field(None, max_length=200)
    name_ar: Optional[str] = Field(None, max_length=200)
    description: Optional[str] = None
    description_en: Optional[str] = None
    description_ar: Optional[str] = None
    tags: Optional[list[str]] = None
    tags_en: Optional[list[str]] = None
    tags_ar: Optional[list[str]] = None


class LayerPayload(_Payload):
    type: Optional[LayerType] = None
    name: Optional[str] = None
    z_index: Optional[int] = None
    x_norm: Optional[float] = None
    y_norm: Optional[float] = None
    scale: Optional[float] = Field(None, gt=0)
    rotation_deg: Optional[float] = None
    anchor_x: Optional[float] = None
    anchor_y: Optional[float] = None
    opacity: Optional[float] = Field(None, ge=0, le=1)
    blend_mode: Optional[str] = None
    is_visible: Optional[bool] = None
    is_locked: Optional[bool] = None
    flip_horizontal: Optional[bool] = None
    flip_vertical: Optional[bool] = None
    properties: Optional[dict[str, Any]] = None


class LayerCreate(LayerPayload):
    type: LayerType


class LogoPayload(_Payload):
    owner_id: Optional[str] = None
    title: Optional[str] = Field(None, max_length=300)
    title_en: Optional[str] = Field(None, max_length=300)
    title_ar: Optional[str] = Field(None, max_length=300)
    description: Optional[str] = None
    description_en: Optional[str] = None
    description_ar: Optional[str] = None
    tags: Optional[list[str]] = None
    tags_en: Optional[list[str]] = None
    tags_ar: Optional[list[str]] = None
    category_id: Optional[str] = None
    template_id: Optional[str] = None
    canvas_w: Optional[float] = Field(None, gt=0)
    canvas_h: Optional[float] = Field(None, gt=0)
    dpi: Optional[int] = Field(None, gt=0)
    thumbnail_url: Optional[str] = None
    is_template: Optional[bool] = None
    colors_used: Optional[list[dict[str, Any]]] = None
    vertical_align: Optional[str] = None
    horizontal_align: Optional[str] = None
    responsive_version: Optional[str] = None
    responsive_description: Optional[str] = None
    scaling_method: Optional[str] = None
    position_method: Optional[str] = None
    fully_responsive: Optional[bool] = None
    version: Optional[int] = None
    responsive: Optional[bool] = None
    export_format: Optional[str] = None
    export_transparent_background: Optional[bool] = None
    export_quality: Optional[int] = Field(None, ge=1, le=100)
    export_scalable: Optional[bool] = None
    export_maintain_aspect_ratio: Optional[bool] = None
    canvas_background_type: Optional[Literal["solid", "gradient", "image"]] = None
    canvas_background_solid_color: Optional[str] = None
    canvas_background_gradient: Optional[dict[str, Any]] = None
    canvas_background_image_type: Optional[str] = None
    canvas_background_image_path: Optional[str] = None
    legacy_format_supported: Optional[bool] = None
    mobile_optimized: Optional[bool] = None
    legacy_compatibility_version: Optional[str] = None


class LogoCreate(LogoPayload):
    layers: list[LayerCreate] = Field(default_factory=list)

    def changes(self) -> dict:
        data = super().changes()
        data.pop("layers", None)
        return data


class VersionCreate(_Payload):
    note: Optional[str] = Field(None, max_length=500)


class IconAssignment(_Payload):
    icon_ids: list[str] = Field(..., min_length=1)


class MobileLayer(BaseModel):
    """One layer of a mobile document; per-type sections pass through as sent."""

    model_config = ConfigDict(extra="allow")

    type: LayerType

    @field_validator("type", mode="before")
    @classmethod
    def _upper(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value


class MobileLogoCreate(_Payload):
    """A logo document in the mobile layout (camelCase keys)."""

    name: str = Field(..., min_length=1, max_length=300)
    templateId: Optional[str] = None
    userId: Optional[str] = None
    description: Optional[str] = None
    canvas: Optional[dict[str, Any]] = None
    layers: list[MobileLayer] = Field(default_factory=list)
    colorsUsed: Optional[list[dict[str, Any]]] = None
    alignments: Optional[dict[str, Any]] = None
    responsive: Optional[dict[str, Any]] = None
    metadata: Optional[dict[str, Any]] = None
    export: Optional[dict[str, Any]] = None
