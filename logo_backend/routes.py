"""
HTTP routes for the logo backend API.
"""

from __future__ import annotations

import logging
import math
import uuid
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from fastapi.responses import JSONResponse

from logo_backend.config import Settings, get_settings
from logo_backend.db import DbClient
from logo_backend.dependencies import get_db_client, get_locale
from logo_backend.envelope import fail, ok
from logo_backend.schemas import (
    AssetPayload,
    CategoryPayload,
    IconAssignment,
    LayerCreate,
    LayerPayload,
    LogoCreate,
    LogoPayload,
    MobileLogoCreate,
    UserCreate,
    UserUpdate,
    VersionCreate,
)
from logo_shared.dates import to_iso
from logo_shared.json_utils import to_jsonable
from logo_shared.localized_fields import (
    ASSET,
    CATEGORY,
    LOGO,
    EntitySchema,
    ResolvedView,
    resolve_entity,
)
from logo_shared.messages import get_message
from logo_shared.mobile import layer_from_mobile, logo_from_mobile
from logo_shared.shapes import ShapeContext, shape_view
from logo_shared.types import (
    EntityKind,
    EntityNotFoundError,
    LocaleSelection,
    ResponseShape,
)

logger = logging.getLogger(__name__)

router = APIRouter()

FORMAT_PATTERN = "^(canonical|legacy|mobile)$"


def _view(
    record: Optional[dict],
    schema: EntitySchema,
    selection: LocaleSelection,
    *,
    include_variants: bool = False,
) -> Optional[ResolvedView]:
    if record is None:
        return None
    return resolve_entity(record, schema, selection, include_variants=include_variants)


def _require(record: Optional[dict], kind: EntityKind, entity_id: str) -> dict:
    if record is None:
        raise EntityNotFoundError(kind, entity_id)
    return record


def _category_view(
    db: DbClient, category_id: Optional[str], selection: LocaleSelection
) -> Optional[ResolvedView]:
    if not category_id:
        return None
    return _view(db.get_category(category_id), CATEGORY, selection)


def _logo_document(
    db: DbClient,
    logo: Optional[dict],
    logo_id: str,
    selection: LocaleSelection,
    shape: ResponseShape,
    *,
    legacy_gradient: bool = False,
) -> dict:
    context = None
    if logo is not None:
        context = ShapeContext(
            layers=db.list_layers(logo["id"]),
            category=_category_view(db, logo.get("category_id"), selection),
            legacy_gradient=legacy_gradient,
        )
    return shape_view(
        _view(logo, LOGO, selection),
        shape,
        context,
        kind=EntityKind.LOGO,
        entity_id=logo_id,
    )


def _pagination(page: int, limit: int, total: int, **extra: int) -> dict:
    return {
        "page": page,
        "limit": limit,
        "total": total,
        "pages": math.ceil(total / limit) if total else 0,
        **extra,
    }


@router.get("/health")
def health():
    return {"status": "ok"}


# Users


@router.get("/users")
def list_users(
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
    db: DbClient = Depends(get_db_client),
    selection: LocaleSelection = Depends(get_locale),
):
    users = [to_jsonable(user) for user in db.list_users(limit=limit, offset=offset)]
    return ok({"users": users, "total": db.count_users()}, selection, "usersFetched")


@router.post("/users", status_code=201)
def create_user(
    payload: UserCreate,
    db: DbClient = Depends(get_db_client),
    selection: LocaleSelection = Depends(get_locale),
):
    user = db.create_user(payload.changes())
    logger.info("Created user %s", user["id"])
    return ok(to_jsonable(user), selection, "userCreated")


@router.get("/users/{user_id}")
def get_user(
    user_id: str,
    db: DbClient = Depends(get_db_client),
    selection: LocaleSelection = Depends(get_locale),
):
    user = _require(db.get_user(user_id), EntityKind.USER, user_id)
    return ok(to_jsonable(user), selection, "userFetched")


@router.put("/users/{user_id}")
def update_user(
    user_id: str,
    payload: UserUpdate,
    db: DbClient = Depends(get_db_client),
    selection: LocaleSelection = Depends(get_locale),
):
    user = _require(db.update_user(user_id, payload.changes()), EntityKind.USER, user_id)
    return ok(to_jsonable(user), selection, "userUpdated")


@router.delete("/users/{user_id}")
def delete_user(
    user_id: str,
    db: DbClient = Depends(get_db_client),
    selection: LocaleSelection = Depends(get_locale),
):
    if not db.delete_user(user_id):
        raise EntityNotFoundError(EntityKind.USER, user_id)
    logger.info("Deleted user %s", user_id)
    return ok({"id": user_id}, selection, "userDeleted")


# Categories


@router.get("/categories")
def list_categories(
    include_inactive: bool = Query(False),
    parent_id: Optional[str] = Query(None),
    format: str = Query("canonical", pattern="^(canonical|legacy)$"),
    db: DbClient = Depends(get_db_client),
    selection: LocaleSelection = Depends(get_locale),
):
    records = db.list_categories(include_inactive=include_inactive, parent_id=parent_id)
    categories = [
        shape_view(_view(record, CATEGORY, selection, include_variants=True), format)
        for record in records
    ]
    return ok(
        {"categories": categories, "total": len(categories)},
        selection,
        "categoriesFetched",
    )


@router.post("/categories", status_code=201)
def create_category(
    payload: CategoryPayload,
    db: DbClient = Depends(get_db_client),
    selection: LocaleSelection = Depends(get_locale),
):
    if not (payload.name or payload.name_en or payload.name_ar):
        raise HTTPException(status_code=400, detail="At least one category name is required")
    category = db.create_category(payload.changes())
    logger.info("Created category %s", category["id"])
    document = shape_view(
        _view(category, CATEGORY, selection, include_variants=True),
        ResponseShape.CANONICAL,
    )
    return ok(document, selection, "categoryCreated")


@router.get("/categories/by-icon/{icon_id}")
def list_icon_categories(
    icon_id: str,
    db: DbClient = Depends(get_db_client),
    selection: LocaleSelection = Depends(get_locale),
):
    _require(db.get_asset(icon_id), EntityKind.ASSET, icon_id)
    categories = [
        shape_view(_view(record, CATEGORY, selection), ResponseShape.CANONICAL)
        for record in db.list_asset_categories(icon_id)
    ]
    return ok(
        {"iconId": icon_id, "categories": categories, "total": len(categories)},
        selection,
        "categoriesFetched",
    )


def _icon_document(asset: dict, selection: LocaleSelection) -> dict:
    document = shape_view(_view(asset, ASSET, selection), ResponseShape.CANONICAL)
    document["assigned_at"] = to_iso(asset.get("assigned_at"))
    return document


@router.get("/categories/{category_id}/icons")
def list_category_icons(
    category_id: str,
    page: int = Query(1, ge=1),
    limit: Optional[int] = Query(None, ge=1),
    db: DbClient = Depends(get_db_client),
    selection: LocaleSelection = Depends(get_locale),
    settings: Settings = Depends(get_settings),
):
    category = _view(db.get_category(category_id), CATEGORY, selection)
    if category is None:
        raise EntityNotFoundError(EntityKind.CATEGORY, category_id)
    limit = min(limit or settings.default_page_size, settings.max_page_size)
    icons = db.list_category_assets(
        category_id, kind="icon", limit=limit, offset=(page - 1) * limit
    )
    total = db.count_category_assets(category_id, kind="icon")
    return ok(
        {
            "categoryId": category_id,
            "categoryName": category.fields.get("name", ""),
            "icons": [_icon_document(icon, selection) for icon in icons],
            "pagination": _pagination(page, limit, total),
        },
        selection,
        "iconsFetched",
    )


@router.post("/categories/{category_id}/icons", status_code=201)
def assign_category_icons(
    category_id: str,
    payload: IconAssignment,
    db: DbClient = Depends(get_db_client),
    selection: LocaleSelection = Depends(get_locale),
):
    """
    Link icons to a category. Icons that are already linked are reported with
    no assignment id; unknown ids and non-icon assets are listed under `errors`.
    """
    category = _view(db.get_category(category_id), CATEGORY, selection)
    if category is None:
        raise EntityNotFoundError(EntityKind.CATEGORY, category_id)

    assignments, errors = [], []
    for icon_id in payload.icon_ids:
        asset = db.get_asset(icon_id)
        if asset is None or asset["kind"] != "icon":
            errors.append({"icon_id": icon_id, "error": "Icon not found"})
            continue
        link = db.assign_asset(category_id, icon_id)
        if link is None:
            assignments.append(
                {"icon_id": icon_id, "assignment_id": None, "note": "Already assigned"}
            )
        else:
            assignments.append({"icon_id": icon_id, "assignment_id": link["id"]})

    body = {
        "categoryId": category_id,
        "categoryName": category.fields.get("name", ""),
        "assignments": assignments,
        "totalAssigned": sum(1 for a in assignments if a["assignment_id"]),
    }
    if errors:
        body["errors"] = errors
    logger.info("Assigned %d icons to category %s", body["totalAssigned"], category_id)
    return ok(body, selection, "iconsAssigned")


@router.delete("/categories/{category_id}/icons/{icon_id}")
def remove_category_icon(
    category_id: str,
    icon_id: str,
    db: DbClient = Depends(get_db_client),
    selection: LocaleSelection = Depends(get_locale),
):
    if not db.unassign_asset(category_id, icon_id):
        return JSONResponse(status_code=404, content=fail(selection, "assignmentNotFound"))
    return ok({"categoryId": category_id, "iconId": icon_id}, selection, "iconRemoved")


@router.get("/categories/{category_id}")
def get_category(
    category_id: str,
    format: str = Query("canonical", pattern="^(canonical|legacy)$"),
    db: DbClient = Depends(get_db_client),
    selection: LocaleSelection = Depends(get_locale),
):
    view = _view(db.get_category(category_id), CATEGORY, selection, include_variants=True)
    document = shape_view(
        view, format, kind=EntityKind.CATEGORY, entity_id=category_id
    )
    return ok(document, selection, "categoryFetched")


@router.patch("/categories/{category_id}")
def update_category(
    category_id: str,
    payload: CategoryPayload,
    db: DbClient = Depends(get_db_client),
    selection: LocaleSelection = Depends(get_locale),
):
    view = _view(
        db.update_category(category_id, payload.changes()),
        CATEGORY,
        selection,
        include_variants=True,
    )
    document = shape_view(
        view, ResponseShape.CANONICAL, kind=EntityKind.CATEGORY, entity_id=category_id
    )
    return ok(document, selection, "categoryUpdated")


@router.delete("/categories/{category_id}")
def delete_category(
    category_id: str,
    db: DbClient = Depends(get_db_client),
    selection: LocaleSelection = Depends(get_locale),
):
    if not db.delete_category(category_id):
        raise EntityNotFoundError(EntityKind.CATEGORY, category_id)
    logger.info("Deleted category %s", category_id)
    return ok({"id": category_id}, selection, "categoryDeleted")


# Assets


@router.get("/assets")
def list_assets(
    kind: Optional[str] = Query(None),
    category_id: Optional[str] = Query(None),
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
    format: str = Query("canonical", pattern="^(canonical|legacy)$"),
    db: DbClient = Depends(get_db_client),
    selection: LocaleSelection = Depends(get_locale),
):
    records = db.list_assets(
        kind=kind, category_id=category_id, limit=limit, offset=offset
    )
    assets = [shape_view(_view(record, ASSET, selection), format) for record in records]
    return ok({"assets": assets, "total": len(assets)}, selection, "assetsFetched")


@router.post("/assets", status_code=201)
def create_asset(
    payload: AssetPayload,
    db: DbClient = Depends(get_db_client),
    selection: LocaleSelection = Depends(get_locale),
):
    asset = db.create_asset(payload.changes())
    logger.info("Created asset %s (%s)", asset["id"], asset["kind"])
    document = shape_view(_view(asset, ASSET, selection), ResponseShape.CANONICAL)
    return ok(document, selection, "assetCreated")


@router.get("/assets/{asset_id}")
def get_asset(
    asset_id: str,
    format: str = Query("canonical", pattern="^(canonical|legacy)$"),
    db: DbClient = Depends(get_db_client),
    selection: LocaleSelection = Depends(get_locale),
):
    view = _view(db.get_asset(asset_id), ASSET, selection)
    document = shape_view(view, format, kind=EntityKind.ASSET, entity_id=asset_id)
    return ok(document, selection, "assetFetched")


@router.patch("/assets/{asset_id}")
def update_asset(
    asset_id: str,
    payload: AssetPayload,
    db: DbClient = Depends(get_db_client),
    selection: LocaleSelection = Depends(get_locale),
):
    view = _view(db.update_asset(asset_id, payload.changes()), ASSET, selection)
    document = shape_view(
        view, ResponseShape.CANONICAL, kind=EntityKind.ASSET, entity_id=asset_id
    )
    return ok(document, selection, "assetUpdated")


@router.delete("/assets/{asset_id}")
def delete_asset(
    asset_id: str,
    db: DbClient = Depends(get_db_client),
    selection: LocaleSelection = Depends(get_locale),
):
    if not db.delete_asset(asset_id):
        raise EntityNotFoundError(EntityKind.ASSET, asset_id)
    logger.info("Deleted asset %s", asset_id)
    return ok({"id": asset_id}, selection, "assetDeleted")


# Logos


@router.get("/logo")
def list_logos(
    owner_id: Optional[str] = Query(None),
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
    db: DbClient = Depends(get_db_client),
    selection: LocaleSelection = Depends(get_locale),
):
    records = db.list_logos(limit=limit, offset=offset, owner_id=owner_id)
    logos = [
        shape_view(_view(record, LOGO, selection), ResponseShape.CANONICAL)
        for record in records
    ]
    total = db.count_logos(owner_id=owner_id)
    return ok({"logos": logos, "total": total}, selection, "logosFetched")


@router.post("/logo", status_code=201)
def create_logo(
    payload: Optional[LogoCreate] = None,
    db: DbClient = Depends(get_db_client),
    selection: LocaleSelection = Depends(get_locale),
):
    payload = payload or LogoCreate()
    logo = db.create_logo(payload.changes())
    for layer in payload.layers:
        db.create_layer(logo["id"], layer.changes())
    logger.info("Created logo %s with %d layers", logo["id"], len(payload.layers))
    document = _logo_document(db, logo, logo["id"], selection, ResponseShape.CANONICAL)
    return ok(document, selection, "logoCreated")


@router.get("/logo/mobile")
def list_logos_mobile(
    page: int = Query(1, ge=1),
    limit: Optional[int] = Query(None, ge=1),
    format: Optional[str] = Query(None, pattern="^(legacy)$"),
    db: DbClient = Depends(get_db_client),
    selection: LocaleSelection = Depends(get_locale),
    settings: Settings = Depends(get_settings),
):
    """
    Paginated logos in mobile format. `format=legacy` limits the list to logos
    that support the legacy document and renders them in it.
    """
    limit = min(limit or settings.default_page_size, settings.max_page_size)
    offset = (page - 1) * limit
    legacy = format == "legacy"
    shape = ResponseShape.LEGACY if legacy else ResponseShape.MOBILE

    records = db.list_logos(limit=limit, offset=offset, legacy_only=legacy)
    pagination = _pagination(page, limit, db.count_logos(legacy_only=legacy))
    if not records:
        return ok({"data": [], "pagination": pagination}, selection, "noLogos")

    layers_by_logo = db.list_layers_for_logos(record["id"] for record in records)
    data = [
        shape_view(
            _view(record, LOGO, selection),
            shape,
            ShapeContext(layers=layers_by_logo.get(record["id"], [])),
        )
        for record in records
    ]
    message_key = "logosFetchedLegacy" if legacy else "logosFetched"
    return ok({"data": data, "pagination": pagination}, selection, message_key)


@router.get("/logo/thumbnails")
def list_logo_thumbnails(
    page: int = Query(1, ge=1),
    limit: Optional[int] = Query(None, ge=1),
    category_id: Optional[str] = Query(None),
    db: DbClient = Depends(get_db_client),
    selection: LocaleSelection = Depends(get_locale),
    settings: Settings = Depends(get_settings),
):
    """Lightweight logo cards for one page, grouped by category in first-seen order."""
    limit = min(limit or settings.default_page_size, settings.max_page_size)
    records = db.list_logos(
        limit=limit, offset=(page - 1) * limit, category_id=category_id
    )
    total = db.count_logos(category_id=category_id)

    categories: dict[Optional[str], Optional[ResolvedView]] = {}
    groups: dict[Optional[str], dict] = {}
    for record in records:
        key = record.get("category_id")
        if key not in categories:
            categories[key] = _category_view(db, key, selection)
        category = categories[key]
        name = (category.fields.get("name") if category else "") or get_message(
            selection.locale, "uncategorized"
        )
        group = groups.setdefault(key, {"category": {"id": key, "name": name}, "logos": []})
        view = _view(record, LOGO, selection)
        group["logos"].append(
            {
                "id": record["id"],
                "title": view.fields.get("title", ""),
                "thumbnailUrl": record.get("thumbnail_url"),
                "categoryId": key,
                "categoryName": name,
                "createdAt": to_iso(record.get("created_at")),
                "updatedAt": to_iso(record.get("updated_at")),
            }
        )

    pagination = _pagination(page, limit, total, categoriesCount=len(groups))
    return ok(
        {"data": list(groups.values()), "pagination": pagination},
        selection,
        "thumbnailsFetched",
    )


def _resolve_owner(db: DbClient, user_ref: Optional[str]) -> Optional[str]:
    """A user id passes through; anything else is an email, created on first use."""
    if not user_ref:
        return None
    try:
        uuid.UUID(user_ref)
        return user_ref
    except ValueError:
        pass
    user = db.find_user_by_email(user_ref)
    if user is None:
        user = db.create_user({"email": user_ref, "display_name": user_ref})
        logger.info("Created user %s for mobile owner %s", user["id"], user_ref)
    return user["id"]


@router.post("/logo/mobile", status_code=201)
def create_logo_mobile(
    payload: MobileLogoCreate,
    db: DbClient = Depends(get_db_client),
    selection: LocaleSelection = Depends(get_locale),
):
    """Store a logo sent in the mobile layout; text lands in the request locale's columns."""
    document = payload.model_dump(mode="json")
    data = logo_from_mobile(document, selection.locale.value)
    data["owner_id"] = _resolve_owner(db, payload.userId)
    logo = db.create_logo(data)
    for layer in document["layers"]:
        db.create_layer(logo["id"], layer_from_mobile(layer))
    logger.info("Created mobile logo %s with %d layers", logo["id"], len(payload.layers))
    document = _logo_document(db, logo, logo["id"], selection, ResponseShape.MOBILE)
    return ok(document, selection, "logoCreated")


@router.get("/logo/{logo_id}")
def get_logo(
    logo_id: str,
    format: str = Query("canonical", pattern=FORMAT_PATTERN),
    db: DbClient = Depends(get_db_client),
    selection: LocaleSelection = Depends(get_locale),
):
    document = _logo_document(
        db, db.get_logo(logo_id), logo_id, selection, ResponseShape(format)
    )
    return ok(document, selection, "logoFetched")


@router.patch("/logo/{logo_id}")
def update_logo(
    logo_id: str,
    payload: LogoPayload,
    db: DbClient = Depends(get_db_client),
    selection: LocaleSelection = Depends(get_locale),
):
    logo = db.update_logo(logo_id, payload.changes())
    document = _logo_document(db, logo, logo_id, selection, ResponseShape.CANONICAL)
    return ok(document, selection, "logoUpdated")


@router.delete("/logo/{logo_id}")
def delete_logo(
    logo_id: str,
    db: DbClient = Depends(get_db_client),
    selection: LocaleSelection = Depends(get_locale),
):
    if not db.delete_logo(logo_id):
        raise EntityNotFoundError(EntityKind.LOGO, logo_id)
    logger.info("Deleted logo %s", logo_id)
    return ok({"id": logo_id}, selection, "logoDeleted")


@router.get("/logo/{logo_id}/mobile")
def get_logo_mobile(
    logo_id: str,
    format: Optional[str] = Query(None, pattern="^(legacy)$"),
    db: DbClient = Depends(get_db_client),
    selection: LocaleSelection = Depends(get_locale),
):
    document = _logo_document(
        db,
        db.get_logo(logo_id),
        logo_id,
        selection,
        ResponseShape.MOBILE,
        legacy_gradient=format == "legacy",
    )
    return ok(document, selection, "logoFetched")


@router.get("/logo/{logo_id}/mobile-legacy")
def get_logo_mobile_legacy(
    logo_id: str,
    db: DbClient = Depends(get_db_client),
    selection: LocaleSelection = Depends(get_locale),
):
    logo = db.get_logo(logo_id)
    if logo is not None and not logo.get("legacy_format_supported"):
        return JSONResponse(
            status_code=400, content=fail(selection, "legacyNotSupported")
        )
    document = _logo_document(db, logo, logo_id, selection, ResponseShape.LEGACY)
    return ok(document, selection, "logoFetchedLegacy")


@router.get("/logo/{logo_id}/mobile-structured")
def get_logo_mobile_structured(
    logo_id: str,
    db: DbClient = Depends(get_db_client),
    selection: LocaleSelection = Depends(get_locale),
):
    """The bare mobile document, without the response envelope."""
    return _logo_document(
        db, db.get_logo(logo_id), logo_id, selection, ResponseShape.MOBILE_STRUCTURED
    )


# Versions


@router.post("/logo/{logo_id}/version", status_code=201)
def create_logo_version(
    logo_id: str,
    payload: Optional[VersionCreate] = None,
    db: DbClient = Depends(get_db_client),
    selection: LocaleSelection = Depends(get_locale),
):
    logo = _require(db.get_logo(logo_id), EntityKind.LOGO, logo_id)
    snapshot = {
        "logo": to_jsonable(logo),
        "layers": [to_jsonable(layer) for layer in db.list_layers(logo_id)],
    }
    note = payload.note if payload else None
    version = db.create_logo_version(logo_id, snapshot, note)
    logger.info("Saved version %s of logo %s", version["id"], logo_id)
    return ok(to_jsonable(version), selection, "versionCreated")


@router.get("/logo/{logo_id}/versions")
def list_logo_versions(
    logo_id: str,
    page: int = Query(1, ge=1),
    limit: Optional[int] = Query(None, ge=1),
    db: DbClient = Depends(get_db_client),
    selection: LocaleSelection = Depends(get_locale),
    settings: Settings = Depends(get_settings),
):
    _require(db.get_logo(logo_id), EntityKind.LOGO, logo_id)
    limit = min(limit or settings.default_page_size, settings.max_page_size)
    versions = db.list_logo_versions(logo_id, limit=limit, offset=(page - 1) * limit)
    pagination = _pagination(page, limit, db.count_logo_versions(logo_id))
    return ok(
        {"data": [to_jsonable(v) for v in versions], "pagination": pagination},
        selection,
        "versionsFetched",
    )


# Layers


@router.get("/logo/{logo_id}/layers")
def list_layers(
    logo_id: str,
    db: DbClient = Depends(get_db_client),
    selection: LocaleSelection = Depends(get_locale),
):
    _require(db.get_logo(logo_id), EntityKind.LOGO, logo_id)
    layers = [to_jsonable(layer) for layer in db.list_layers(logo_id)]
    return ok({"layers": layers, "total": len(layers)}, selection, "layersFetched")


@router.post("/logo/{logo_id}/layers", status_code=201)
def create_layer(
    logo_id: str,
    payload: LayerCreate,
    db: DbClient = Depends(get_db_client),
    selection: LocaleSelection = Depends(get_locale),
):
    _require(db.get_logo(logo_id), EntityKind.LOGO, logo_id)
    layer = db.create_layer(logo_id, payload.changes())
    logger.info("Created %s layer %s on logo %s", layer["type"], layer["id"], logo_id)
    return ok(to_jsonable(layer), selection, "layerCreated")


@router.patch("/layers/{layer_id}")
def update_layer(
    layer_id: str,
    payload: LayerPayload,
    db: DbClient = Depends(get_db_client),
    selection: LocaleSelection = Depends(get_locale),
):
    layer = db.update_layer(layer_id, payload.changes())
    if layer is None:
        return _layer_not_found(selection)
    return ok(to_jsonable(layer), selection, "layerUpdated")


@router.delete("/layers/{layer_id}")
def delete_layer(
    layer_id: str,
    db: DbClient = Depends(get_db_client),
    selection: LocaleSelection = Depends(get_locale),
):
    if not db.delete_layer(layer_id):
        return _layer_not_found(selection)
    return ok({"id": layer_id}, selection, "layerDeleted")


def _layer_not_found(selection: LocaleSelection) -> Response:
    return JSONResponse(status_code=404, content=fail(selection, "layerNotFound"))
