"""
Database abstraction for Postgres and an in-memory test implementation.

Both clients hand records back as plain dicts keyed by column name, which is
what the localization layer consumes.
"""

from __future__ import annotations

import copy
import uuid
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterable, Optional, Protocol

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
    create_engine,
    delete,
    func,
    select,
)
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, declarative_base, sessionmaker


class DuplicateRecordError(Exception):
    """A unique column already holds the submitted value."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"Duplicate value for {field}")


# Writable columns and their defaults, per table. Anything else sent by a
# client is dropped before it reaches storage.
USER_COLUMNS: Dict[str, Any] = {
    "email": None,
    "display_name": None,
    "avatar_url": None,
    "is_active": True,
}

CATEGORY_COLUMNS: Dict[str, Any] = {
    "name": None,
    "name_en": None,
    "name_ar": None,
    "description": None,
    "description_en": None,
    "description_ar": None,
    "slug": None,
    "parent_id": None,
    "icon_asset_id": None,
    "sort_order": 0,
    "is_active": True,
    "meta": None,
}

ASSET_COLUMNS: Dict[str, Any] = {
    "kind": "icon",
    "url": None,
    "width": None,
    "height": None,
    "has_alpha": False,
    "vector_svg": None,
    "category_id": None,
    "meta": None,
    "name": None,
    "name_en": None,
    "name_ar": None,
    "description": None,
    "description_en": None,
    "description_ar": None,
    "tags": None,
    "tags_en": None,
    "tags_ar": None,
}

LOGO_COLUMNS: Dict[str, Any] = {
    "owner_id": None,
    "title": None,
    "title_en": None,
    "title_ar": None,
    "description": None,
    "description_en": None,
    "description_ar": None,
    "tags": None,
    "tags_en": None,
    "tags_ar": None,
    "category_id": None,
    "template_id": None,
    "canvas_w": 1080.0,
    "canvas_h": 1080.0,
    "dpi": 72,
    "thumbnail_url": None,
    "is_template": False,
    "colors_used": None,
    "vertical_align": None,
    "horizontal_align": None,
    "responsive_version": None,
    "responsive_description": None,
    "scaling_method": None,
    "position_method": None,
    "fully_responsive": None,
    "version": 3,
    "responsive": None,
    "export_format": None,
    "export_transparent_background": None,
    "export_quality": None,
    "export_scalable": None,
    "export_maintain_aspect_ratio": None,
    "canvas_background_type": None,
    "canvas_background_solid_color": None,
    "canvas_background_gradient": None,
    "canvas_background_image_type": None,
    "canvas_background_image_path": None,
    "legacy_format_supported": True,
    "mobile_optimized": True,
    "legacy_compatibility_version": "1.0",
}

LAYER_COLUMNS: Dict[str, Any] = {
    "logo_id": None,
    "type": "TEXT",
    "name": None,
    "z_index": 0,
    "x_norm": 0.5,
    "y_norm": 0.5,
    "scale": 1.0,
    "rotation_deg": 0.0,
    "anchor_x": 0.5,
    "anchor_y": 0.5,
    "opacity": 1.0,
    "blend_mode": "normal",
    "is_visible": True,
    "is_locked": False,
    "flip_horizontal": False,
    "flip_vertical": False,
    "properties": None,
}

LOGO_VERSION_COLUMNS: Dict[str, Any] = {
    "logo_id": None,
    "snapshot": None,
    "note": None,
}

CATEGORY_ASSET_COLUMNS: Dict[str, Any] = {
    "category_id": None,
    "asset_id": None,
}

TABLE_COLUMNS: Dict[str, Dict[str, Any]] = {
    "users": USER_COLUMNS,
    "categories": CATEGORY_COLUMNS,
    "assets": ASSET_COLUMNS,
    "logos": LOGO_COLUMNS,
    "layers": LAYER_COLUMNS,
    "logo_versions": LOGO_VERSION_COLUMNS,
    "category_assets": CATEGORY_ASSET_COLUMNS,
}


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _writable(table: str, data: dict) -> dict:
    """
    Keep known columns only. A column with a non-null default is never set to
    null: an explicit null leaves the stored (or default) value in place.
    """
    columns = TABLE_COLUMNS[table]
    return {
        k: v
        for k, v in data.items()
        if k in columns and not (v is None and columns[k] is not None)
    }


def _category_sort_name(category: dict) -> str:
    for column in ("name", "name_en"):
        if category.get(column) is not None:
            return category[column]
    return ""


def _new_record(table: str, data: dict) -> dict:
    now = _now()
    record = copy.deepcopy(TABLE_COLUMNS[table])
    record.update(_writable(table, data))
    record["id"] = str(uuid.uuid4())
    record["created_at"] = now
    record["updated_at"] = now
    return record


class DbClient(Protocol):
    """Interface for database access."""

    def create_user(self, data: dict) -> dict:
        ...

    def get_user(self, user_id: str) -> Optional[dict]:
        ...

    def list_users(self, limit: int = 100, offset: int = 0) -> list[dict]:
        ...

    def count_users(self) -> int:
        ...

    def find_user_by_email(self, email: str) -> Optional[dict]:
        ...

    def update_user(self, user_id: str, changes: dict) -> Optional[dict]:
        ...

    def delete_user(self, user_id: str) -> bool:
        ...

    def create_category(self, data: dict) -> dict:
        ...

    def get_category(self, category_id: str) -> Optional[dict]:
        ...

    def list_categories(
        self, include_inactive: bool = False, parent_id: str | None = None
    ) -> list[dict]:
        ...

    def update_category(self, category_id: str, changes: dict) -> Optional[dict]:
        ...

    def delete_category(self, category_id: str) -> bool:
        ...

    def create_asset(self, data: dict) -> dict:
        ...

    def get_asset(self, asset_id: str) -> Optional[dict]:
        ...

    def list_assets(
        self,
        kind: str | None = None,
        category_id: str | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[dict]:
        ...

    def update_asset(self, asset_id: str, changes: dict) -> Optional[dict]:
        ...

    def delete_asset(self, asset_id: str) -> bool:
        ...

    def create_logo(self, data: dict) -> dict:
        ...

    def get_logo(self, logo_id: str) -> Optional[dict]:
        ...

    def list_logos(
        self,
        limit: int = 100,
        offset: int = 0,
        owner_id: str | None = None,
        legacy_only: bool = False,
        category_id: str | None = None,
    ) -> list[dict]:
        ...

    def count_logos(
        self,
        owner_id: str | None = None,
        legacy_only: bool = False,
        category_id: str | None = None,
    ) -> int:
        ...

    def update_logo(self, logo_id: str, changes: dict) -> Optional[dict]:
        ...

    def delete_logo(self, logo_id: str) -> bool:
        ...

    def create_layer(self, logo_id: str, data: dict) -> dict:
        ...

    def get_layer(self, layer_id: str) -> Optional[dict]:
        ...

    def list_layers(self, logo_id: str) -> list[dict]:
        ...

    def list_layers_for_logos(self, logo_ids: Iterable[str]) -> Dict[str, list[dict]]:
        ...

    def update_layer(self, layer_id: str, changes: dict) -> Optional[dict]:
        ...

    def delete_layer(self, layer_id: str) -> bool:
        ...

    def create_logo_version(
        self, logo_id: str, snapshot: dict, note: str | None = None
    ) -> dict:
        ...

    def list_logo_versions(
        self, logo_id: str, limit: int = 20, offset: int = 0
    ) -> list[dict]:
        ...

    def count_logo_versions(self, logo_id: str) -> int:
        ...

    def assign_asset(self, category_id: str, asset_id: str) -> Optional[dict]:
        """Link an asset to a category; None when the link already exists."""
        ...

    def unassign_asset(self, category_id: str, asset_id: str) -> bool:
        ...

    def list_category_assets(
        self,
        category_id: str,
        kind: str | None = None,
        limit: int = 20,
        offset: int = 0,
    ) -> list[dict]:
        """Linked assets, newest link first, each with its `assigned_at` time."""
        ...

    def count_category_assets(self, category_id: str, kind: str | None = None) -> int:
        ...

    def list_asset_categories(self, asset_id: str) -> list[dict]:
        ...


def _layer_sort_key(layer: dict) -> tuple:
    return (layer.get("z_index") or 0, layer["created_at"])


class InMemoryDbClient:
    """Simple in-memory database for development and tests."""

    def __init__(self):
        self.tables: Dict[str, Dict[str, dict]] = {name: {} for name in TABLE_COLUMNS}

    def reset(self) -> None:
        """Clear all stored data (useful in tests)."""
        for rows in self.tables.values():
            rows.clear()

    def _insert(self, table: str, data: dict) -> dict:
        record = _new_record(table, data)
        self.tables[table][record["id"]] = record
        return copy.deepcopy(record)

    def _get(self, table: str, record_id: str) -> Optional[dict]:
        record = self.tables[table].get(record_id)
        return copy.deepcopy(record) if record else None

    def _update(self, table: str, record_id: str, changes: dict) -> Optional[dict]:
        record = self.tables[table].get(record_id)
        if not record:
            return None
        record.update(copy.deepcopy(_writable(table, changes)))
        record["updated_at"] = _now()
        return copy.deepcopy(record)

    def _delete(self, table: str, record_id: str) -> bool:
        return self.tables[table].pop(record_id, None) is not None

    def _select(
        self,
        table: str,
        where: Callable[[dict], bool] = lambda row: True,
        order: Callable[[dict], Any] | None = None,
        reverse: bool = False,
    ) -> list[dict]:
        rows = [row for row in self.tables[table].values() if where(row)]
        if order is not None:
            rows.sort(key=order, reverse=reverse)
        return [copy.deepcopy(row) for row in rows]

    def create_user(self, data: dict) -> dict:
        email = data.get("email")
        if email and any(u["email"] == email for u in self.tables["users"].values()):
            raise DuplicateRecordError("email")
        return self._insert("users", data)

    def get_user(self, user_id: str) -> Optional[dict]:
        return self._get("users", user_id)

    def list_users(self, limit: int = 100, offset: int = 0) -> list[dict]:
        rows = self._select("users", order=lambda r: r["created_at"], reverse=True)
        return rows[offset : offset + limit]

    def count_users(self) -> int:
        return len(self.tables["users"])

    def find_user_by_email(self, email: str) -> Optional[dict]:
        rows = self._select("users", where=lambda r: r["email"] == email)
        return rows[0] if rows else None

    def update_user(self, user_id: str, changes: dict) -> Optional[dict]:
        email = changes.get("email")
        if email and any(
            u["email"] == email and u["id"] != user_id
            for u in self.tables["users"].values()
        ):
            raise DuplicateRecordError("email")
        return self._update("users", user_id, changes)

    def delete_user(self, user_id: str) -> bool:
        return self._delete("users", user_id)

    def create_category(self, data: dict) -> dict:
        return self._insert("categories", data)

    def get_category(self, category_id: str) -> Optional[dict]:
        return self._get("categories", category_id)

    def list_categories(
        self, include_inactive: bool = False, parent_id: str | None = None
    ) -> list[dict]:
        return self._select(
            "categories",
            where=lambda r: (include_inactive or r["is_active"])
            and (parent_id is None or r["parent_id"] == parent_id),
            order=lambda r: (r["sort_order"] or 0, _category_sort_name(r)),
        )

    def update_category(self, category_id: str, changes: dict) -> Optional[dict]:
        return self._update("categories", category_id, changes)

    def delete_category(self, category_id: str) -> bool:
        if not self._delete("categories", category_id):
            return False
        self._drop_links(lambda link: link["category_id"] == category_id)
        return True

    def create_asset(self, data: dict) -> dict:
        return self._insert("assets", data)

    def get_asset(self, asset_id: str) -> Optional[dict]:
        return self._get("assets", asset_id)

    def list_assets(
        self,
        kind: str | None = None,
        category_id: str | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[dict]:
        rows = self._select(
            "assets",
            where=lambda r: (kind is None or r["kind"] == kind)
            and (category_id is None or r["category_id"] == category_id),
            order=lambda r: r["created_at"],
            reverse=True,
        )
        return rows[offset : offset + limit]

    def update_asset(self, asset_id: str, changes: dict) -> Optional[dict]:
        return self._update("assets", asset_id, changes)

    def delete_asset(self, asset_id: str) -> bool:
        if not self._delete("assets", asset_id):
            return False
        self._drop_links(lambda link: link["asset_id"] == asset_id)
        return True

    def _drop_links(self, match: Callable[[dict], bool]) -> None:
        links = self.tables["category_assets"]
        for link_id in [k for k, v in links.items() if match(v)]:
            del links[link_id]

    def _logo_filter(
        self, owner_id: str | None, legacy_only: bool, category_id: str | None = None
    ) -> Callable[[dict], bool]:
        return lambda r: (
            (owner_id is None or r["owner_id"] == owner_id)
            and (not legacy_only or bool(r["legacy_format_supported"]))
            and (category_id is None or r["category_id"] == category_id)
        )

    def create_logo(self, data: dict) -> dict:
        return self._insert("logos", data)

    def get_logo(self, logo_id: str) -> Optional[dict]:
        return self._get("logos", logo_id)

    def list_logos(
        self,
        limit: int = 100,
        offset: int = 0,
        owner_id: str | None = None,
        legacy_only: bool = False,
        category_id: str | None = None,
    ) -> list[dict]:
        rows = self._select(
            "logos",
            where=self._logo_filter(owner_id, legacy_only, category_id),
            order=lambda r: r["created_at"],
            reverse=True,
        )
        return rows[offset : offset + limit]

    def count_logos(
        self,
        owner_id: str | None = None,
        legacy_only: bool = False,
        category_id: str | None = None,
    ) -> int:
        where = self._logo_filter(owner_id, legacy_only, category_id)
        return len(self._select("logos", where=where))

    def update_logo(self, logo_id: str, changes: dict) -> Optional[dict]:
        return self._update("logos", logo_id, changes)

    def delete_logo(self, logo_id: str) -> bool:
        if not self._delete("logos", logo_id):
            return False
        for table in ("layers", "logo_versions"):
            rows = self.tables[table]
            for row_id in [k for k, v in rows.items() if v["logo_id"] == logo_id]:
                del rows[row_id]
        return True

    def create_layer(self, logo_id: str, data: dict) -> dict:
        return self._insert("layers", {**data, "logo_id": logo_id})

    def get_layer(self, layer_id: str) -> Optional[dict]:
        return self._get("layers", layer_id)

    def list_layers(self, logo_id: str) -> list[dict]:
        return self._select(
            "layers", where=lambda r: r["logo_id"] == logo_id, order=_layer_sort_key
        )

    def list_layers_for_logos(self, logo_ids: Iterable[str]) -> Dict[str, list[dict]]:
        return {logo_id: self.list_layers(logo_id) for logo_id in logo_ids}

    def update_layer(self, layer_id: str, changes: dict) -> Optional[dict]:
        changes = {k: v for k, v in changes.items() if k != "logo_id"}
        return self._update("layers", layer_id, changes)

    def delete_layer(self, layer_id: str) -> bool:
        return self._delete("layers", layer_id)

    def create_logo_version(
        self, logo_id: str, snapshot: dict, note: str | None = None
    ) -> dict:
        return self._insert(
            "logo_versions", {"logo_id": logo_id, "snapshot": snapshot, "note": note}
        )

    def list_logo_versions(
        self, logo_id: str, limit: int = 20, offset: int = 0
    ) -> list[dict]:
        rows = self._select(
            "logo_versions",
            where=lambda r: r["logo_id"] == logo_id,
            order=lambda r: r["created_at"],
            reverse=True,
        )
        return rows[offset : offset + limit]

    def count_logo_versions(self, logo_id: str) -> int:
        return len(self._select("logo_versions", where=lambda r: r["logo_id"] == logo_id))

    def _find_link(self, category_id: str, asset_id: str) -> Optional[dict]:
        for link in self.tables["category_assets"].values():
            if link["category_id"] == category_id and link["asset_id"] == asset_id:
                return link
        return None

    def assign_asset(self, category_id: str, asset_id: str) -> Optional[dict]:
        if self._find_link(category_id, asset_id):
            return None
        return self._insert(
            "category_assets", {"category_id": category_id, "asset_id": asset_id}
        )

    def unassign_asset(self, category_id: str, asset_id: str) -> bool:
        link = self._find_link(category_id, asset_id)
        return bool(link) and self._delete("category_assets", link["id"])

    def _linked_assets(self, category_id: str, kind: str | None) -> list[dict]:
        links = self._select(
            "category_assets",
            where=lambda r: r["category_id"] == category_id,
            order=lambda r: r["created_at"],
            reverse=True,
        )
        assets = []
        for link in links:
            asset = self.tables["assets"].get(link["asset_id"])
            if asset and (kind is None or asset["kind"] == kind):
                assets.append({**copy.deepcopy(asset), "assigned_at": link["created_at"]})
        return assets

    def list_category_assets(
        self,
        category_id: str,
        kind: str | None = None,
        limit: int = 20,
        offset: int = 0,
    ) -> list[dict]:
        return self._linked_assets(category_id, kind)[offset : offset + limit]

    def count_category_assets(self, category_id: str, kind: str | None = None) -> int:
        return len(self._linked_assets(category_id, kind))

    def list_asset_categories(self, asset_id: str) -> list[dict]:
        category_ids = {
            link["category_id"]
            for link in self.tables["category_assets"].values()
            if link["asset_id"] == asset_id
        }
        return self._select(
            "categories",
            where=lambda r: r["id"] in category_ids,
            order=lambda r: (r["sort_order"] or 0, _category_sort_name(r)),
        )


Base = declarative_base()


def _id_column() -> Column:
    return Column(String(36), primary_key=True)


def _timestamps() -> tuple[Column, Column]:
    return (
        Column(DateTime(timezone=True), nullable=False),
        Column(DateTime(timezone=True), nullable=False),
    )


class UserRow(Base):
    __tablename__ = "users"

    id = _id_column()
    email = Column(String, nullable=True, unique=True)
    display_name = Column(String, nullable=True)
    avatar_url = Column(String, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at, updated_at = _timestamps()


class CategoryRow(Base):
    __tablename__ = "categories"

    id = _id_column()
    name = Column(String, nullable=True)
    name_en = Column(String, nullable=True)
    name_ar = Column(String, nullable=True)
    description = Column(Text, nullable=True)
    description_en = Column(Text, nullable=True)
    description_ar = Column(Text, nullable=True)
    slug = Column(String, nullable=True, index=True)
    parent_id = Column(String(36), nullable=True, index=True)
    icon_asset_id = Column(String(36), nullable=True)
    sort_order = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)
    meta = Column(JSON, nullable=True)
    created_at, updated_at = _timestamps()


class AssetRow(Base):
    __tablename__ = "assets"

    id = _id_column()
    kind = Column(String, nullable=False, index=True)
    url = Column(String, nullable=True)
    width = Column(Integer, nullable=True)
    height = Column(Integer, nullable=True)
    has_alpha = Column(Boolean, nullable=False, default=False)
    vector_svg = Column(Text, nullable=True)
    category_id = Column(String(36), nullable=True, index=True)
    meta = Column(JSON, nullable=True)
    name = Column(String, nullable=True)
    name_en = Column(String, nullable=True)
    name_ar = Column(String, nullable=True)
    description = Column(Text, nullable=True)
    description_en = Column(Text, nullable=True)
    description_ar = Column(Text, nullable=True)
    tags = Column(JSON, nullable=True)
    tags_en = Column(JSON, nullable=True)
    tags_ar = Column(JSON, nullable=True)
    created_at, updated_at = _timestamps()


class LogoRow(Base):
    __tablename__ = "logos"

    id = _id_column()
    owner_id = Column(String, nullable=True, index=True)
    title = Column(String, nullable=True)
    title_en = Column(String, nullable=True)
    title_ar = Column(String, nullable=True)
    description = Column(Text, nullable=True)
    description_en = Column(Text, nullable=True)
    description_ar = Column(Text, nullable=True)
    tags = Column(JSON, nullable=True)
    tags_en = Column(JSON, nullable=True)
    tags_ar = Column(JSON, nullable=True)
    category_id = Column(String(36), nullable=True, index=True)
    template_id = Column(String(36), nullable=True)
    canvas_w = Column(Float, nullable=True)
    canvas_h = Column(Float, nullable=True)
    dpi = Column(Integer, nullable=True)
    thumbnail_url = Column(String, nullable=True)
    is_template = Column(Boolean, nullable=False, default=False)
    colors_used = Column(JSON, nullable=True)
    vertical_align = Column(String, nullable=True)
    horizontal_align = Column(String, nullable=True)
    responsive_version = Column(String, nullable=True)
    responsive_description = Column(Text, nullable=True)
    scaling_method = Column(String, nullable=True)
    position_method = Column(String, nullable=True)
    fully_responsive = Column(Boolean, nullable=True)
    version = Column(Integer, nullable=True)
    responsive = Column(Boolean, nullable=True)
    export_format = Column(String, nullable=True)
    export_transparent_background = Column(Boolean, nullable=True)
    export_quality = Column(Integer, nullable=True)
    export_scalable = Column(Boolean, nullable=True)
    export_maintain_aspect_ratio = Column(Boolean, nullable=True)
    canvas_background_type = Column(String, nullable=True)
    canvas_background_solid_color = Column(String, nullable=True)
    canvas_background_gradient = Column(JSON, nullable=True)
    canvas_background_image_type = Column(String, nullable=True)
    canvas_background_image_path = Column(String, nullable=True)
    legacy_format_supported = Column(Boolean, nullable=False, default=True)
    mobile_optimized = Column(Boolean, nullable=True)
    legacy_compatibility_version = Column(String, nullable=True)
    created_at, updated_at = _timestamps()


class LayerRow(Base):
    __tablename__ = "layers"

    id = _id_column()
    logo_id = Column(
        String(36), ForeignKey("logos.id", ondelete="CASCADE"), nullable=False, index=True
    )
    type = Column(String, nullable=False)
    name = Column(String, nullable=True)
    z_index = Column(Integer, nullable=False, default=0)
    x_norm = Column(Float, nullable=True)
    y_norm = Column(Float, nullable=True)
    scale = Column(Float, nullable=True)
    rotation_deg = Column(Float, nullable=True)
    anchor_x = Column(Float, nullable=True)
    anchor_y = Column(Float, nullable=True)
    opacity = Column(Float, nullable=True)
    blend_mode = Column(String, nullable=True)
    is_visible = Column(Boolean, nullable=False, default=True)
    is_locked = Column(Boolean, nullable=False, default=False)
    flip_horizontal = Column(Boolean, nullable=False, default=False)
    flip_vertical = Column(Boolean, nullable=False, default=False)
    properties = Column(JSON, nullable=True)
    created_at, updated_at = _timestamps()


class LogoVersionRow(Base):
    __tablename__ = "logo_versions"

    id = _id_column()
    logo_id = Column(
        String(36), ForeignKey("logos.id", ondelete="CASCADE"), nullable=False, index=True
    )
    snapshot = Column(JSON, nullable=True)
    note = Column(Text, nullable=True)
    created_at, updated_at = _timestamps()


class CategoryAssetRow(Base):
    __tablename__ = "category_assets"
    __table_args__ = (UniqueConstraint("category_id", "asset_id"),)

    id = _id_column()
    category_id = Column(String(36), nullable=False, index=True)
    asset_id = Column(String(36), nullable=False, index=True)
    created_at, updated_at = _timestamps()


TABLE_MODELS = {
    "users": UserRow,
    "categories": CategoryRow,
    "assets": AssetRow,
    "logos": LogoRow,
    "layers": LayerRow,
    "logo_versions": LogoVersionRow,
    "category_assets": CategoryAssetRow,
}

_CATEGORY_ORDER = (
    CategoryRow.sort_order.asc(),
    func.coalesce(CategoryRow.name, CategoryRow.name_en, "").asc(),
)


def _row_to_dict(row: Any) -> dict:
    return {column.name: getattr(row, column.name) for column in row.__table__.columns}


def _is_duplicate_email(table: str, exc: IntegrityError) -> bool:
    # Postgres names the constraint (users_email_key); SQLite names the column.
    return table == "users" and "email" in str(exc.orig).lower()


class SqlDbClient:
    """
    SQLAlchemy-backed implementation. Accepts any SQLAlchemy URL (e.g., Postgres or SQLite for tests).
    """

    def __init__(self, database_url: str):
        if not database_url:
            raise ValueError("DATABASE_URL is required for SqlDbClient")
        self.engine = create_engine(
            database_url,
            future=True,
            pool_pre_ping=True,
            pool_recycle=1800,
        )
        self.Session = sessionmaker(
            bind=self.engine, class_=Session, expire_on_commit=False, future=True
        )
        Base.metadata.create_all(self.engine)

    def _insert(self, table: str, data: dict) -> dict:
        row = TABLE_MODELS[table](**_new_record(table, data))
        with self.Session() as session:
            session.add(row)
            try:
                session.commit()
            except IntegrityError as exc:
                session.rollback()
                if _is_duplicate_email(table, exc):
                    raise DuplicateRecordError("email") from exc
                raise
            session.refresh(row)
            return _row_to_dict(row)

    def _get(self, table: str, record_id: str) -> Optional[dict]:
        with self.Session() as session:
            row = session.get(TABLE_MODELS[table], record_id)
            return _row_to_dict(row) if row else None

    def _update(self, table: str, record_id: str, changes: dict) -> Optional[dict]:
        with self.Session() as session:
            row = session.get(TABLE_MODELS[table], record_id)
            if not row:
                return None
            for key, value in _writable(table, changes).items():
                setattr(row, key, value)
            row.updated_at = _now()
            try:
                session.commit()
            except IntegrityError as exc:
                session.rollback()
                if _is_duplicate_email(table, exc):
                    raise DuplicateRecordError("email") from exc
                raise
            session.refresh(row)
            return _row_to_dict(row)

    def _delete(self, table: str, record_id: str) -> bool:
        with self.Session() as session:
            row = session.get(TABLE_MODELS[table], record_id)
            if not row:
                return False
            session.delete(row)
            session.commit()
            return True

    def _all(self, stmt) -> list[dict]:
        with self.Session() as session:
            return [_row_to_dict(row) for row in session.execute(stmt).scalars()]

    def create_user(self, data: dict) -> dict:
        return self._insert("users", data)

    def get_user(self, user_id: str) -> Optional[dict]:
        return self._get("users", user_id)

    def list_users(self, limit: int = 100, offset: int = 0) -> list[dict]:
        stmt = (
            select(UserRow)
            .order_by(UserRow.created_at.desc())
            .limit(limit)
            .offset(offset)
        )
        return self._all(stmt)

    def _count(self, stmt) -> int:
        with self.Session() as session:
            return session.execute(stmt).scalar_one()

    def count_users(self) -> int:
        return self._count(select(func.count()).select_from(UserRow))

    def find_user_by_email(self, email: str) -> Optional[dict]:
        rows = self._all(select(UserRow).where(UserRow.email == email).limit(1))
        return rows[0] if rows else None

    def update_user(self, user_id: str, changes: dict) -> Optional[dict]:
        return self._update("users", user_id, changes)

    def delete_user(self, user_id: str) -> bool:
        return self._delete("users", user_id)

    def create_category(self, data: dict) -> dict:
        return self._insert("categories", data)

    def get_category(self, category_id: str) -> Optional[dict]:
        return self._get("categories", category_id)

    def list_categories(
        self, include_inactive: bool = False, parent_id: str | None = None
    ) -> list[dict]:
        stmt = select(CategoryRow)
        if not include_inactive:
            stmt = stmt.where(CategoryRow.is_active.is_(True))
        if parent_id is not None:
            stmt = stmt.where(CategoryRow.parent_id == parent_id)
        return self._all(stmt.order_by(*_CATEGORY_ORDER))

    def update_category(self, category_id: str, changes: dict) -> Optional[dict]:
        return self._update("categories", category_id, changes)

    def delete_category(self, category_id: str) -> bool:
        return self._delete_with_links(
            CategoryRow, category_id, CategoryAssetRow.category_id
        )

    def _delete_with_links(self, model: Any, record_id: str, link_column: Any) -> bool:
        with self.Session() as session:
            row = session.get(model, record_id)
            if not row:
                return False
            session.execute(delete(CategoryAssetRow).where(link_column == record_id))
            session.delete(row)
            session.commit()
            return True

    def create_asset(self, data: dict) -> dict:
        return self._insert("assets", data)

    def get_asset(self, asset_id: str) -> Optional[dict]:
        return self._get("assets", asset_id)

    def list_assets(
        self,
        kind: str | None = None,
        category_id: str | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[dict]:
        stmt = select(AssetRow)
        if kind is not None:
            stmt = stmt.where(AssetRow.kind == kind)
        if category_id is not None:
            stmt = stmt.where(AssetRow.category_id == category_id)
        stmt = stmt.order_by(AssetRow.created_at.desc()).limit(limit).offset(offset)
        return self._all(stmt)

    def update_asset(self, asset_id: str, changes: dict) -> Optional[dict]:
        return self._update("assets", asset_id, changes)

    def delete_asset(self, asset_id: str) -> bool:
        return self._delete_with_links(AssetRow, asset_id, CategoryAssetRow.asset_id)

    def _filter_logos(
        self,
        stmt,
        owner_id: str | None,
        legacy_only: bool,
        category_id: str | None = None,
    ):
        if owner_id is not None:
            stmt = stmt.where(LogoRow.owner_id == owner_id)
        if legacy_only:
            stmt = stmt.where(LogoRow.legacy_format_supported.is_(True))
        if category_id is not None:
            stmt = stmt.where(LogoRow.category_id == category_id)
        return stmt

    def create_logo(self, data: dict) -> dict:
        return self._insert("logos", data)

    def get_logo(self, logo_id: str) -> Optional[dict]:
        return self._get("logos", logo_id)

    def list_logos(
        self,
        limit: int = 100,
        offset: int = 0,
        owner_id: str | None = None,
        legacy_only: bool = False,
        category_id: str | None = None,
    ) -> list[dict]:
        stmt = self._filter_logos(select(LogoRow), owner_id, legacy_only, category_id)
        stmt = stmt.order_by(LogoRow.created_at.desc()).limit(limit).offset(offset)
        return self._all(stmt)

    def count_logos(
        self,
        owner_id: str | None = None,
        legacy_only: bool = False,
        category_id: str | None = None,
    ) -> int:
        stmt = self._filter_logos(
            select(func.count()).select_from(LogoRow), owner_id, legacy_only, category_id
        )
        return self._count(stmt)

    def update_logo(self, logo_id: str, changes: dict) -> Optional[dict]:
        return self._update("logos", logo_id, changes)

    def delete_logo(self, logo_id: str) -> bool:
        with self.Session() as session:
            row = session.get(LogoRow, logo_id)
            if not row:
                return False
            session.execute(delete(LayerRow).where(LayerRow.logo_id == logo_id))
            session.execute(delete(LogoVersionRow).where(LogoVersionRow.logo_id == logo_id))
            session.delete(row)
            session.commit()
            return True

    def create_layer(self, logo_id: str, data: dict) -> dict:
        return self._insert("layers", {**data, "logo_id": logo_id})

    def get_layer(self, layer_id: str) -> Optional[dict]:
        return self._get("layers", layer_id)

    def list_layers(self, logo_id: str) -> list[dict]:
        stmt = (
            select(LayerRow)
            .where(LayerRow.logo_id == logo_id)
            .order_by(LayerRow.z_index.asc(), LayerRow.created_at.asc())
        )
        return self._all(stmt)

    def list_layers_for_logos(self, logo_ids: Iterable[str]) -> Dict[str, list[dict]]:
        logo_ids = list(logo_ids)
        grouped: Dict[str, list[dict]] = {logo_id: [] for logo_id in logo_ids}
        if not logo_ids:
            return grouped
        stmt = (
            select(LayerRow)
            .where(LayerRow.logo_id.in_(logo_ids))
            .order_by(LayerRow.logo_id, LayerRow.z_index.asc(), LayerRow.created_at.asc())
        )
        for layer in self._all(stmt):
            grouped[layer["logo_id"]].append(layer)
        return grouped

    def update_layer(self, layer_id: str, changes: dict) -> Optional[dict]:
        changes = {k: v for k, v in changes.items() if k != "logo_id"}
        return self._update("layers", layer_id, changes)

    def delete_layer(self, layer_id: str) -> bool:
        return self._delete("layers", layer_id)

    def create_logo_version(
        self, logo_id: str, snapshot: dict, note: str | None = None
    ) -> dict:
        return self._insert(
            "logo_versions", {"logo_id": logo_id, "snapshot": snapshot, "note": note}
        )

    def list_logo_versions(
        self, logo_id: str, limit: int = 20, offset: int = 0
    ) -> list[dict]:
        stmt = (
            select(LogoVersionRow)
            .where(LogoVersionRow.logo_id == logo_id)
            .order_by(LogoVersionRow.created_at.desc())
            .limit(limit)
            .offset(offset)
        )
        return self._all(stmt)

    def count_logo_versions(self, logo_id: str) -> int:
        stmt = (
            select(func.count())
            .select_from(LogoVersionRow)
            .where(LogoVersionRow.logo_id == logo_id)
        )
        return self._count(stmt)

    def assign_asset(self, category_id: str, asset_id: str) -> Optional[dict]:
        try:
            return self._insert(
                "category_assets", {"category_id": category_id, "asset_id": asset_id}
            )
        except IntegrityError:
            return None

    def unassign_asset(self, category_id: str, asset_id: str) -> bool:
        stmt = delete(CategoryAssetRow).where(
            CategoryAssetRow.category_id == category_id,
            CategoryAssetRow.asset_id == asset_id,
        )
        with self.Session() as session:
            removed = session.execute(stmt).rowcount
            session.commit()
            return removed > 0

    def _linked_assets(self, stmt, category_id: str, kind: str | None):
        stmt = stmt.join(CategoryAssetRow, CategoryAssetRow.asset_id == AssetRow.id).where(
            CategoryAssetRow.category_id == category_id
        )
        if kind is not None:
            stmt = stmt.where(AssetRow.kind == kind)
        return stmt

    def list_category_assets(
        self,
        category_id: str,
        kind: str | None = None,
        limit: int = 20,
        offset: int = 0,
    ) -> list[dict]:
        stmt = self._linked_assets(
            select(AssetRow, CategoryAssetRow.created_at), category_id, kind
        )
        stmt = stmt.order_by(CategoryAssetRow.created_at.desc()).limit(limit).offset(offset)
        with self.Session() as session:
            return [
                {**_row_to_dict(asset), "assigned_at": assigned_at}
                for asset, assigned_at in session.execute(stmt)
            ]

    def count_category_assets(self, category_id: str, kind: str | None = None) -> int:
        stmt = self._linked_assets(
            select(func.count()).select_from(AssetRow), category_id, kind
        )
        return self._count(stmt)

    def list_asset_categories(self, asset_id: str) -> list[dict]:
        stmt = (
            select(CategoryRow)
            .join(CategoryAssetRow, CategoryAssetRow.category_id == CategoryRow.id)
            .where(CategoryAssetRow.asset_id == asset_id)
            .order_by(*_CATEGORY_ORDER)
        )
        return self._all(stmt)
