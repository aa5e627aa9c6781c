import unittest
from datetime import datetime, timezone

from logo_shared import shapes
from logo_shared.locale import select_locale
from logo_shared.localized_fields import ASSET, CATEGORY, LOGO, resolve_entity
from logo_shared.types import EntityKind, EntityNotFoundError, ResponseShape

CREATED = datetime(2025, 10, 15, 21, 3, tzinfo=timezone.utc)


def _logo(**fields):
    record = {
        "id": "logo-1",
        "owner_id": "user-1",
        "title": "Legacy",
        "title_en": "Hello",
        "title_ar": "مرحبا",
        "description_ar": "وصف",
        "tags_en": ["a", "b"],
        "canvas_w": 1080.0,
        "canvas_h": 540.0,
        "legacy_format_supported": True,
        "created_at": CREATED,
        "updated_at": CREATED,
    }
    record.update(fields)
    return record


class CanonicalShapeTest(unittest.TestCase):

    def test_canonical_logo(self):
        view = resolve_entity(_logo(), LOGO, select_locale("ar"), include_variants=True)
        context = shapes.ShapeContext(layers=[{"id": "layer-1", "type": "TEXT"}])
        document = shapes.shape_view(view, ResponseShape.CANONICAL, context)
        self.assertEqual(document["title"], "مرحبا")
        self.assertEqual(document["title_en"], "Hello")
        self.assertEqual(document["tags"], ["a", "b"])
        self.assertEqual(document["created_at"], "2025-10-15T21:03:00.000Z")
        self.assertEqual(document["layers"], [{"id": "layer-1", "type": "TEXT"}])
        self.assertEqual(document["language"], "ar")
        self.assertEqual(document["direction"], "rtl")

    def test_missing_view_raises_for_every_shape(self):
        for shape in ResponseShape:
            with self.subTest(shape=shape):
                with self.assertRaises(EntityNotFoundError) as ctx:
                    shapes.shape_view(None, shape, entity_id="x")
                self.assertEqual(ctx.exception.kind, EntityKind.LOGO)

    def test_mobile_shapes_only_for_logos(self):
        view = resolve_entity({"id": "c1", "name": "Food"}, CATEGORY, select_locale("en"))
        with self.assertRaises(shapes.UnsupportedShapeError):
            shapes.shape_view(view, ResponseShape.MOBILE)


class LegacyShapeTest(unittest.TestCase):

    def _assert_bijection(self, record, schema, kind):
        for code in ("en", "ar"):
            view = resolve_entity(record, schema, select_locale(code))
            canonical = shapes.shape_view(view, ResponseShape.CANONICAL)
            legacy = shapes.shape_view(view, ResponseShape.LEGACY)
            recovered = shapes.legacy_to_canonical(legacy, kind)
            for name in view.fields:
                self.assertEqual(recovered[name], canonical[name], (code, name))

    def test_logo_round_trip(self):
        self._assert_bijection(_logo(), LOGO, EntityKind.LOGO)
        self._assert_bijection(_logo(title=None, title_en=None, title_ar=None), LOGO, EntityKind.LOGO)

    def test_category_and_asset_round_trip(self):
        self._assert_bijection(
            {"id": "c1", "name": "Food", "name_ar": "طعام"}, CATEGORY, EntityKind.CATEGORY
        )
        self._assert_bijection(
            {"id": "a1", "kind": "icon", "tags_ar": "نجم, شمس"}, ASSET, EntityKind.ASSET
        )

    def test_legacy_logo_document(self):
        view = resolve_entity(_logo(), LOGO, select_locale("en"))
        document = shapes.shape_view(view, ResponseShape.LEGACY, shapes.ShapeContext(layers=[]))
        self.assertEqual(document["logoId"], "logo-1")
        self.assertEqual(document["name"], "Hello")
        self.assertEqual(document["description"], "")
        self.assertEqual(document["metadata"]["tags"], ["a", "b"])
        self.assertTrue(document["metadata"]["legacyFormat"])
        self.assertEqual(document["metadata"]["legacyVersion"], "1.0")
        self.assertEqual(document["canvas"]["aspectRatio"], 2.0)

    def test_legacy_category_document(self):
        view = resolve_entity(
            {"id": "c1", "name_en": "Food", "sort_order": 3, "meta": {"icon_key": "x"}},
            CATEGORY,
            select_locale("en"),
        )
        document = shapes.shape_view(view, ResponseShape.LEGACY)
        self.assertEqual(document["categoryId"], "c1")
        self.assertEqual(document["sortOrder"], 3)
        self.assertEqual(document["meta"], {"icon_key": "x"})
        self.assertEqual(document["name"], "Food")
        self.assertNotIn("id", document)


class MobileShapeTest(unittest.TestCase):

    def test_mobile_defaults(self):
        view = resolve_entity(
            _logo(title_ar=None, title=None, description_ar=None, tags_en=None),
            LOGO,
            select_locale("ar"),
        )
        document = shapes.shape_view(view, ResponseShape.MOBILE)
        self.assertEqual(document["name"], "Hello")
        self.assertEqual(
            document["description"], "Logo created on 2025-10-15T21:03:00.000Z"
        )
        self.assertEqual(document["metadata"]["tags"], ["logo", "design", "responsive"])
        self.assertEqual(
            document["metadata"]["createdAtFormatted"], "15 أكتوبر 2025، 09:03 م"
        )
        self.assertEqual(document["userId"], "user-1")
        self.assertIsNone(document["templateId"])
        self.assertEqual(document["canvas"]["background"]["solidColor"], "#ffffff")
        self.assertEqual(document["export"]["format"], "png")

    def test_mobile_legacy_gradient(self):
        record = _logo(
            canvas_background_type="gradient",
            canvas_background_gradient={
                "angle": 45,
                "stops": [{"hex": "#000000", "offset": 0.5}],
            },
        )
        view = resolve_entity(record, LOGO, select_locale("en"))
        context = shapes.ShapeContext(legacy_gradient=True)
        document = shapes.shape_view(view, ResponseShape.MOBILE, context)
        self.assertEqual(
            document["canvas"]["background"],
            {
                "type": "gradient",
                "gradient": {"angle": 45, "stops": [{"color": "#000000", "position": 0.5}]},
            },
        )

    def test_mobile_structured(self):
        layers = [
            {"id": "l1", "type": "SHAPE", "properties": {"fill_hex": "#123456"}},
            {"id": "l2", "type": "TEXT", "properties": {"content": "Hi", "fill_hex": "#000"}},
        ]
        view = resolve_entity(_logo(), LOGO, select_locale("en"))
        document = shapes.shape_view(
            view, ResponseShape.MOBILE_STRUCTURED, shapes.ShapeContext(layers=layers)
        )
        self.assertIsNone(document["canvas"]["background"]["solidColor"])
        self.assertNotIn("shape", document["layers"][0])
        self.assertNotIn("fontSize", document["layers"][1]["text"])
        self.assertEqual(document["colorsUsed"], [{"role": "text", "color": "#000"}])
        self.assertNotIn("createdAtFormatted", document["metadata"])


if __name__ == "__main__":
    unittest.main()
