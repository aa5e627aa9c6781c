import unittest

from logo_shared import localized_fields as lf
from logo_shared.locale import select_locale
from logo_shared.types import EntityKind, Locale, TextDirection


TITLE = lf.LocalizedField("title")
TAGS = lf.LocalizedField("tags", lf.FieldKind.LIST)


class FallbackChainTest(unittest.TestCase):

    def test_chain_per_locale(self):
        self.assertEqual(lf.fallback_chain(TITLE, Locale.EN), ("title_en", "title"))
        self.assertEqual(
            lf.fallback_chain(TITLE, Locale.AR), ("title_ar", "title", "title_en")
        )


class ResolveFieldTest(unittest.TestCase):

    def test_worked_example(self):
        record = {"title": "Legacy", "title_en": "Hello", "title_ar": "مرحبا"}
        self.assertEqual(lf.resolve_field(record, TITLE, Locale.AR), "مرحبا")
        self.assertEqual(lf.resolve_field(record, TITLE, Locale.EN), "Hello")

    def test_arabic_prefers_legacy_over_english(self):
        record = {"title": "Legacy", "title_en": "Hello", "title_ar": None}
        self.assertEqual(lf.resolve_field(record, TITLE, Locale.AR), "Legacy")
        self.assertEqual(lf.resolve_field_source(record, TITLE, Locale.AR), "title")

    def test_arabic_reaches_english_last(self):
        record = {"title": "", "title_en": "Hello", "title_ar": "  "}
        self.assertEqual(lf.resolve_field(record, TITLE, Locale.AR), "Hello")
        self.assertEqual(lf.resolve_field_source(record, TITLE, Locale.AR), "title_en")

    def test_english_falls_back_to_legacy_when_english_is_null(self):
        record = {"title": "Old", "title_en": None, "title_ar": "شعار"}
        selection = select_locale("en")
        view = lf.resolve_entity(record, lf.LOGO, selection)
        self.assertEqual(view.fields["title"], "Old")
        self.assertEqual(view.direction, TextDirection.LTR)
        self.assertEqual(lf.resolve_field(record, TITLE, Locale.AR), "شعار")

    def test_legacy_only_record_resolves_everywhere(self):
        record = {"title": "Legacy", "tags": ["a", "b"]}
        for loc in Locale:
            self.assertEqual(lf.resolve_field(record, TITLE, loc), "Legacy")
            self.assertEqual(lf.resolve_field(record, TAGS, loc), ("a", "b"))
            self.assertEqual(lf.resolve_field_source(record, TITLE, loc), "title")

    def test_english_never_reads_arabic(self):
        record = {"title_ar": "مرحبا"}
        self.assertEqual(lf.resolve_field(record, TITLE, Locale.EN), "")

    def test_all_empty_gives_empty_value(self):
        record = {"title": None, "title_en": None, "title_ar": None}
        for loc in Locale:
            self.assertEqual(lf.resolve_field(record, TITLE, loc), "")
            self.assertEqual(lf.resolve_field(record, TAGS, loc), ())
            self.assertIsNone(lf.resolve_field_source(record, TITLE, loc))

    def test_missing_columns_count_as_empty(self):
        self.assertEqual(lf.resolve_field({}, TITLE, Locale.AR), "")

    def test_empty_list_falls_through(self):
        record = {"tags_ar": [], "tags": None, "tags_en": ["a", "b"]}
        self.assertEqual(lf.resolve_field(record, TAGS, Locale.AR), ("a", "b"))

    def test_list_from_json_or_csv_text(self):
        self.assertEqual(
            lf.resolve_field({"tags_en": '["x", "y"]'}, TAGS, Locale.EN), ("x", "y")
        )
        self.assertEqual(
            lf.resolve_field({"tags_en": "x, y,"}, TAGS, Locale.EN), ("x", "y")
        )

    def test_resolution_does_not_mutate_record(self):
        record = {"title": "Legacy", "tags_en": ["a"]}
        snapshot = {"title": "Legacy", "tags_en": ["a"]}
        lf.resolve_field(record, TITLE, Locale.AR)
        lf.resolve_entity(record, lf.LOGO, select_locale("ar"), include_variants=True)
        self.assertEqual(record, snapshot)


class ResolveEntityTest(unittest.TestCase):

    def setUp(self):
        self.record = {
            "id": "logo-1",
            "title": "Legacy",
            "title_en": "Hello",
            "title_ar": "مرحبا",
            "description_en": "Desc",
            "tags_en": ["a"],
            "canvas_w": 1080,
        }

    def test_view_fields(self):
        view = lf.resolve_entity(self.record, lf.LOGO, select_locale("ar"))
        self.assertEqual(view.entity_kind, EntityKind.LOGO)
        self.assertEqual(view.locale, Locale.AR)
        self.assertEqual(view.direction, TextDirection.RTL)
        self.assertEqual(view.fields["title"], "مرحبا")
        self.assertEqual(view.fields["description"], "Desc")
        self.assertEqual(view.fields["tags"], ("a",))
        self.assertEqual(view.structural["canvas_w"], 1080)
        self.assertNotIn("title_en", view.structural)
        self.assertEqual(dict(view.variants), {})

    def test_variants(self):
        view = lf.resolve_entity(
            self.record, lf.LOGO, select_locale("en"), include_variants=True
        )
        self.assertEqual(dict(view.variants["title"]), {"en": "Hello", "ar": "مرحبا"})

    def test_view_is_immutable(self):
        view = lf.resolve_entity(self.record, lf.LOGO, select_locale("en"))
        with self.assertRaises(TypeError):
            view.fields["title"] = "x"

    def test_resolve_many_keeps_order(self):
        records = [{"id": "1", "name_en": "One"}, {"id": "2", "name": "Two"}]
        views = lf.resolve_many(records, lf.CATEGORY, select_locale("ar"))
        self.assertEqual([v.fields["name"] for v in views], ["One", "Two"])

    def test_schema_registry(self):
        self.assertIs(lf.SCHEMAS[EntityKind.ASSET], lf.ASSET)
        self.assertIn("tags_ar", lf.ASSET.localized_columns())


if __name__ == "__main__":
    unittest.main()
