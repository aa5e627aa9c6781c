import unittest

from logo_backend.db import DuplicateRecordError, SqlDbClient


class SqlDbClientTests(unittest.TestCase):
    """
    Uses SQLite via SQLAlchemy URL for fast/local testing of the SQL client logic.
    """

    def setUp(self):
        self.db = SqlDbClient("sqlite+pysqlite:///:memory:")

    def test_create_and_get_logo_with_defaults(self):
        logo = self.db.create_logo({"title_en": "Hello", "tags_ar": ["شعار"]})
        fetched = self.db.get_logo(logo["id"])
        self.assertIsNotNone(fetched)
        self.assertEqual(fetched["title_en"], "Hello")
        self.assertEqual(fetched["tags_ar"], ["شعار"])
        self.assertTrue(fetched["legacy_format_supported"])
        self.assertEqual(fetched["legacy_compatibility_version"], "1.0")
        self.assertEqual(fetched["canvas_w"], 1080.0)

    def test_unknown_columns_are_dropped(self):
        logo = self.db.create_logo({"title": "x", "not_a_column": 1})
        self.assertNotIn("not_a_column", logo)

    def test_update_logo(self):
        logo = self.db.create_logo({"title": "Before"})
        updated = self.db.update_logo(logo["id"], {"title_ar": "بعد"})
        self.assertEqual(updated["title"], "Before")
        self.assertEqual(updated["title_ar"], "بعد")
        self.assertIsNone(self.db.update_logo("missing", {"title": "x"}))

    def test_list_and_count_logos(self):
        self.db.create_logo({"owner_id": "u1"})
        self.db.create_logo({"owner_id": "u1", "legacy_format_supported": False})
        self.db.create_logo({"owner_id": "u2"})

        self.assertEqual(self.db.count_logos(), 3)
        self.assertEqual(self.db.count_logos(owner_id="u1"), 2)
        self.assertEqual(self.db.count_logos(legacy_only=True), 2)
        self.assertEqual(len(self.db.list_logos(limit=2)), 2)
        self.assertEqual(len(self.db.list_logos(owner_id="u1", legacy_only=True)), 1)

    def test_layers_ordered_and_removed_with_logo(self):
        logo = self.db.create_logo({"title": "Layered"})
        top = self.db.create_layer(logo["id"], {"type": "TEXT", "z_index": 2})
        bottom = self.db.create_layer(
            logo["id"], {"type": "ICON", "z_index": 0, "properties": {"tint_hex": "#fff"}}
        )

        layers = self.db.list_layers(logo["id"])
        self.assertEqual([layer["id"] for layer in layers], [bottom["id"], top["id"]])
        self.assertEqual(layers[0]["properties"], {"tint_hex": "#fff"})

        grouped = self.db.list_layers_for_logos([logo["id"], "other"])
        self.assertEqual(len(grouped[logo["id"]]), 2)
        self.assertEqual(grouped["other"], [])

        self.assertTrue(self.db.delete_logo(logo["id"]))
        self.assertIsNone(self.db.get_layer(top["id"]))
        self.assertFalse(self.db.delete_logo(logo["id"]))

    def test_layer_update_keeps_owner(self):
        logo = self.db.create_logo({})
        layer = self.db.create_layer(logo["id"], {"type": "TEXT"})
        updated = self.db.update_layer(layer["id"], {"opacity": 0.25, "logo_id": "other"})
        self.assertEqual(updated["opacity"], 0.25)
        self.assertEqual(updated["logo_id"], logo["id"])

    def test_categories_filtered_and_sorted(self):
        self.db.create_category({"name": "B", "sort_order": 1})
        self.db.create_category({"name": "A", "sort_order": 1})
        self.db.create_category({"name": "Hidden", "is_active": False})

        names = [c["name"] for c in self.db.list_categories()]
        self.assertEqual(names, ["A", "B"])
        self.assertEqual(len(self.db.list_categories(include_inactive=True)), 3)

    def test_assets_filtered_by_kind(self):
        self.db.create_asset({"kind": "icon", "name": "Star"})
        self.db.create_asset({"kind": "image", "name": "Photo"})
        assets = self.db.list_assets(kind="icon")
        self.assertEqual([a["name"] for a in assets], ["Star"])

    def test_duplicate_user_email(self):
        self.db.create_user({"email": "a@example.com"})
        with self.assertRaises(DuplicateRecordError):
            self.db.create_user({"email": "a@example.com"})

        other = self.db.create_user({"email": "b@example.com"})
        with self.assertRaises(DuplicateRecordError):
            self.db.update_user(other["id"], {"email": "a@example.com"})

    def test_delete_user(self):
        user = self.db.create_user({"email": "c@example.com"})
        self.assertTrue(self.db.delete_user(user["id"]))
        self.assertIsNone(self.db.get_user(user["id"]))

    def test_null_for_defaulted_column_keeps_value(self):
        category = self.db.create_category({"name": "Tech", "is_active": None})
        self.assertTrue(category["is_active"])
        updated = self.db.update_category(
            category["id"], {"is_active": None, "name_ar": "تقنية"}
        )
        self.assertTrue(updated["is_active"])
        self.assertEqual(updated["name_ar"], "تقنية")

        user = self.db.create_user({"email": "n@example.com"})
        updated = self.db.update_user(user["id"], {"is_active": None})
        self.assertTrue(updated["is_active"])

    def test_categories_without_legacy_name_sort_by_english(self):
        self.db.create_category({"name_en": "Zoo"})
        self.db.create_category({"name": "Market"})
        self.db.create_category({"name_en": "Art"})

        names = [c["name"] or c["name_en"] for c in self.db.list_categories()]
        self.assertEqual(names, ["Art", "Market", "Zoo"])

    def test_count_and_find_users(self):
        self.db.create_user({"email": "a@example.com"})
        self.db.create_user({"email": "b@example.com"})
        self.assertEqual(self.db.count_users(), 2)
        self.assertEqual(self.db.find_user_by_email("b@example.com")["email"], "b@example.com")
        self.assertIsNone(self.db.find_user_by_email("missing@example.com"))

    def test_logos_filtered_by_category(self):
        self.db.create_logo({"category_id": "c1"})
        self.db.create_logo({"category_id": "c2"})
        self.assertEqual(self.db.count_logos(category_id="c1"), 1)
        self.assertEqual(len(self.db.list_logos(category_id="c2")), 1)

    def test_logo_versions(self):
        logo = self.db.create_logo({"title": "Versioned"})
        self.db.create_logo_version(logo["id"], {"logo": {"title": "Versioned"}}, "first")
        self.db.create_logo_version(logo["id"], {"logo": {"title": "Versioned"}})

        self.assertEqual(self.db.count_logo_versions(logo["id"]), 2)
        versions = self.db.list_logo_versions(logo["id"], limit=1)
        self.assertEqual(len(versions), 1)
        self.assertEqual(versions[0]["snapshot"], {"logo": {"title": "Versioned"}})

        self.db.delete_logo(logo["id"])
        self.assertEqual(self.db.count_logo_versions(logo["id"]), 0)

    def test_category_asset_links(self):
        category = self.db.create_category({"name": "Food"})
        icon = self.db.create_asset({"kind": "icon", "name": "Cup"})
        image = self.db.create_asset({"kind": "image", "name": "Photo"})

        link = self.db.assign_asset(category["id"], icon["id"])
        self.assertIsNotNone(link)
        self.assertIsNone(self.db.assign_asset(category["id"], icon["id"]))
        self.db.assign_asset(category["id"], image["id"])

        icons = self.db.list_category_assets(category["id"], kind="icon")
        self.assertEqual([a["id"] for a in icons], [icon["id"]])
        self.assertIsNotNone(icons[0]["assigned_at"])
        self.assertEqual(self.db.count_category_assets(category["id"]), 2)
        self.assertEqual(
            [c["id"] for c in self.db.list_asset_categories(icon["id"])], [category["id"]]
        )

        self.assertTrue(self.db.unassign_asset(category["id"], icon["id"]))
        self.assertFalse(self.db.unassign_asset(category["id"], icon["id"]))

        self.db.delete_category(category["id"])
        self.assertEqual(self.db.list_asset_categories(image["id"]), [])


if __name__ == "__main__":
    unittest.main()
