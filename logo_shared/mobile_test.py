import unittest

from logo_shared import mobile


class LegacyGradientTest(unittest.TestCase):

    def test_hex_offset_stops_are_renamed(self):
        gradient = {"angle": 30, "stops": [{"hex": "#ff0000", "offset": 0.25}, {}]}
        self.assertEqual(
            mobile.to_legacy_gradient(gradient),
            {
                "angle": 30,
                "stops": [
                    {"color": "#ff0000", "position": 0.25},
                    {"color": "#000000", "position": 0},
                ],
            },
        )

    def test_already_legacy_is_unchanged(self):
        gradient = {"angle": 0, "stops": [{"color": "#fff", "position": 1}]}
        self.assertEqual(mobile.to_legacy_gradient(gradient), gradient)

    def test_malformed_input(self):
        self.assertIsNone(mobile.to_legacy_gradient(None))
        self.assertIsNone(mobile.to_legacy_gradient({"stops": "nope"}))

    def test_legacy_background_omits_empty_keys(self):
        background = mobile.to_legacy_background(
            {"type": "solid", "solidColor": "#abcdef", "gradient": None, "image": None}
        )
        self.assertEqual(background, {"type": "solid", "solidColor": "#abcdef"})

    def test_apply_legacy_gradient_ignores_solid(self):
        canvas = {"aspectRatio": 1.0, "background": {"type": "solid", "solidColor": "#fff"}}
        self.assertIs(mobile.apply_legacy_gradient(canvas), canvas)

    def test_plain_colour_stops_are_spread_evenly(self):
        gradient = {"stops": ["#fff", "#888", "#000"]}
        self.assertEqual(
            mobile.to_legacy_gradient(gradient)["stops"],
            [
                {"color": "#fff", "position": 0.0},
                {"color": "#888", "position": 0.5},
                {"color": "#000", "position": 1.0},
            ],
        )

    def test_apply_legacy_gradient_with_plain_colour_stops(self):
        canvas = {
            "aspectRatio": 1.0,
            "background": {"type": "gradient", "gradient": {"stops": ["#fff", "#000"]}},
        }
        background = mobile.apply_legacy_gradient(canvas)["background"]
        self.assertEqual(background["type"], "gradient")
        self.assertEqual(background["gradient"]["stops"][1], {"color": "#000", "position": 1.0})


class LayerTest(unittest.TestCase):

    def test_text_layer(self):
        layer = mobile.build_layer(
            {
                "id": "l1",
                "type": "TEXT",
                "z_index": 3,
                "is_visible": True,
                "properties": {"content": "Hi", "font_size": 32},
            }
        )
        self.assertEqual(layer["type"], "text")
        self.assertEqual(layer["order"], 3)
        self.assertEqual(layer["position"], {"x": 0.5, "y": 0.5})
        self.assertEqual(layer["text"]["value"], "Hi")
        self.assertEqual(layer["text"]["fontSize"], 32)
        self.assertEqual(layer["text"]["font"], "Arial")

    def test_legacy_text_gradient(self):
        layer = mobile.build_layer(
            {
                "type": "TEXT",
                "properties": {"gradient": {"angle": 0, "stops": [{"hex": "#111", "offset": 1}]}},
            },
            legacy=True,
        )
        self.assertEqual(
            layer["text"]["gradient"]["stops"], [{"color": "#111", "position": 1}]
        )

    def test_icon_source_fallbacks(self):
        layer = mobile.build_layer({"type": "ICON", "properties": {"asset_id": "42"}})
        self.assertEqual(layer["icon"]["src"], "icon_42")
        layer = mobile.build_layer(
            {"type": "ICON", "properties": {"asset_url": "u", "asset_name": "star"}},
            structured=True,
        )
        self.assertEqual(layer["icon"]["src"], "star")

    def test_background_layer_image(self):
        layer = mobile.build_layer(
            {"type": "BACKGROUND", "properties": {"mode": "image", "asset_url": "bg.png"}},
            legacy=True,
        )
        self.assertEqual(
            layer["background"]["image"],
            {"type": "imported", "path": "bg.png", "src": "bg.png", "url": "bg.png"},
        )


class ColorsUsedTest(unittest.TestCase):

    def test_deduplicated_in_layer_order(self):
        layers = [
            {"type": "TEXT", "properties": {"fill_hex": "#000"}},
            {"type": "ICON", "properties": {"tint_hex": "#f00"}},
            {"type": "TEXT", "properties": {"fill_hex": "#000"}},
            {"type": "SHAPE", "properties": {"fill_hex": "#0f0"}},
        ]
        self.assertEqual(
            mobile.derive_colors_used(layers),
            [
                {"role": "text", "color": "#000"},
                {"role": "icon", "color": "#f00"},
                {"role": "shape", "color": "#0f0"},
            ],
        )

    def test_stored_colors_win(self):
        stored = [{"role": "brand", "color": "#123"}]
        self.assertEqual(mobile.select_colors_used(stored, []), stored)
        self.assertEqual(mobile.select_colors_used([], []), [])


class DefaultsTest(unittest.TestCase):

    def test_responsive_and_export_defaults(self):
        responsive = mobile.build_responsive({})
        self.assertEqual(responsive["version"], "3.0")
        self.assertTrue(responsive["fullyResponsive"])
        export = mobile.build_export({"export_scalable": False})
        self.assertEqual(export["quality"], 100)
        self.assertFalse(export["responsive"]["scalable"])
        self.assertTrue(export["responsive"]["maintainAspectRatio"])

    def test_canvas_aspect_ratio(self):
        self.assertEqual(mobile.build_canvas({"canvas_w": 100, "canvas_h": 50})["aspectRatio"], 2.0)
        self.assertEqual(mobile.build_canvas({})["aspectRatio"], 1.0)


class MobileIngestTest(unittest.TestCase):

    def test_logo_columns_follow_locale(self):
        data = mobile.logo_from_mobile(
            {
                "name": "مقهى",
                "description": "",
                "templateId": "t1",
                "canvas": {
                    "aspectRatio": 0.5,
                    "background": {"type": "gradient", "gradient": {"angle": 90}},
                },
                "metadata": {"tags": ["قهوة"], "version": 4},
                "export": {"format": "svg", "responsive": {"scalable": False}},
            },
            "ar",
        )
        self.assertEqual(data["title_ar"], "مقهى")
        self.assertNotIn("title", data)
        self.assertNotIn("description_ar", data)
        self.assertEqual(data["tags_ar"], ["قهوة"])
        self.assertTrue(data["is_template"])
        self.assertEqual((data["canvas_w"], data["canvas_h"]), (1080.0, 2160.0))
        self.assertEqual(data["canvas_background_gradient"], {"angle": 90})
        self.assertEqual(data["version"], 4)
        self.assertEqual(data["export_format"], "svg")
        self.assertFalse(data["export_scalable"])
        self.assertNotIn("vertical_align", data)

    def test_minimal_document_keeps_defaults(self):
        self.assertEqual(mobile.logo_from_mobile({"name": "Cafe"}, "en"), {"title_en": "Cafe"})

    def test_layer_columns(self):
        layer = mobile.layer_from_mobile(
            {
                "type": "icon",
                "order": 2,
                "visible": False,
                "position": {"x": 0.1, "y": 0.9},
                "flip": {"horizontal": True},
                "icon": {"src": "star", "color": "#ff0"},
            }
        )
        self.assertEqual(layer["type"], "ICON")
        self.assertEqual(layer["name"], "icon_layer_2")
        self.assertEqual(layer["z_index"], 2)
        self.assertFalse(layer["is_visible"])
        self.assertEqual((layer["x_norm"], layer["y_norm"]), (0.1, 0.9))
        self.assertTrue(layer["flip_horizontal"])
        self.assertNotIn("flip_vertical", layer)
        self.assertEqual(layer["properties"], {"asset_name": "star", "tint_hex": "#ff0"})

    def test_text_layer_survives_a_round_trip(self):
        stored = mobile.layer_from_mobile(
            {"type": "TEXT", "text": {"value": "Hi", "font": "Cairo", "fontSize": 30}}
        )
        rebuilt = mobile.build_layer(stored)
        self.assertEqual(rebuilt["text"]["value"], "Hi")
        self.assertEqual(rebuilt["text"]["font"], "Cairo")
        self.assertEqual(rebuilt["text"]["fontSize"], 30)


if __name__ == "__main__":
    unittest.main()
