import unittest

from logo_shared import locale
from logo_shared.types import Locale, TextDirection


class SelectLocaleTest(unittest.TestCase):

    def test_supported_codes(self):
        selection = locale.select_locale("ar")
        self.assertEqual(selection.locale, Locale.AR)
        self.assertEqual(selection.direction, TextDirection.RTL)

        selection = locale.select_locale("en")
        self.assertEqual(selection.locale, Locale.EN)
        self.assertEqual(selection.direction, TextDirection.LTR)

    def test_anything_else_is_english(self):
        """Matching is exact; variants, other cases and non-strings all default."""
        for raw in (None, "", "fr", "AR", "ar-SA", " ar", 42, ["ar"]):
            with self.subTest(raw=raw):
                selection = locale.select_locale(raw)
                self.assertEqual(selection.locale, Locale.EN)
                self.assertEqual(selection.direction, TextDirection.LTR)

    def test_direction_is_rtl_only_for_arabic(self):
        for code in locale.supported_locales():
            selection = locale.select_locale(code)
            expected = TextDirection.RTL if code == "ar" else TextDirection.LTR
            self.assertEqual(selection.direction, expected)


class AcceptLanguageTest(unittest.TestCase):

    def test_quality_order(self):
        self.assertEqual(
            locale.locale_from_accept_language("fr;q=0.9, ar;q=0.8, en;q=0.5"),
            Locale.AR,
        )
        self.assertEqual(
            locale.locale_from_accept_language("en;q=0.4, ar-EG;q=0.7"), Locale.AR
        )

    def test_zero_quality_is_ignored(self):
        self.assertEqual(locale.locale_from_accept_language("ar;q=0, en"), Locale.EN)

    def test_nothing_supported(self):
        self.assertIsNone(locale.locale_from_accept_language("fr, de"))
        self.assertIsNone(locale.locale_from_accept_language(""))
        self.assertIsNone(locale.locale_from_accept_language(None))

    def test_query_beats_header(self):
        selection = locale.select_request_locale("en", "ar")
        self.assertEqual(selection.locale, Locale.EN)

    def test_unsupported_query_does_not_consult_header(self):
        selection = locale.select_request_locale("fr", "ar")
        self.assertEqual(selection.locale, Locale.EN)

    def test_header_used_without_query(self):
        selection = locale.select_request_locale(None, "ar-SA,ar;q=0.9")
        self.assertEqual(selection.locale, Locale.AR)
        self.assertEqual(selection.direction, TextDirection.RTL)


if __name__ == "__main__":
    unittest.main()
