import unittest

from logo_shared import coverage
from logo_shared.localized_fields import LOGO


class CoverageTest(unittest.TestCase):

    def test_source_label(self):
        self.assertEqual(coverage.source_label("title", "title_ar"), "ar")
        self.assertEqual(coverage.source_label("title", "title"), "legacy")
        self.assertEqual(coverage.source_label("title", None), "empty")

    def test_counts_by_source(self):
        records = [
            {"title_en": "Hello", "title_ar": "مرحبا"},
            {"title": "Legacy", "title_en": "Hello"},
            {"title_en": "Only English"},
            {},
        ]
        report = coverage.coverage(records, LOGO)
        self.assertEqual(
            dict(report["title"]["ar"]), {"ar": 1, "legacy": 1, "en": 1, "empty": 1}
        )
        self.assertEqual(dict(report["title"]["en"]), {"en": 3, "empty": 1})
        self.assertEqual(sum(report["tags"]["ar"].values()), 4)


if __name__ == "__main__":
    unittest.main()
