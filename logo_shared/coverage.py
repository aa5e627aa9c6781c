"""
Translation coverage: which column supplies each localized value.
"""

from __future__ import annotations

from collections import Counter
from typing import Any, Dict, Iterable, Mapping

from logo_shared.localized_fields import EntitySchema, resolve_field_source
from logo_shared.types import Locale

EMPTY = "empty"


def source_label(localized_name: str, column: str | None) -> str:
    """Locale code, "legacy" or "empty" for a column picked by the resolver."""
    if column is None:
        return EMPTY
    if column == localized_name:
        return "legacy"
    return column[len(localized_name) + 1 :]


def coverage(
    records: Iterable[Mapping[str, Any]], schema: EntitySchema
) -> Dict[str, Dict[str, Counter]]:
    """
    Count, per localized field and locale, where the resolved value came from.

    A locale reading its own column is reported under the locale code, so for
    Arabic a healthy field shows mostly "ar" and little "legacy", "en" or "empty".
    """
    report: Dict[str, Dict[str, Counter]] = {
        localized.name: {locale.value: Counter() for locale in Locale}
        for localized in schema.localized_fields
    }
    for record in records:
        for localized in schema.localized_fields:
            for locale in Locale:
                column = resolve_field_source(record, localized, locale)
                report[localized.name][locale.value][source_label(localized.name, column)] += 1
    return report
