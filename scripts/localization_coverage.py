"""
Report how much stored content is translated, per entity kind, field and locale.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from logo_backend.db import DbClient
from logo_backend.dependencies import get_db_client
from logo_shared.coverage import coverage
from logo_shared.localized_fields import SCHEMAS
from logo_shared.types import EntityKind

logger = logging.getLogger(__name__)

PAGE_SIZE = 500


def _records(db: DbClient, kind: EntityKind) -> list[dict]:
    if kind == EntityKind.CATEGORY:
        return db.list_categories(include_inactive=True)
    fetch = db.list_logos if kind == EntityKind.LOGO else db.list_assets
    rows: list[dict] = []
    offset = 0
    while True:
        page = fetch(limit=PAGE_SIZE, offset=offset)
        rows.extend(page)
        if len(page) < PAGE_SIZE:
            return rows
        offset += PAGE_SIZE


def main() -> int:
    parser = argparse.ArgumentParser(description="Localization coverage report")
    parser.add_argument(
        "-k",
        "--kind",
        choices=[kind.value for kind in SCHEMAS],
        action="append",
        help="Entity kind to report on (repeatable; default all)",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(name)s %(levelname)s %(asctime)s %(message)s",
        datefmt="%m/%d/%Y %I:%M:%S %p",
    )

    db = get_db_client()
    kinds = [EntityKind(kind) for kind in args.kind] if args.kind else list(SCHEMAS)
    for kind in kinds:
        records = _records(db, kind)
        logger.info("%s: %d records", kind.value, len(records))
        report = coverage(records, SCHEMAS[kind])
        for field_name, per_locale in report.items():
            for locale, counts in per_locale.items():
                summary = ", ".join(
                    f"{source}={count}" for source, count in counts.most_common()
                )
                print(f"{kind.value}.{field_name}[{locale}]: {summary or 'no records'}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
