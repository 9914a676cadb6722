# === FILE: site_harvest/report/csv_report.py ===
"""
CSV rendering: one row per record with a fixed summary schema.
"""
from __future__ import annotations

import csv
import io
from typing import List, Sequence

from site_harvest.crawler.models import CrawlRecord, ErrorRecord

CSV_COLUMNS: List[str] = ["url", "title", "description", "links_count", "images_count"]


def _row(record: CrawlRecord, include_errors: bool) -> List[object]:
    if isinstance(record, ErrorRecord):
        row: List[object] = [record.url, "", "", 0, 0]
        if include_errors:
            row.append(record.error)
        return row
    row = [record.url, record.title, record.description, len(record.links), len(record.images)]
    if include_errors:
        row.append("")
    return row


def render_csv(records: Sequence[CrawlRecord], include_errors: bool = False) -> str:
    """
    Render *records* as CSV text.

    Error records degrade to empty title/description and zero counts; their
    message is only kept when *include_errors* adds the trailing ``error``
    column. Cells containing a comma, quote or line break are quoted, with
    inner quotes doubled.
    """
    buf = io.StringIO()
    writer = csv.writer(buf, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    header = CSV_COLUMNS + ["error"] if include_errors else CSV_COLUMNS
    writer.writerow(header)
    for record in records:
        writer.writerow(_row(record, include_errors))
    return buf.getvalue()
