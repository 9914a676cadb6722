# === FILE: site_harvest/report/__init__.py ===
"""site_harvest.report: Рендеринг записей обхода в JSON или CSV и запись результата."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence, Union

from site_harvest.crawler.models import CrawlRecord
from site_harvest.report.csv_report import CSV_COLUMNS, render_csv
from site_harvest.report.json_report import render_json

FORMATS = ("json", "csv")


def render(records: Sequence[CrawlRecord], fmt: str = "json", include_errors: bool = False) -> str:
    """Рендерит записи в выбранном формате (json или csv)."""
    fmt = fmt.lower()
    if fmt == "json":
        return render_json(records)
    if fmt == "csv":
        return render_csv(records, include_errors=include_errors)
    raise ValueError(f"Неподдерживаемый формат вывода: {fmt}")


def write_report(
    records: Sequence[CrawlRecord],
    output_path: Union[str, Path],
    fmt: str = "json",
    include_errors: bool = False,
) -> Path:
    """Сохраняет отчёт по указанному пути (UTF-8) и возвращает Path."""
    text = render(records, fmt, include_errors=include_errors)
    p = Path(output_path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(text, encoding="utf-8")
    return p


__all__ = ["CSV_COLUMNS", "FORMATS", "render", "render_csv", "render_json", "write_report"]
