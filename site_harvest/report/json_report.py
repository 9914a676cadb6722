# === FILE: site_harvest/report/json_report.py ===

"""
Генерация JSON-отчёта для проекта SiteHarvest.

Сериализация списка записей обхода в текст.
"""
import json
from typing import Sequence

from site_harvest.crawler.models import CrawlRecord, records_to_dicts


def render_json(records: Sequence[CrawlRecord]) -> str:
    """
    Возвращает записи обхода в виде JSON-массива с отступом 2.

    :param records: записи PageRecord / ErrorRecord в порядке обхода
    :return: JSON-текст

    Пример:
    ```python
    from site_harvest.report.json_report import render_json
    print(render_json(records))
    ```
    """
    # Сериализация: dataclasses -> dict, Unicode без экранирования
    return json.dumps(records_to_dicts(list(records)), ensure_ascii=False, indent=2)
