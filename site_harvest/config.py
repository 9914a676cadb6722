# === FILE: site_harvest/config.py ===
"""
Модуль для загрузки и валидации конфигурации обхода SiteHarvest.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Optional, Union

import soupsieve
import yaml
from pydantic import BaseModel, ConfigDict, Field, HttpUrl, ValidationError, field_validator

DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; SiteHarvest/1.0)"


class CrawlConfig(BaseModel):
    """Конфигурация для одного запуска обхода."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    start_url: HttpUrl = Field(..., description="Стартовый URL обхода.")
    max_depth: int = Field(0, ge=0, description="Максимальная глубина обхода ссылок (0 = одна страница).")
    delay_ms: int = Field(200, ge=0, description="Пауза между запросами (мс).")
    max_pages: int = Field(50, ge=1, description="Жесткий лимит по числу страниц.")
    same_origin_only: bool = Field(False, description="Переходить только по ссылкам того же origin.")
    selector: Optional[str] = Field(None, description="CSS-селектор для извлечения текста.")
    user_agent: str = Field(DEFAULT_USER_AGENT, min_length=1, description="Заголовок User-Agent.")
    timeout_ms: int = Field(15000, gt=0, description="Таймаут на один запрос (мс).")
    max_queue_size: Optional[int] = Field(
        10000, ge=1, description="Максимальная длина очереди обхода (None = без ограничения)."
    )

    @field_validator("selector", mode="before")
    def _blank_selector_is_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("selector")
    def _check_selector(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        try:
            soupsieve.compile(v)
        except soupsieve.SelectorSyntaxError as exc:
            raise ValueError(f"invalid CSS selector {v!r}: {exc}") from exc
        return v

    @property
    def seed(self) -> str:
        """Стартовый URL в виде строки."""
        return str(self.start_url)

    @property
    def delay(self) -> float:
        return self.delay_ms / 1000

    @property
    def timeout(self) -> float:
        return self.timeout_ms / 1000


_DEFAULT_CFG = Path("configs/default.yaml")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Неправильный YAML в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень YAML должен быть mapping, получено {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Неправильный JSON в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень JSON должен быть mapping, получено {type(data).__name__}")
    return data


def _read_file(path_obj: Path) -> dict[str, Any]:
    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        return _read_yaml(path_obj)
    if suffix == ".json":
        return _read_json(path_obj)
    raise ValueError(f"Неподдерживаемый формат конфига: {suffix}")


def load_config(path: Union[str, Path, None] = None, **overrides: Any) -> CrawlConfig:
    """
    Читает YAML или JSON, накладывает overrides (значения None игнорируются)
    и возвращает проверенный объект CrawlConfig.

    Без явного пути используется configs/default.yaml, если он существует.
    Явно указанный, но отсутствующий файл -> FileNotFoundError.
    """
    data: dict[str, Any] = {}
    if path is None:
        if _DEFAULT_CFG.is_file():
            data = _read_file(_DEFAULT_CFG)
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))
        data = _read_file(path_obj)

    data.update({k: v for k, v in overrides.items() if v is not None})
    return CrawlConfig(**data)


__all__ = ["CrawlConfig", "DEFAULT_USER_AGENT", "ValidationError", "load_config"]
