# === FILE: site_harvest/crawler/models.py ===
"""
Data models for the SiteHarvest crawler.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Tuple, Union


@dataclass(frozen=True, slots=True)
class FrontierNode:
    """A discovered URL waiting in the crawl queue."""

    url: str
    depth: int = 0

    def __post_init__(self) -> None:
        if self.depth < 0:
            raise ValueError(f"depth must be >= 0, got {self.depth}")


@dataclass(frozen=True, slots=True)
class Link:
    href: str
    text: str = ""


@dataclass(frozen=True, slots=True)
class Image:
    src: str
    alt: str = ""


@dataclass(frozen=True, slots=True)
class PageRecord:
    """Data extracted from a successfully fetched page."""

    url: str
    depth: int
    title: str = ""
    description: str = ""
    metas: Mapping[str, str] = field(default_factory=dict)
    links: Tuple[Link, ...] = ()
    images: Tuple[Image, ...] = ()
    selected: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        # read-only view over a private copy
        object.__setattr__(self, "metas", MappingProxyType(dict(self.metas)))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "url": self.url,
            "depth": self.depth,
            "title": self.title,
            "description": self.description,
            "metas": dict(self.metas),
            "links": [asdict(link) for link in self.links],
            "images": [asdict(image) for image in self.images],
            "selected": list(self.selected),
        }


@dataclass(frozen=True, slots=True)
class ErrorRecord:
    """A page whose fetch failed; carries the error message instead of data."""

    url: str
    depth: int
    error: str

    def to_dict(self) -> Dict[str, Any]:
        return {"url": self.url, "depth": self.depth, "error": self.error}


CrawlRecord = Union[PageRecord, ErrorRecord]


def record_from_dict(data: Mapping[str, Any]) -> CrawlRecord:
    """Rebuild a record from its ``to_dict()`` form (e.g. a parsed JSON report)."""
    if "error" in data:
        return ErrorRecord(url=data["url"], depth=data.get("depth", 0), error=data["error"])
    return PageRecord(
        url=data["url"],
        depth=data.get("depth", 0),
        title=data.get("title", ""),
        description=data.get("description", ""),
        metas=dict(data.get("metas", {})),
        links=tuple(Link(**link) for link in data.get("links", [])),
        images=tuple(Image(**image) for image in data.get("images", [])),
        selected=tuple(data.get("selected", [])),
    )


def records_to_dicts(records: List[CrawlRecord]) -> List[Dict[str, Any]]:
    return [record.to_dict() for record in records]


__all__ = [
    "CrawlRecord",
    "ErrorRecord",
    "FrontierNode",
    "Image",
    "Link",
    "PageRecord",
    "record_from_dict",
    "records_to_dicts",
]
