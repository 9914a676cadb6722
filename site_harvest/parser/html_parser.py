# === FILE: site_harvest/parser/html_parser.py ===
"""HTML extraction for SiteHarvest.

:func:`extract` turns raw markup into an :class:`ExtractedPage`:

* title — text of the first <title>, or ``""``.
* description — ``content`` of the first ``<meta name="description">``.
* metas — every <meta> with a name/property/http-equiv and content/value,
  keys lower-cased (a later tag wins over an earlier one with the same key).
* links / images — absolute URLs with anchor text / alt text. References
  that cannot be resolved against the base URL are dropped.
* selected — trimmed text of the elements matching an optional CSS selector.
"""
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any, Optional

from bs4 import BeautifulSoup
from bs4.element import Tag

from site_harvest.crawler.models import Image, Link
from site_harvest.logger import logger
from site_harvest.utils import URLResolutionError, resolve_url

__all__: Sequence[str] = ("ExtractedPage", "extract")


@dataclass(slots=True)
class ExtractedPage:
    """Structured data of one page, before it is bound to a URL and depth."""

    title: str = ""
    description: str = ""
    metas: dict[str, str] = field(default_factory=dict)
    links: list[Link] = field(default_factory=list)
    images: list[Image] = field(default_factory=list)
    selected: list[str] = field(default_factory=list)

    def as_fields(self) -> dict[str, Any]:
        """Keyword arguments for :class:`~site_harvest.crawler.models.PageRecord`."""
        return {
            "title": self.title,
            "description": self.description,
            "metas": dict(self.metas),
            "links": tuple(self.links),
            "images": tuple(self.images),
            "selected": tuple(self.selected),
        }


def _attr(tag: Tag, name: str) -> str:
    value = tag.get(name)
    if isinstance(value, list):  # multi-valued attributes such as class
        return " ".join(value)
    return value or ""


def _resolve(base_url: str, ref: str) -> Optional[str]:
    try:
        return resolve_url(base_url, ref)
    except URLResolutionError as exc:
        logger.debug("Dropped reference: %s", exc)
        return None


def _description(soup: BeautifulSoup) -> str:
    for tag in soup.find_all("meta"):
        if _attr(tag, "name").lower() == "description":
            return _attr(tag, "content").strip()
    return ""


def _metas(soup: BeautifulSoup) -> dict[str, str]:
    metas: dict[str, str] = {}
    for tag in soup.find_all("meta"):
        name = _attr(tag, "name") or _attr(tag, "property") or _attr(tag, "http-equiv")
        content = _attr(tag, "content") or _attr(tag, "value")
        if name and content:
            metas[name.lower()] = content
    return metas


def extract(html: str, base_url: str, selector: Optional[str] = None) -> ExtractedPage:
    """Parse *html* fetched from *base_url* into an :class:`ExtractedPage`."""
    soup = BeautifulSoup(html, "html.parser")

    title_tag = soup.find("title")
    title = title_tag.get_text().strip() if title_tag else ""

    links: list[Link] = []
    for tag in soup.find_all("a", href=True):
        href = _resolve(base_url, _attr(tag, "href"))
        if href is not None:
            links.append(Link(href=href, text=tag.get_text().strip()))

    images: list[Image] = []
    for tag in soup.find_all("img", src=True):
        src = _resolve(base_url, _attr(tag, "src"))
        if src is not None:
            images.append(Image(src=src, alt=_attr(tag, "alt").strip()))

    selected: list[str] = []
    if selector:
        selected = [el.get_text().strip() for el in soup.select(selector)]

    return ExtractedPage(
        title=title,
        description=_description(soup),
        metas=_metas(soup),
        links=links,
        images=images,
        selected=selected,
    )
