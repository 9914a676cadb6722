# === FILE: site_harvest/utils.py ===
"""site_harvest.utils: URL helpers shared by the extractor and the crawl frontier."""

from __future__ import annotations

from typing import Optional, Sequence, Tuple
from urllib.parse import quote, urljoin, urlsplit, urlunsplit

__all__: Sequence[str] = (
    "URLResolutionError",
    "resolve_url",
    "origin_of",
    "same_origin",
    "is_http_url",
)

_DEFAULT_PORTS = {"http": 80, "https": 443}

# Characters left as-is when percent-encoding, matching how HttpUrl spells the seed.
_PATH_SAFE = "/%:@!$&'()*+,;=[]|^"
_QUERY_SAFE = "/?%:@!$&()*+,;=[]{}|^`"
_FRAGMENT_SAFE = "/?#%:@!$&'()*+,;=[]{}|^"

Origin = Tuple[str, str, Optional[int]]


class URLResolutionError(ValueError):
    """A relative reference could not be resolved against its base URL."""

    def __init__(self, base: str, ref: str, reason: str) -> None:
        super().__init__(f"cannot resolve {ref!r} against {base!r}: {reason}")
        self.base = base
        self.ref = ref


def _remove_dot_segments(path: str) -> str:
    if "." not in path:
        return path
    segments = path.split("/")
    resolved: list[str] = []
    for segment in segments:
        if segment == "..":
            if len(resolved) > 1:
                resolved.pop()
        elif segment != ".":
            resolved.append(segment)
    if segments[-1] in (".", ".."):
        resolved.append("")
    return "/".join(resolved) or "/"


def _ascii_host(host: str, base: str, ref: str) -> str:
    if host.isascii():
        return host
    try:
        return host.encode("idna").decode("ascii")
    except UnicodeError as exc:
        raise URLResolutionError(base, ref, f"bad host {host!r}") from exc


def resolve_url(base: str, ref: str) -> str:
    """Resolve *ref* against *base* and return an absolute URL.

    For http(s) URLs the result is canonical: scheme and host lower-cased
    (IDNA for non-ASCII hosts), dot segments removed, an empty path becomes
    ``/`` and path, query and fragment are percent-encoded (existing escapes
    are kept). Raises :class:`URLResolutionError` when the result is not
    absolute or cannot be parsed.
    """
    raw = ref.strip()
    try:
        parts = urlsplit(urljoin(base, raw))
        port = parts.port  # raises ValueError on a bad port
    except ValueError as exc:
        raise URLResolutionError(base, ref, str(exc)) from exc

    scheme = parts.scheme.lower()
    if not scheme:
        raise URLResolutionError(base, ref, "no scheme")
    if scheme not in _DEFAULT_PORTS:
        return urlunsplit((scheme, parts.netloc, parts.path, parts.query, parts.fragment))

    if not parts.hostname:
        raise URLResolutionError(base, ref, "no host")
    host = _ascii_host(parts.hostname, base, ref)
    if ":" in host:
        host = f"[{host}]"
    userinfo = parts.netloc.rpartition("@")[0]
    netloc = f"{userinfo}@{host}" if userinfo else host
    if port is not None and port != _DEFAULT_PORTS[scheme]:
        netloc = f"{netloc}:{port}"

    path = quote(_remove_dot_segments(parts.path or "/"), safe=_PATH_SAFE)
    query = quote(parts.query, safe=_QUERY_SAFE)
    fragment = quote(parts.fragment, safe=_FRAGMENT_SAFE)
    return urlunsplit((scheme, netloc, path, query, fragment))


def origin_of(url: str) -> Optional[Origin]:
    """Return ``(scheme, hostname, port)`` with the default port filled in, or None."""
    try:
        parts = urlsplit(url)
        port = parts.port
    except ValueError:
        return None
    scheme = parts.scheme.lower()
    if not scheme or not parts.hostname:
        return None
    return scheme, parts.hostname.lower(), port or _DEFAULT_PORTS.get(scheme)


def same_origin(a: str, b: str) -> bool:
    """True when both URLs share scheme, hostname and port."""
    origin_a = origin_of(a)
    return origin_a is not None and origin_a == origin_of(b)


def is_http_url(url: str) -> bool:
    return urlsplit(url).scheme.lower() in _DEFAULT_PORTS
