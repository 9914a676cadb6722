# File: tests/test_utils.py
import pytest

from site_harvest.utils import URLResolutionError, is_http_url, origin_of, resolve_url, same_origin


@pytest.mark.parametrize(
    "ref,expected",
    [
        ("/a/b", "https://example.com/a/b"),
        ("c?q=1#frag", "https://example.com/dir/c?q=1#frag"),
        ("../up", "https://example.com/up"),
        ("  spaced  ", "https://example.com/dir/spaced"),
        ("//CDN.Example.com", "https://cdn.example.com/"),
        ("HTTP://Other.ORG:8080/X", "http://other.org:8080/X"),
        ("mailto:me@example.com", "mailto:me@example.com"),
    ],
)
def test_resolve_url(ref, expected):
    assert resolve_url("https://example.com/dir/page", ref) == expected


@pytest.mark.parametrize("ref", ["http://[::1", "http://host:notaport/", "http:///nohost"])
def test_resolve_url_errors(ref):
    with pytest.raises(URLResolutionError):
        resolve_url("https://example.com/", ref)


def test_resolve_without_base_needs_scheme():
    with pytest.raises(URLResolutionError):
        resolve_url("", "/relative")


def test_origin_of_fills_default_port():
    assert origin_of("https://A.test/x") == ("https", "a.test", 443)
    assert origin_of("http://a.test:8080/") == ("http", "a.test", 8080)
    assert origin_of("not a url") is None


@pytest.mark.parametrize(
    "a,b,expected",
    [
        ("https://a.test/x", "https://a.test/y", True),
        ("https://a.test/x", "https://a.test:443/y", True),
        ("https://a.test/x", "https://b.test/y", False),
        ("https://a.test/x", "http://a.test/y", False),
        ("https://a.test/x", "https://a.test:8443/y", False),
        ("https://a.test/x", "mailto:me@a.test", False),
    ],
)
def test_same_origin(a, b, expected):
    assert same_origin(a, b) is expected


def test_is_http_url():
    assert is_http_url("https://a.test/")
    assert is_http_url("HTTP://a.test/")
    assert not is_http_url("javascript:void(0)")


@pytest.mark.parametrize(
    "ref,expected",
    [
        ("/b c", "https://a.test/b%20c"),
        ("/b%20c", "https://a.test/b%20c"),
        ("/ä", "https://a.test/%C3%A4"),
        ("/%C3%A4", "https://a.test/%C3%A4"),
        ("/s?q=a b&x=ü", "https://a.test/s?q=a%20b&x=%C3%BC"),
        ("https://a.test/a/../b", "https://a.test/b"),
        ("https://a.test/a/./b/..", "https://a.test/a/"),
        ("https://a.test/../../x", "https://a.test/x"),
        ("https://a.test:443/p", "https://a.test/p"),
        ("https://Bücher.example/", "https://xn--bcher-kva.example/"),
    ],
)
def test_resolve_url_canonical_spelling(ref, expected):
    assert resolve_url("https://a.test/", ref) == expected


def test_resolve_url_matches_seed_spelling(make_config):
    seed = make_config("https://a.test/ä b").seed
    assert resolve_url(seed, "/ä b") == seed
