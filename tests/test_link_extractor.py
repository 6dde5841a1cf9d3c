import pytest

from page_scout.crawler.link_extractor import extract_links, hostname_of, normalize_url

BASE = "https://example.com/blog/post"


def anchors(*hrefs: str) -> str:
    return "<html><body>" + "".join(f'<a href="{h}">x</a>' for h in hrefs) + "</body></html>"


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("https://example.com/", "https://example.com"),
        ("https://example.com", "https://example.com"),
        ("https://Example.COM/About/", "https://example.com/About"),
        ("https://example.com/about#team", "https://example.com/about"),
        ("https://example.com/search?q=a", "https://example.com/search?q=a"),
        ("https://example.com/caf%C3%A9", "https://example.com/caf%C3%A9"),
        ("https://example.com/café/", "https://example.com/caf%C3%A9"),
        ("https://example.com/a b", "https://example.com/a%20b"),
        ("https://example.com/a%20b", "https://example.com/a%20b"),
        ("https://example.com/%7Euser", "https://example.com/~user"),
        ("http://example.com:80/x", "http://example.com/x"),
        ("https://example.com:443/", "https://example.com"),
        ("http://example.com:8080/x", "http://example.com:8080/x"),
        ("http://[::1]:80/x", "http://[::1]/x"),
    ],
)
def test_normalize_url(raw, expected):
    assert normalize_url(raw) == expected


def test_relative_links_resolve_against_origin():
    links = extract_links(anchors("/about", "contact", "./team/"), BASE)
    assert links == {
        "https://example.com/about",
        "https://example.com/contact",
        "https://example.com/team",
    }


def test_only_exact_hostname_kept():
    html = anchors(
        "https://example.com/ok",
        "https://www.example.com/www",
        "https://blog.example.com/sub",
        "https://other.org/page",
        "//other.org/proto-relative",
    )
    assert extract_links(html, BASE) == {"https://example.com/ok"}


def test_non_http_schemes_dropped():
    html = anchors("mailto:hi@example.com", "javascript:void(0)", "tel:+123", "ftp://example.com/f")
    assert extract_links(html, BASE) == set()


def test_asset_extensions_dropped_case_insensitive():
    html = anchors("/doc.pdf", "/img/logo.PNG", "/app.js", "/feed.xml", "/page.html", "/archive.zip?x=1")
    assert extract_links(html, BASE) == {"https://example.com/page.html"}


def test_fragments_and_trailing_slash_collapse_to_one():
    html = anchors("/faq", "/faq/", "/faq#shipping", "https://example.com/faq/#returns")
    assert extract_links(html, BASE) == {"https://example.com/faq"}


def test_fragment_only_link_points_to_homepage():
    assert extract_links(anchors("#top"), BASE) == {"https://example.com"}


def test_malformed_href_is_skipped():
    html = anchors("http://[::1", "/fine")
    assert extract_links(html, BASE) == {"https://example.com/fine"}


def test_anchor_without_href_ignored():
    html = '<a name="x">no href</a><a href="/kept">kept</a>'
    assert extract_links(html, BASE) == {"https://example.com/kept"}


def test_hostname_of_ignores_port_and_case():
    assert hostname_of("http://Example.com:8080/x") == "example.com"
    assert hostname_of("http://[::1") is None


def test_encoded_and_raw_spellings_collapse_to_one():
    html = anchors("/caf%C3%A9", "/café", "/a b", "/a%20b", "https://example.com:443/a%20b")
    assert extract_links(html, BASE) == {
        "https://example.com/caf%C3%A9",
        "https://example.com/a%20b",
    }
