# File: tests/test_link_extractor.py
import pytest

from site_tree.crawler.link_extractor import extract, extract_label, extract_links, resolve_href


@pytest.mark.parametrize(
    "base,href,expected",
    [
        ("http://example.com/a/", "/b/c", "http://example.com/b/c"),
        ("http://example.com/", "/b", "http://example.com/b"),
        ("http://example.com", "/b", "http://example.com/b"),
        ("http://example.com/a/", "https://other.org/x", "https://other.org/x"),
        ("http://example.com/a/", "HTTP://Other.org/X", "HTTP://Other.org/X"),
        ("http://example.com/a/", "page.html", "http://example.com/a/page.html"),
        ("http://example.com/a/", "../up", "http://example.com/a/../up"),
        ("http://example.com/a", "b", "http://example.com/ab"),
        ("http://example.com/a/", "mailto:x@example.com", "mailto:x@example.com"),
    ],
)
def test_resolve_href(base, href, expected):
    assert resolve_href(href, base) == expected


def test_extract_label_and_links_in_document_order():
    html = """
    <html><head><title>  Fish &amp; Chips  </title></head>
    <body>
      <a href="/one">1</a>
      <a class="x" href='two'>2</a>
      <a name="no-href">skip</a>
      <a href="http://example.org/three">3</a>
      <a href="/one">1 again</a>
    </body></html>
    """
    label, links = extract(html, "http://example.com/")

    assert label == "Fish & Chips"
    assert links == [
        "http://example.com/one",
        "http://example.com/two",
        "http://example.org/three",
        "http://example.com/one",
    ]


def test_first_title_wins():
    html = "<title>First</title><svg><title>Second</title></svg>"
    assert extract_label(html) == "First"


def test_missing_title_and_links():
    assert extract("<p>nothing here</p>", "http://example.com/") == ("", [])


@pytest.mark.parametrize("markup", ["", "<<<>>>", "<a href=", "<title>open", "\x00\xff<a href='/x'"])
def test_malformed_markup_never_raises(markup):
    label, links = extract(markup, "http://example.com/")
    assert isinstance(label, str)
    assert isinstance(links, list)


def test_exclusion_substring_is_configurable():
    html = '<a href="/page#main">skip</a><a href="/page#top">keep</a><a href="/main">keep</a>'

    assert extract_links(html, "http://example.com/") == [
        "http://example.com/page#top",
        "http://example.com/main",
    ]
    assert extract_links(html, "http://example.com/", exclude="#top") == [
        "http://example.com/page#main",
        "http://example.com/main",
    ]
    assert len(extract_links(html, "http://example.com/", exclude=None)) == 3
    assert len(extract_links(html, "http://example.com/", exclude="")) == 3


def test_extraction_is_idempotent():
    html = '<title>T</title><a href="/a">a</a><a href="b">b</a>'
    assert extract(html, "http://example.com/x/") == extract(html, "http://example.com/x/")
