# tests/auditor/test_audit_controller.py
import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from auditor.controllers.audit_controller import AuditController
from auditor.exceptions import ParseFailure
from auditor.dom.builder import DOMBuilder
from crawler.exceptions import AllStrategiesExhausted, FetchFailure

SAMPLE_HTML = """<!DOCTYPE html>
<html>
<head>
  <title>Sample Shop</title>
  <meta name="description" content="Hand made things.">
  <style>body { color: #333; background: #FAFAFA; } a { color: #333333; }</style>
</head>
<body>
  <header><a href="/"><img src="/logo.png" alt="Shop logo"></a></header>
  <h1>Welcome</h1>
  <h1>Second title</h1>
  <h3>Deals</h3>
  <p style="color:#333">Hi</p>
  <a href="#deals">Jump</a>
  <a href="https://partner.example.org">Partner</a>
  <img src="banner.jpg?size=large">
  <button aria-label="">x</button>
  <footer>© 2024</footer>
</body>
</html>"""


@pytest.fixture
def controller():
    fetcher = MagicMock()
    fetcher.fetch_html = AsyncMock(return_value=SAMPLE_HTML)
    return AuditController(fetcher=fetcher)


def test_build_report_assembles_every_facet(controller):
    report = controller.build_report("https://shop.example.com", SAMPLE_HTML)

    assert report.url == "https://shop.example.com"
    assert report.title == "Sample Shop"
    assert report.meta_description == "Hand made things."
    assert report.raw_html == SAMPLE_HTML

    assert report.summary.link_count == 3
    assert report.summary.image_count == 2
    assert [l.classification.value for l in report.links] == ["internal", "anchor", "external"]
    assert report.links[0].text == "(Empty Text)"

    assert list(report.accessibility.errors) == [
        "Multiple H1 tags found.",
        "Header skip detected: H1 followed by H3",
        "No 'main' landmark detected.",
        "Critical: Found 1 element(s) with empty 'aria-label' attribute.",
    ]
    assert report.accessibility.score == 60
    assert report.summary.error_count == 4

    assert [(lm.role.value, lm.tag) for lm in report.accessibility.landmarks] == [
        ("banner", "header"), ("contentinfo", "footer")
    ]
    assert [(c.hex, c.occurrence_count) for c in report.css.detected_colors] == [
        ("#333", 2), ("#FAFAFA", 1), ("#333333", 1)
    ]
    assert report.css.inline_style_element_count == 1


def test_image_without_alt_counts_as_warning(controller):
    report = controller.build_report("https://example.com", '<main><img src="a.png"></main>')
    assert report.images[0].alt == ""
    assert report.summary.warning_count == 1


def test_scenario_two_h1_no_main(controller):
    report = controller.build_report("https://example.com", "<h1>One</h1><h1>Two</h1>")
    assert "Multiple H1 tags found." in report.accessibility.errors
    assert "No 'main' landmark detected." in report.accessibility.errors
    assert report.accessibility.score == 80


def test_analyze_normalizes_before_fetching(controller):
    report = asyncio.run(controller.analyze("  shop.example.com "))
    controller.fetcher.fetch_html.assert_awaited_once_with("https://shop.example.com")
    assert report.url == "https://shop.example.com"


def test_analyze_propagates_fetch_failure():
    fetcher = MagicMock()
    fetcher.fetch_html = AsyncMock(side_effect=AllStrategiesExhausted("https://down.example"))
    controller = AuditController(fetcher=fetcher)

    with pytest.raises(FetchFailure):
        asyncio.run(controller.analyze("down.example"))


def test_analyze_propagates_parse_failure(controller, monkeypatch):
    def explode(*args, **kwargs):
        raise RuntimeError("parser crashed")

    monkeypatch.setattr("auditor.dom.builder.BeautifulSoup", explode)
    with pytest.raises(ParseFailure) as exc_info:
        asyncio.run(controller.analyze("https://example.com"))

    assert isinstance(exc_info.value.__cause__, RuntimeError)


def test_unknown_parser_backend_is_a_parse_failure():
    builder = DOMBuilder(features="no-such-parser")
    with pytest.raises(ParseFailure):
        builder.parse_html("https://example.com", "<p>x</p>")


def test_report_serializes_with_camel_case_keys(controller):
    report = controller.build_report("https://example.com", SAMPLE_HTML)
    data = report.model_dump(mode="json", by_alias=True)

    assert {"url", "title", "metaDescription", "rawHtml", "links", "images",
            "accessibility", "css", "summary"} <= set(data)
    assert set(data["links"][0]) == {"text", "titleAttr", "href", "classification", "status"}
    assert set(data["images"][0]) == {"resolvedSrc", "alt", "titleAttr", "fileName"}
    assert data["summary"]["warningCount"] == 1
    assert data["css"]["detectedColors"][0] == {"hex": "#333", "occurrenceCount": 2}
    assert data["accessibility"]["tables"] == []
