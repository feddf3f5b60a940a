from typing import Tuple

from bs4 import BeautifulSoup

from ..core import ExtractorDefinition
from ..models import LinkRecord, LinkType

EMPTY_LINK_TEXT = "(Empty Text)"
PLACEHOLDER_STATUS = 200


def classify_link(href: str, page_url: str) -> LinkType:
    """
    Classifies an href relative to the analyzed page.
    Fragment-only hrefs are anchors; root-relative hrefs and hrefs that
    contain the page URL are internal; everything else is external.
    """
    if href.startswith('#'):
        return LinkType.ANCHOR
    if href.startswith('/') or page_url in href:
        return LinkType.INTERNAL
    return LinkType.EXTERNAL


def parse_links(soup: BeautifulSoup, page_url: str) -> Tuple[LinkRecord, ...]:
    """Parses every <a> tag into a LinkRecord, in document order."""
    records = []
    for a in soup.find_all('a'):
        href = a.get('href') or ""
        text = a.get_text().strip()

        records.append(LinkRecord(
            text=text or EMPTY_LINK_TEXT,
            title_attr=a.get('title') or "",
            href=href,
            classification=classify_link(href, page_url),
            status=PLACEHOLDER_STATUS
        ))
    return tuple(records)


DEFINITION = ExtractorDefinition(
    name="links",
    extractor=parse_links,
    description="Hyperlink inventory"
)
