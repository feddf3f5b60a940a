from typing import Tuple

from bs4 import BeautifulSoup

from ..core import ExtractorDefinition
from ..models import HeadingRecord

HEADING_TAGS = ['h1', 'h2', 'h3', 'h4', 'h5', 'h6']


def parse_headings(soup: BeautifulSoup, page_url: str) -> Tuple[HeadingRecord, ...]:
    """
    Collects h1-h6 in document order and determines their hierarchy level (h1 -> 1).
    """
    return tuple(
        HeadingRecord(level=int(tag.name[1]), text=tag.get_text().strip())
        for tag in soup.find_all(HEADING_TAGS)
    )


DEFINITION = ExtractorDefinition(
    name="headings",
    extractor=parse_headings,
    description="Heading outline"
)
