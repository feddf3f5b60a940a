from typing import Tuple

from bs4 import BeautifulSoup

from ..core import ExtractorDefinition
from ..models import AriaElementRecord


def is_aria_attribute(name: str) -> bool:
    return name == 'role' or name.startswith('aria-')


def parse_aria_elements(soup: BeautifulSoup, page_url: str) -> Tuple[AriaElementRecord, ...]:
    """
    Records every element carrying 'role' or an 'aria-*' attribute.
    Only those attributes are kept; empty values are preserved.
    """
    records = []
    for el in soup.find_all(True):
        attrs = {
            name: (value if isinstance(value, str) else " ".join(value or []))
            for name, value in el.attrs.items()
            if is_aria_attribute(name)
        }
        if attrs:
            records.append(AriaElementRecord(tag=el.name.lower(), attributes=attrs))
    return tuple(records)


DEFINITION = ExtractorDefinition(
    name="aria_elements",
    extractor=parse_aria_elements,
    description="ARIA usage"
)
