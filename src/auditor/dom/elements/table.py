from typing import Tuple

from bs4 import BeautifulSoup

from ..core import ExtractorDefinition
from ..models import TableRecord


def parse_tables(soup: BeautifulSoup, page_url: str) -> Tuple[TableRecord, ...]:
    """
    Summarizes every <table>, numbered from 1 in document order.
    Row counts include rows of nested sections (thead, tbody, tfoot).
    """
    tables = []
    for idx, table in enumerate(soup.find_all('table'), start=1):
        caption_tag = table.find('caption')
        caption = caption_tag.get_text().strip() if caption_tag else ""

        tables.append(TableRecord(
            index=idx,
            role=table.get('role') or None,
            caption=caption or None,
            has_header_section=table.find('thead') is not None,
            row_count=len(table.find_all('tr'))
        ))
    return tuple(tables)


DEFINITION = ExtractorDefinition(
    name="tables",
    extractor=parse_tables,
    description="Data tables"
)
