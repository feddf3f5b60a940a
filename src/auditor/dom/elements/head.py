from bs4 import BeautifulSoup

from ..core import ExtractorDefinition
from ..models import HeadInfo

NO_TITLE = "No Title Found"
NO_META_DESCRIPTION = "No meta description found."


def parse_head(soup: BeautifulSoup, page_url: str) -> HeadInfo:
    """
    Extracts the document title and meta description.
    Missing or empty values are replaced by readable placeholders.
    """
    title_tag = soup.find('title')
    meta_desc = soup.find('meta', attrs={'name': 'description'})

    # Collapse whitespace the way browsers expose document.title
    t_text = " ".join(title_tag.get_text().split()) if title_tag else ""
    d_text = (meta_desc.get('content') or "") if meta_desc else ""

    return HeadInfo(
        title=t_text or NO_TITLE,
        meta_description=d_text or NO_META_DESCRIPTION
    )


DEFINITION = ExtractorDefinition(
    name="head",
    extractor=parse_head,
    description="Title and meta description"
)
