from typing import Tuple

from bs4 import BeautifulSoup

from crawler.utils.url_utils import UrlUtils
from ..core import ExtractorDefinition
from ..models import ImageRecord


def parse_images(soup: BeautifulSoup, page_url: str) -> Tuple[ImageRecord, ...]:
    images = []
    for img in soup.find_all('img'):
        src = img.get('src') or ""
        images.append(ImageRecord(
            resolved_src=UrlUtils.resolve_against(page_url, src),
            alt=img.get('alt') or "",
            title_attr=img.get('title') or "",
            # Taken from the raw src, not the resolved one
            file_name=UrlUtils.file_name_from_src(src)
        ))
    return tuple(images)


DEFINITION = ExtractorDefinition(
    name="images",
    extractor=parse_images,
    description="Image inventory"
)
