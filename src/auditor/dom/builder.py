# src/auditor/dom/builder.py
import logging
from typing import Optional

from bs4 import BeautifulSoup

from pagelens.core.managers.config_manager import config_manager
from .models import ParsedDocument
from .registry import DOMRegistry
from ..exceptions import ParseFailure

logger = logging.getLogger(__name__)

DEFAULT_FEATURES = "html.parser"


class DOMBuilder:
    """
    Builder responsible for parsing raw HTML and running every registered
    extraction pass over the resulting tree.

    The parser backend ('html.parser', 'lxml', 'html5lib') is configuration;
    all of them recover from unclosed tags and sloppy attributes on their own.
    """

    def __init__(self, features: Optional[str] = None):
        """Initializes the builder and ensures the DOMRegistry is populated."""
        self.features = features or config_manager.get_nested("parser.features", DEFAULT_FEATURES)
        DOMRegistry.discover()

    def parse_html(self, url: str, html: str) -> BeautifulSoup:
        """
        Parses raw markup into a navigable tree.

        Raises:
            ParseFailure: If the parser backend itself raises.
        """
        # Strip a leading BOM
        clean_html = (html or "").lstrip('\ufeff')
        try:
            # Plain string attribute values; 'class' and 'rel' are not split into lists
            return BeautifulSoup(clean_html, self.features, multi_valued_attributes=None)
        except Exception as e:
            logger.error("Parser '%s' failed on %s: %s", self.features, url, e, exc_info=True)
            raise ParseFailure(url, str(e)) from e

    def extract(self, url: str, soup: BeautifulSoup) -> ParsedDocument:
        """Runs every registered extractor over an already parsed tree."""
        outputs = {}
        for defn in DOMRegistry.get_all_extractors():
            outputs[defn.name] = defn(soup, url)
        return ParsedDocument(url=url, **outputs)

    def parse_doc(self, url: str, html: str) -> ParsedDocument:
        """
        Parses raw HTML content into a ParsedDocument.

        Args:
            url (str): The normalized URL of the page, used for link
                classification and image resolution.
            html (str): The raw HTML string.
        """
        soup = self.parse_html(url, html)
        return self.extract(url, soup)
