# src/crawler/utils/url_utils.py
import logging
from urllib.parse import urljoin, quote

logger = logging.getLogger(__name__)

UNKNOWN_FILE_NAME = "unknown"
RESOLVED_URL_SAFE = ":/?#[]@!$&'()*+,;=%~"


class UrlUtils:
    """A collection of static methods for URL normalization and resolution."""

    @staticmethod
    def normalize_input_url(raw: str) -> str:
        """
        Turns operator input into an absolute URL.
        Only the scheme is added; host validity is left to the fetch layer.
        """
        if isinstance(raw, bytes):
            raw = raw.decode('utf-8')

        url = (raw or "").strip()
        if not url.startswith(('http://', 'https://')):
            url = 'https://' + url
        return url

    @staticmethod
    def encode_component(url: str) -> str:
        """Percent-encodes a full URL so it can travel as a single query value."""
        return quote(url, safe="-_.!~*'()")

    @staticmethod
    def resolve_against(base_url: str, src: str) -> str:
        """
        Resolves a (possibly relative) resource reference against the page URL.
        Values already starting with 'http' are returned untouched; if the join
        fails the raw value is kept.
        """
        if src.startswith('http'):
            return src
        try:
            joined = urljoin(base_url, src)
        except ValueError as e:
            logger.debug("Could not resolve '%s' against %s: %s", src, base_url, e)
            return src
        # Existing %XX escapes are left alone; spaces and the like get encoded
        return quote(joined, safe=RESOLVED_URL_SAFE)

    @staticmethod
    def file_name_from_src(src: str) -> str:
        """Last '/' segment of the raw src, cut at the first '?'."""
        segment = src.split('/')[-1].split('?')[0]
        return segment or UNKNOWN_FILE_NAME
