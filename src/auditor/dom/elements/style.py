import re
from collections import Counter
from typing import Optional

from bs4 import BeautifulSoup

from pagelens.core.managers.config_manager import config_manager
from ..core import ExtractorDefinition
from ..models import ColorSample, CssAnalysis

HEX_COLOR_RE = re.compile(r'#([A-Fa-f0-9]{6}|[A-Fa-f0-9]{3})')
DEFAULT_MAX_COLORS = 15


def count_colors(css_text: str) -> Counter:
    """
    Tallies literal hex colors, keyed on their uppercased form.
    3-digit and 6-digit spellings of the same color stay distinct.
    """
    counts: Counter = Counter()
    for match in HEX_COLOR_RE.finditer(css_text):
        counts[match.group(0).upper()] += 1
    return counts


def parse_css(soup: BeautifulSoup, page_url: str, limit: Optional[int] = None) -> CssAnalysis:
    """
    Color census over <style> blocks and inline style attributes.
    """
    if limit is None:
        limit = int(config_manager.get_nested("css.max_colors", DEFAULT_MAX_COLORS))

    styled = soup.find_all(attrs={'style': True})
    chunks = [s.get_text() for s in soup.find_all('style')]
    chunks.extend(el.get('style') or "" for el in styled)

    counts = count_colors(" ".join(chunks))
    # sorted() is stable and Counter keeps first-seen order, so ties stay in encounter order
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)[:limit]

    return CssAnalysis(
        detected_colors=tuple(ColorSample(hex=hex_code, occurrence_count=n) for hex_code, n in ranked),
        inline_style_element_count=len(styled)
    )


DEFINITION = ExtractorDefinition(
    name="css",
    extractor=parse_css,
    description="Hex color census"
)
