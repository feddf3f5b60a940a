from typing import List, Set, Tuple

from bs4 import BeautifulSoup

from ..core import ExtractorDefinition
from ..models import LandmarkRecord, LandmarkRole

# Evaluated in this order; the first configuration to match an element claims it.
LANDMARK_CONFIGS: List[Tuple[LandmarkRole, str]] = [
    (LandmarkRole.MAIN, '[role="main"], main'),
    (LandmarkRole.BANNER, '[role="banner"], header'),
    (LandmarkRole.CONTENTINFO, '[role="contentinfo"], footer'),
]


def parse_landmarks(soup: BeautifulSoup, page_url: str) -> Tuple[LandmarkRecord, ...]:
    """
    Detects main/banner/contentinfo regions by ARIA role or semantic tag.
    An element that matches several configurations is recorded once.
    """
    landmarks = []
    # Tag equality is structural in bs4, so claimed elements are tracked by identity
    processed: Set[int] = set()

    for role, selector in LANDMARK_CONFIGS:
        for el in soup.select(selector):
            if id(el) in processed:
                continue
            landmarks.append(LandmarkRecord(
                role=role,
                tag=el.name.lower(),
                label=el.get('aria-label') or None
            ))
            processed.add(id(el))

    return tuple(landmarks)


DEFINITION = ExtractorDefinition(
    name="landmarks",
    extractor=parse_landmarks,
    description="Landmark regions"
)
