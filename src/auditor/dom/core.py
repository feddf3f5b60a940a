from typing import Any, Callable, List, Optional

from bs4 import BeautifulSoup


def audit_spec(codes: List[str]):
    """
    Decorator to declare which issue codes a specific audit rule function returns.
    Lets QNGINE report every code it can emit without running the rules.
    """
    def decorator(func):
        func.defined_codes = codes
        return func
    return decorator


# Signature every structural extractor follows: (soup, page_url) -> records
Extractor = Callable[[BeautifulSoup, str], Any]


class ExtractorDefinition:
    """
    Binds an extraction pass to the name its output is stored under in the
    ParsedDocument.
    """

    def __init__(self, name: str, extractor: Extractor, description: Optional[str] = None):
        self.name = name
        self.extractor = extractor
        self.description = description or ""

    def __call__(self, soup: BeautifulSoup, page_url: str) -> Any:
        return self.extractor(soup, page_url)

    def __repr__(self) -> str:
        return f"<ExtractorDefinition name={self.name!r}>"
