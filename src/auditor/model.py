from typing import Tuple

from pydantic import Field

from auditor.dom.models import (
    RecordBase,
    LinkRecord,
    ImageRecord,
    HeadingRecord,
    LandmarkRecord,
    AriaElementRecord,
    TableRecord,
    CssAnalysis,
)


class AccessibilityReport(RecordBase):
    """
    Structural accessibility findings for one page.
    `errors` keeps rule evaluation order; `score` drops 10 points per error.
    """
    headings: Tuple[HeadingRecord, ...] = ()
    aria_elements: Tuple[AriaElementRecord, ...] = ()
    landmarks: Tuple[LandmarkRecord, ...] = ()
    tables: Tuple[TableRecord, ...] = ()
    score: int = Field(default=100, ge=0, le=100)
    errors: Tuple[str, ...] = ()


class ReportSummary(RecordBase):
    link_count: int = 0
    image_count: int = 0
    error_count: int = 0
    warning_count: int = 0


class PageAnalysis(RecordBase):
    """
    Root object handed to the presentation layer, consumed read-only.
    """
    url: str
    title: str
    meta_description: str
    raw_html: str
    links: Tuple[LinkRecord, ...] = ()
    images: Tuple[ImageRecord, ...] = ()
    accessibility: AccessibilityReport = Field(default_factory=AccessibilityReport)
    css: CssAnalysis = Field(default_factory=CssAnalysis)
    summary: ReportSummary = Field(default_factory=ReportSummary)


class Recommendations(RecordBase):
    """Shape expected back from the text-generation collaborator."""
    summary: str
    seo_priorities: Tuple[str, ...] = ()
    accessibility_priorities: Tuple[str, ...] = ()
