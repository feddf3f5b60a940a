# src/auditor/dom/models.py
from enum import Enum
from typing import Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class RecordBase(BaseModel):
    """
    Immutable value record. Serializes with camelCase keys
    (model_dump(by_alias=True)) for consumers of the report.
    """
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class LinkType(str, Enum):
    INTERNAL = "internal"
    EXTERNAL = "external"
    ANCHOR = "anchor"


class LandmarkRole(str, Enum):
    MAIN = "main"
    BANNER = "banner"
    CONTENTINFO = "contentinfo"


class LinkRecord(RecordBase):
    text: str
    title_attr: str = ""
    href: str = ""
    classification: LinkType
    # Placeholder: discovered links are not probed.
    status: int = 200


class ImageRecord(RecordBase):
    resolved_src: str
    alt: str = ""
    title_attr: str = ""
    file_name: str = "unknown"


class HeadingRecord(RecordBase):
    level: int = Field(ge=1, le=6)
    text: str = ""


class LandmarkRecord(RecordBase):
    role: LandmarkRole
    tag: str
    label: Optional[str] = None


class AriaElementRecord(RecordBase):
    """
    The attribute mapping is treated as read-only once parsed; hashing
    goes over its sorted items so records and the reports holding them
    stay hashable.
    """
    tag: str
    attributes: Dict[str, str] = Field(default_factory=dict)

    def __hash__(self):
        return hash((self.tag, tuple(sorted(self.attributes.items()))))


class TableRecord(RecordBase):
    index: int = Field(ge=1)
    role: Optional[str] = None
    caption: Optional[str] = None
    has_header_section: bool = False
    row_count: int = 0


class ColorSample(RecordBase):
    hex: str
    occurrence_count: int


class CssAnalysis(RecordBase):
    detected_colors: Tuple[ColorSample, ...] = ()
    inline_style_element_count: int = 0


class HeadInfo(RecordBase):
    title: str
    meta_description: str


class ParsedDocument(RecordBase):
    """
    Output of every structural extraction pass over one parsed page.
    Consumed by the rule engine and the report assembler.
    """
    url: str
    head: HeadInfo
    links: Tuple[LinkRecord, ...] = ()
    images: Tuple[ImageRecord, ...] = ()
    headings: Tuple[HeadingRecord, ...] = ()
    landmarks: Tuple[LandmarkRecord, ...] = ()
    aria_elements: Tuple[AriaElementRecord, ...] = ()
    tables: Tuple[TableRecord, ...] = ()
    css: CssAnalysis = Field(default_factory=CssAnalysis)
