# src/auditor/dom/rules.py
from typing import List, Tuple

from .core import audit_spec
from .models import ParsedDocument, LandmarkRole

# Type alias for audit findings: (Code, Message)
AuditResult = Tuple[str, str]


@audit_spec(codes=["MULTIPLE_H1"])
def check_single_h1(doc: ParsedDocument) -> List[AuditResult]:
    if sum(1 for h in doc.headings if h.level == 1) > 1:
        return [("MULTIPLE_H1", "Multiple H1 tags found.")]
    return []


@audit_spec(codes=["FIRST_HEADING_NOT_H1"])
def check_starts_with_h1(doc: ParsedDocument) -> List[AuditResult]:
    if doc.headings and doc.headings[0].level != 1:
        return [("FIRST_HEADING_NOT_H1", "Page does not start with an H1.")]
    return []


@audit_spec(codes=["HEADING_SKIP"])
def check_heading_skips(doc: ParsedDocument) -> List[AuditResult]:
    """One finding per place where the outline jumps down more than one level."""
    res = []
    for prev, nxt in zip(doc.headings, doc.headings[1:]):
        if nxt.level > prev.level + 1:
            res.append((
                "HEADING_SKIP",
                f"Header skip detected: H{prev.level} followed by H{nxt.level}"
            ))
    return res


@audit_spec(codes=["MISSING_MAIN", "MULTIPLE_MAIN"])
def check_main_landmark(doc: ParsedDocument) -> List[AuditResult]:
    main_count = sum(1 for lm in doc.landmarks if lm.role == LandmarkRole.MAIN)
    if main_count == 0:
        return [("MISSING_MAIN", "No 'main' landmark detected.")]
    if main_count > 1:
        return [("MULTIPLE_MAIN", "Multiple 'main' landmarks detected.")]
    return []


@audit_spec(codes=["EMPTY_ARIA_LABEL"])
def check_empty_aria_labels(doc: ParsedDocument) -> List[AuditResult]:
    """Aggregates all elements whose aria-label is present but blank."""
    empty = [
        el for el in doc.aria_elements
        if 'aria-label' in el.attributes and not el.attributes['aria-label'].strip()
    ]
    if empty:
        return [(
            "EMPTY_ARIA_LABEL",
            f"Critical: Found {len(empty)} element(s) with empty 'aria-label' attribute."
        )]
    return []


# Evaluation order is part of the report contract.
RULES = [
    check_single_h1,
    check_starts_with_h1,
    check_heading_skips,
    check_main_landmark,
    check_empty_aria_labels,
]
