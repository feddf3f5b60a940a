# src/auditor/dom/qngine.py
import logging
from typing import Callable, List, Optional

from .models import ParsedDocument
from .rules import RULES, AuditResult
from ..model import AccessibilityReport

logger = logging.getLogger(__name__)

POINTS_PER_ERROR = 10


def compute_score(error_count: int) -> int:
    """100 minus 10 points per error, floored at 0."""
    return max(0, 100 - POINTS_PER_ERROR * error_count)


class QNGINE:
    """
    Quality Engine (QNGINE) for the accessibility structure of a page.

    Applies the ordered rule list to the extracted records of a
    ParsedDocument. Every rule runs, even when earlier ones fired, and
    findings keep the order they were produced in.
    """

    def __init__(self, rules: Optional[List[Callable[[ParsedDocument], List[AuditResult]]]] = None):
        self.rules = list(rules) if rules is not None else list(RULES)

    def codes(self) -> List[str]:
        """All issue codes the configured rules can emit."""
        found = []
        for rule in self.rules:
            for code in getattr(rule, 'defined_codes', []):
                if code not in found:
                    found.append(code)
        return found

    def find_issues(self, doc: ParsedDocument) -> List[AuditResult]:
        findings: List[AuditResult] = []
        for rule in self.rules:
            findings.extend(rule(doc))
        return findings

    def run_audit(self, doc: ParsedDocument) -> AccessibilityReport:
        """
        Runs the full rule suite on a ParsedDocument.

        Returns:
            AccessibilityReport: Structural records, error messages and score.
        """
        findings = self.find_issues(doc)
        errors = tuple(msg for _, msg in findings)
        if findings:
            logger.debug("Accessibility findings for %s: %s", doc.url, [code for code, _ in findings])

        return AccessibilityReport(
            headings=doc.headings,
            aria_elements=doc.aria_elements,
            landmarks=doc.landmarks,
            tables=doc.tables,
            score=compute_score(len(errors)),
            errors=errors
        )
