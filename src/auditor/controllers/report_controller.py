import json
import logging
from pathlib import Path
from typing import Dict, Union

import pandas as pd

from auditor.model import PageAnalysis

logger = logging.getLogger(__name__)

SHEET_ORDER = ["Summary", "Issues", "Links", "Images", "Headings", "Landmarks", "Tables", "Colors"]


class ReportController:
    """
    Turns a PageAnalysis into tabular exports (Excel workbook or JSON).
    """

    @staticmethod
    def build_frames(analysis: PageAnalysis) -> Dict[str, pd.DataFrame]:
        """One DataFrame per report facet, keyed by sheet name."""
        acc = analysis.accessibility

        df_summary = pd.DataFrame([
            ("URL", analysis.url),
            ("Title", analysis.title),
            ("Meta Description", analysis.meta_description),
            ("Links", analysis.summary.link_count),
            ("Images", analysis.summary.image_count),
            ("Errors", analysis.summary.error_count),
            ("Warnings", analysis.summary.warning_count),
            ("Accessibility Score", acc.score),
            ("Inline Style Elements", analysis.css.inline_style_element_count),
        ], columns=["Metric", "Value"])

        df_issues = pd.DataFrame({"Message": list(acc.errors)}, columns=["Message"])

        df_links = pd.DataFrame(
            [link.model_dump(mode="json") for link in analysis.links],
            columns=["text", "title_attr", "href", "classification", "status"]
        ).rename(columns={
            "text": "Text", "title_attr": "Title", "href": "Href",
            "classification": "Type", "status": "Status"
        })

        df_images = pd.DataFrame(
            [img.model_dump(mode="json") for img in analysis.images],
            columns=["file_name", "resolved_src", "alt", "title_attr"]
        ).rename(columns={
            "file_name": "File", "resolved_src": "Source", "alt": "Alt", "title_attr": "Title"
        })

        df_headings = pd.DataFrame(
            [(f"H{h.level}", h.text) for h in acc.headings], columns=["Level", "Text"]
        )

        df_landmarks = pd.DataFrame(
            [(lm.role.value, lm.tag, lm.label or "") for lm in acc.landmarks],
            columns=["Role", "Tag", "Label"]
        )

        df_tables = pd.DataFrame(
            [(t.index, t.role or "", t.caption or "", t.has_header_section, t.row_count) for t in acc.tables],
            columns=["Index", "Role", "Caption", "Has THEAD", "Rows"]
        )

        df_colors = pd.DataFrame(
            [(c.hex, c.occurrence_count) for c in analysis.css.detected_colors],
            columns=["Hex", "Count"]
        )

        return {
            "Summary": df_summary,
            "Issues": df_issues,
            "Links": df_links,
            "Images": df_images,
            "Headings": df_headings,
            "Landmarks": df_landmarks,
            "Tables": df_tables,
            "Colors": df_colors,
        }

    def export_excel(self, analysis: PageAnalysis, filename: Union[str, Path]) -> str:
        frames = self.build_frames(analysis)
        try:
            with pd.ExcelWriter(filename, engine='openpyxl') as writer:
                for sheet_name in SHEET_ORDER:
                    frames[sheet_name].to_excel(writer, sheet_name=sheet_name, index=False)

                # Auto-adjust column widths for better scannability
                for sheet in writer.sheets.values():
                    for col in sheet.columns:
                        col_letter = col[0].column_letter
                        max_len = max((len(str(cell.value)) for cell in col if cell.value is not None), default=0)
                        sheet.column_dimensions[col_letter].width = min(max_len + 2, 100)
        except PermissionError as e:
            raise PermissionError(f"Cannot write {filename}; is the workbook currently open?") from e

        logger.info("Excel report written to %s", filename)
        return str(filename)

    @staticmethod
    def export_json(analysis: PageAnalysis, filename: Union[str, Path], include_html: bool = True) -> str:
        exclude = None if include_html else {"raw_html"}
        data = analysis.model_dump(mode="json", by_alias=True, exclude=exclude)
        with open(filename, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)

        logger.info("JSON report written to %s", filename)
        return str(filename)
