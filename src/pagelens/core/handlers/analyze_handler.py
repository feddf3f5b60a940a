# src/pagelens/core/handlers/analyze_handler.py
import argparse
import asyncio
import json
import logging
import time
from typing import List, Optional

from tqdm.auto import tqdm

from auditor.controllers.audit_controller import AuditController, settings_from_config
from auditor.controllers.report_controller import ReportController
from auditor.exceptions import ParseFailure
from auditor.model import PageAnalysis
from auditor.services.recommendation_service import build_prompt
from crawler.exceptions import FetchFailure
from crawler.services.proxy_fetch_service import ProxyFetchService
from pagelens.core.managers.config_manager import config_manager
from pagelens.core.utils.path_utils import PathUtils

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FETCH_FAILED = 1
EXIT_PARSE_FAILED = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pagelens",
        description="Fetch pages through public relays and audit links, images and accessibility structure."
    )
    parser.add_argument("urls", nargs="+", help="One or more URLs; 'https://' is added when no scheme is given.")
    parser.add_argument("--json", action="store_true", help="Print the full report as JSON instead of a summary.")
    parser.add_argument("--no-html", action="store_true", help="Leave the raw HTML out of JSON output.")
    parser.add_argument("--export", "-o", type=str, default=None,
                        help="Write an Excel workbook (.xlsx) or JSON file (.json). "
                             "Relative paths go to the Documents folder.")
    parser.add_argument("--prompt", action="store_true",
                        help="Also print the recommendation prompt built from the report.")
    parser.add_argument("--timeout", type=float, default=None, help="Seconds allowed per relay attempt.")
    return parser


def format_summary(analysis: PageAnalysis) -> str:
    acc = analysis.accessibility
    lines = [
        f"🔎 {analysis.url}",
        f"   Title:        {analysis.title}",
        f"   Description:  {analysis.meta_description}",
        f"   Links:        {analysis.summary.link_count}",
        f"   Images:       {analysis.summary.image_count}",
        f"   Warnings:     {analysis.summary.warning_count}",
        f"   A11y score:   {acc.score}/100",
    ]
    if acc.errors:
        lines.append("   Issues:")
        lines.extend(f"     - {msg}" for msg in acc.errors)
    if analysis.css.detected_colors:
        top = ", ".join(f"{c.hex} ({c.occurrence_count})" for c in analysis.css.detected_colors[:5])
        lines.append(f"   Top colors:   {top}")
    return "\n".join(lines)


def _export(analysis: PageAnalysis, output: str, include_html: bool) -> None:
    reporter = ReportController()
    suffix = ".json" if output.lower().endswith(".json") else ".xlsx"
    path = PathUtils.resolve_export_path(output, analysis.url, suffix)
    if path.suffix.lower() == ".json":
        written = reporter.export_json(analysis, path, include_html=include_html)
    else:
        written = reporter.export_excel(analysis, path)
    tqdm.write(f"💾 Report saved to {written}")


async def run_batch(urls: List[str], parsed_args: argparse.Namespace,
                    fetcher: Optional[ProxyFetchService] = None) -> int:
    """Analyzes URLs one after another, sharing one relay session."""
    settings = settings_from_config()
    if parsed_args.timeout:
        settings = settings.model_copy(update={"timeout": parsed_args.timeout})

    exit_code = EXIT_OK
    async with (fetcher or ProxyFetchService(settings)) as active_fetcher:
        controller = AuditController(fetcher=active_fetcher)

        for raw_url in tqdm(urls, desc="Analyzing", unit="page", disable=len(urls) < 2):
            start = time.perf_counter()
            try:
                analysis = await controller.analyze(raw_url)
            except FetchFailure as e:
                tqdm.write(f"❌ {raw_url}: {e}")
                exit_code = max(exit_code, EXIT_FETCH_FAILED)
                continue
            except ParseFailure as e:
                logger.debug("Parse failure details", exc_info=True)
                tqdm.write(f"❌ An unexpected error occurred while parsing {raw_url}: {e.reason}")
                exit_code = max(exit_code, EXIT_PARSE_FAILED)
                continue

            if parsed_args.json:
                exclude = {"raw_html"} if parsed_args.no_html else None
                tqdm.write(json.dumps(
                    analysis.model_dump(mode="json", by_alias=True, exclude=exclude),
                    ensure_ascii=False, indent=2
                ))
            else:
                tqdm.write(format_summary(analysis))
                tqdm.write(f"   Finished in {time.perf_counter() - start:.2f}s")

            if parsed_args.prompt:
                tqdm.write(build_prompt(analysis))

            if parsed_args.export:
                _export(analysis, parsed_args.export, include_html=not parsed_args.no_html)

    return exit_code


def handle_analyze(args: List[str]) -> int:
    """
    Handler for the analyze command. Returns the process exit code.
    """
    parser = build_parser()
    try:
        parsed_args = parser.parse_args(args)
    except SystemExit as e:
        return int(e.code or 0)

    if parsed_args.export and len(parsed_args.urls) > 1 and parsed_args.export.lower().endswith((".json", ".xlsx")):
        print("⚠️  Exporting several URLs to one file; each report overwrites the previous one. "
              "Pass a directory to keep them all.")

    logger.debug("Fetch strategies: %s", config_manager.get_nested("fetch.strategies"))
    return asyncio.run(run_batch(parsed_args.urls, parsed_args))
