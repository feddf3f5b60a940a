import asyncio
import logging
from typing import Optional

from auditor.dom.builder import DOMBuilder
from auditor.dom.models import ParsedDocument
from auditor.dom.qngine import QNGINE
from auditor.model import PageAnalysis, ReportSummary
from crawler.model import FetchSettings
from crawler.services.proxy_fetch_service import ProxyFetchService
from crawler.utils.url_utils import UrlUtils
from pagelens.core.managers.config_manager import config_manager

logger = logging.getLogger(__name__)


def settings_from_config() -> FetchSettings:
    return FetchSettings(
        timeout=config_manager.get_nested("fetch.timeout", 10),
        strategies=config_manager.get_nested("fetch.strategies")
    )


class AuditController:
    """
    Orchestrates one page analysis: normalize, fetch through the relay chain,
    parse, extract, audit and assemble the PageAnalysis.

    The controller holds no per-page state, so one instance may serve
    concurrent analyze() calls.
    """

    def __init__(
            self,
            fetcher: Optional[ProxyFetchService] = None,
            builder: Optional[DOMBuilder] = None,
            engine: Optional[QNGINE] = None
    ):
        self.fetcher = fetcher
        self.builder = builder or DOMBuilder()
        self.engine = engine or QNGINE()

    async def fetch(self, url: str) -> str:
        if self.fetcher is not None:
            return await self.fetcher.fetch_html(url)
        async with ProxyFetchService(settings_from_config()) as fetcher:
            return await fetcher.fetch_html(url)

    async def analyze(self, raw_url: str) -> PageAnalysis:
        """
        Full pipeline for operator input.

        Raises:
            FetchFailure: No relay produced the page.
            ParseFailure: The HTML parser raised.
        """
        url = UrlUtils.normalize_input_url(raw_url)
        logger.info("Analyzing %s", url)
        html = await self.fetch(url)
        return self.build_report(url, html)

    def build_report(self, url: str, html: str) -> PageAnalysis:
        """Synchronous part of the pipeline, from raw markup to the report."""
        doc = self.builder.parse_doc(url, html)
        return self.assemble(doc, html)

    def assemble(self, doc: ParsedDocument, html: str) -> PageAnalysis:
        accessibility = self.engine.run_audit(doc)

        missing_alt = sum(1 for img in doc.images if not img.alt)
        empty_text = sum(1 for link in doc.links if not link.text)

        summary = ReportSummary(
            link_count=len(doc.links),
            image_count=len(doc.images),
            error_count=len(accessibility.errors),
            warning_count=missing_alt + empty_text
        )
        logger.info(
            "Report for %s: %d links, %d images, score %d",
            doc.url, summary.link_count, summary.image_count, accessibility.score
        )

        return PageAnalysis(
            url=doc.url,
            title=doc.head.title,
            meta_description=doc.head.meta_description,
            raw_html=html,
            links=doc.links,
            images=doc.images,
            accessibility=accessibility,
            css=doc.css,
            summary=summary
        )


def analyze(url: str) -> PageAnalysis:
    """Blocking convenience wrapper around AuditController.analyze()."""
    return asyncio.run(AuditController().analyze(url))
