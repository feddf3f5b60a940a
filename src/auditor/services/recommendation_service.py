# src/auditor/services/recommendation_service.py
import json
import logging
from typing import Awaitable, Callable

from pydantic import ValidationError

from auditor.model import PageAnalysis, Recommendations

logger = logging.getLogger(__name__)

# Any async callable turning a prompt into JSON text
TextGenerator = Callable[[str], Awaitable[str]]

FALLBACK_RECOMMENDATIONS = Recommendations(
    summary="Could not generate AI summary at this time.",
    seo_priorities=("Review keyword density", "Check meta tags", "Optimize images"),
    accessibility_priorities=("Fix header hierarchy", "Add missing alt text", "Review ARIA roles"),
)


def build_prompt(analysis: PageAnalysis) -> str:
    """Condenses the report into the context handed to the text generator."""
    missing_alt = sum(1 for img in analysis.images if not img.alt)
    headings = ", ".join(f"H{h.level}: {h.text}" for h in analysis.accessibility.headings)
    errors = "; ".join(analysis.accessibility.errors)

    return (
        f"Analyze the following technical metadata for a webpage at {analysis.url}.\n"
        "Provide a professional SEO and Accessibility audit.\n\n"
        "Context:\n"
        f"- Title: {analysis.title}\n"
        f"- Description: {analysis.meta_description}\n"
        f"- Total Links: {analysis.summary.link_count}\n"
        f"- Total Images: {analysis.summary.image_count} (Missing alt text: {missing_alt})\n"
        f"- Headers: {headings}\n"
        f"- Accessibility Errors: {errors}\n"
        f"- Table count: {len(analysis.accessibility.tables)}\n\n"
        "Please provide:\n"
        "1. A short summary of the site's quality.\n"
        "2. Top 3 SEO priorities.\n"
        "3. Top 3 Accessibility priorities.\n"
        "Respond with a JSON object with the keys 'summary', 'seoPriorities' "
        "and 'accessibilityPriorities'."
    )


class RecommendationService:
    """
    Caller side of the text-generation collaborator.
    Never raises: any failure yields FALLBACK_RECOMMENDATIONS.
    """

    def __init__(self, generator: TextGenerator):
        self.generator = generator

    async def recommend(self, analysis: PageAnalysis) -> Recommendations:
        prompt = build_prompt(analysis)
        try:
            raw = await self.generator(prompt)
            return Recommendations.model_validate(json.loads(raw))
        except (json.JSONDecodeError, TypeError, ValidationError) as e:
            logger.warning("Unusable recommendation response for %s: %s", analysis.url, e)
        except Exception as e:
            logger.error("Recommendation service failed for %s: %s", analysis.url, e, exc_info=True)
        return FALLBACK_RECOMMENDATIONS
