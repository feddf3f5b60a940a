# tests/auditor/test_recommendation_service.py
import asyncio
import json

import pytest

from auditor.controllers.audit_controller import AuditController
from auditor.services.recommendation_service import (
    FALLBACK_RECOMMENDATIONS,
    RecommendationService,
    build_prompt,
)


@pytest.fixture
def analysis():
    html = """
        <title>Bakery</title><meta name="description" content="Fresh bread daily">
        <h1>Welcome</h1><h3>Opening hours</h3>
        <img src="bread.jpg"><img src="cake.jpg" alt="Cake">
        <table><tr><td>Mon</td></tr></table>
    """
    return AuditController(fetcher=object()).build_report("https://bakery.example", html)


def test_prompt_contains_report_context(analysis):
    prompt = build_prompt(analysis)

    assert "https://bakery.example" in prompt
    assert "- Title: Bakery" in prompt
    assert "- Description: Fresh bread daily" in prompt
    assert "- Total Images: 2 (Missing alt text: 1)" in prompt
    assert "- Headers: H1: Welcome, H3: Opening hours" in prompt
    assert "Header skip detected: H1 followed by H3; No 'main' landmark detected." in prompt
    assert "- Table count: 1" in prompt


def test_valid_response_is_parsed(analysis):
    async def generator(prompt):
        return json.dumps({
            "summary": "Solid basics.",
            "seoPriorities": ["Longer description", "Add canonical", "Compress images"],
            "accessibilityPriorities": ["Add alt text", "Add <main>", "Fix heading order"],
        })

    result = asyncio.run(RecommendationService(generator).recommend(analysis))

    assert result.summary == "Solid basics."
    assert result.seo_priorities[0] == "Longer description"
    assert len(result.accessibility_priorities) == 3


@pytest.mark.parametrize("behaviour", ["raise", "not-json", "wrong-shape"])
def test_failures_fall_back(analysis, behaviour):
    async def generator(prompt):
        if behaviour == "raise":
            raise ConnectionError("service down")
        if behaviour == "not-json":
            return "Sorry, I can't do that."
        return json.dumps(["just", "a", "list"])

    result = asyncio.run(RecommendationService(generator).recommend(analysis))
    assert result == FALLBACK_RECOMMENDATIONS


def test_fallback_has_the_expected_shape():
    data = FALLBACK_RECOMMENDATIONS.model_dump(by_alias=True)
    assert set(data) == {"summary", "seoPriorities", "accessibilityPriorities"}
    assert len(data["seoPriorities"]) == 3
