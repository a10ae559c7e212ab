"""
Unit tests for the recommendation engine and remediation snippets.
"""

import pytest

from evaluators.recommendations import effort_for, generate_recommendations, priority_for, title_for
from evaluators.snippets import site_name_for, snippet_for
from models.enums import (
    CONTENT_WEIGHTS,
    INTEGRATION_WEIGHTS,
    Archetype,
    Dimension,
    Effort,
    FindingStatus,
    Priority,
)
from models.schemas import INTEGRATION_MODELS, CategoryScore, ContentProfile, Finding
from utils.rounding import grade_for

ORIGIN = "https://shop.example.com"


def category(score: int, weight: float, recommendations=None, findings=None) -> CategoryScore:
    return CategoryScore(
        score=score,
        grade=grade_for(score),
        weight=weight,
        findings=findings or [],
        recommendations=recommendations or [],
    )


def content_profile(**overrides) -> ContentProfile:
    categories = {key: category(100, weight) for key, weight in CONTENT_WEIGHTS.items()}
    for key, (score, texts) in overrides.items():
        categories[key] = category(score, CONTENT_WEIGHTS[key], texts)
    return ContentProfile(**categories)


def integration_profile(archetype: Archetype = Archetype.GENERAL, **overrides):
    weights = INTEGRATION_WEIGHTS[archetype]
    categories = {key: category(100, weight) for key, weight in weights.items()}
    for key, (score, texts) in overrides.items():
        categories[key] = category(score, weights[key], texts)
    return INTEGRATION_MODELS[archetype](**categories)


class TestPriorityBands:
    """Tests for priority_for thresholds."""

    @pytest.mark.parametrize("impact,expected", [
        (8, Priority.HIGH),
        (8.01, Priority.CRITICAL),
        (5, Priority.MEDIUM),
        (5.01, Priority.HIGH),
        (3, Priority.LOW),
        (3.01, Priority.MEDIUM),
        (0, Priority.LOW),
    ])
    def test_boundaries_are_exclusive(self, impact, expected):
        """Exactly 8, 5 and 3 fall into the band below."""
        assert priority_for(impact) == expected


class TestEffort:
    """Tests for effort_for lookup."""

    def test_known_categories(self):
        """Listed categories map to their effort, others default to medium."""
        assert effort_for("schema_markup") == Effort.LOW
        assert effort_for("llms_txt") == Effort.LOW
        assert effort_for("mcp_server") == Effort.HIGH
        assert effort_for("content_uniqueness") == Effort.HIGH
        assert effort_for("eeat_signals") == Effort.MEDIUM
        assert effort_for("unknown_category") == Effort.MEDIUM


class TestTitle:
    """Tests for title_for."""

    def test_first_sentence(self):
        """The title is the text up to the first period."""
        assert title_for("Add schema. It helps engines.") == "Add schema."
        assert title_for("No period here") == "No period here."


class TestGenerateRecommendations:
    """Tests for generate_recommendations."""

    def test_no_recommendation_at_or_above_ceiling(self):
        """Categories scoring 70 or more never produce recommendations."""
        geo = content_profile(schema_markup=(70, ["Add schema."]), eeat_signals=(95, ["Add bios."]))
        assert generate_recommendations(geo, integration_profile(), Archetype.GENERAL, ORIGIN) == []

    def test_below_ceiling_produces_one_per_text(self):
        """A category at 69 emits one recommendation per recommendation string."""
        geo = content_profile(eeat_signals=(69, ["Add author bios. Link them.", "Cite credentials."]))
        result = generate_recommendations(geo, integration_profile(), Archetype.GENERAL, ORIGIN)

        assert [r.title for r in result] == ["Add author bios.", "Cite credentials."]
        first = result[0]
        assert first.category == "E-E-A-T Signals"
        assert first.category_key == "eeat_signals"
        assert first.dimension == Dimension.CONTENT
        assert first.current_score == 69
        assert first.potential_score == 99
        # 0.10 × 31 = 3.1
        assert first.priority == Priority.MEDIUM
        assert first.impact == "3% potential overall improvement"

    def test_potential_score_capped(self):
        """Potential score never exceeds 100."""
        geo = content_profile(schema_markup=(69, ["Add schema."]))
        result = generate_recommendations(geo, integration_profile(), Archetype.GENERAL, ORIGIN)
        assert result[0].potential_score == 99
        geo = content_profile(schema_markup=(0, ["Add schema."]))
        result = generate_recommendations(geo, integration_profile(), Archetype.GENERAL, ORIGIN)
        assert result[0].potential_score == 30

    def test_category_without_texts_is_skipped(self):
        """A low score with no recommendation strings contributes nothing."""
        geo = content_profile(schema_markup=(10, []))
        assert generate_recommendations(geo, integration_profile(), Archetype.GENERAL, ORIGIN) == []

    def test_ordering_by_priority_then_effort(self):
        """Critical before medium; within a band low effort comes first, content before integration."""
        geo = content_profile(
            content_uniqueness=(0, ["Publish original research."]),
            schema_markup=(0, ["Add schema."]),
            eeat_signals=(69, ["Add bios."]),
        )
        aeo = integration_profile(Archetype.GENERAL, llms_txt=(0, ["Create llms.txt."]))

        result = generate_recommendations(geo, aeo, Archetype.GENERAL, ORIGIN)

        assert [r.category_key for r in result] == [
            "schema_markup",
            "llms_txt",
            "content_uniqueness",
            "eeat_signals",
        ]
        assert [r.priority for r in result] == [
            Priority.CRITICAL, Priority.CRITICAL, Priority.CRITICAL, Priority.MEDIUM,
        ]
        assert result[1].dimension == Dimension.INTEGRATION


class TestSnippets:
    """Tests for remediation snippets."""

    def failing(self, check: str) -> Finding:
        return Finding(check=check, status=FindingStatus.FAIL, points=0, max_points=10)

    def test_site_name_is_domain(self):
        """The placeholder site name is the origin's host."""
        assert site_name_for(ORIGIN) == "shop.example.com"

    def test_failing_check_gets_template(self):
        """A failing FAQPage check yields the FAQPage JSON-LD with the site filled in."""
        scored = category(20, 0.13, findings=[self.failing("FAQPage schema")])
        snippet = snippet_for("schema_markup", scored, ORIGIN)
        assert snippet is not None
        assert snippet.language == "html"
        assert '"@type": "FAQPage"' in snippet.code
        assert "shop.example.com" in snippet.code
        assert "$" not in snippet.code

    def test_passing_check_gets_no_template(self):
        """Passing checks never produce a snippet."""
        passed = Finding(check="FAQPage schema", status=FindingStatus.PASS, points=15, max_points=15)
        assert snippet_for("schema_markup", category(100, 0.13, findings=[passed]), ORIGIN) is None

    def test_partial_check_gets_no_template(self):
        """A partially met check is not a failure and yields no snippet."""
        partial = Finding(
            check="Article schema with author/date/headline",
            status=FindingStatus.PARTIAL, points=8, max_points=15,
        )
        assert snippet_for("schema_markup", category(53, 0.13, findings=[partial]), ORIGIN) is None

    def test_failing_check_wins_over_earlier_partial(self):
        """The snippet comes from the failing check even when a partial one is listed first."""
        partial = Finding(
            check="Article schema with author/date/headline",
            status=FindingStatus.PARTIAL, points=8, max_points=15,
        )
        scored = category(40, 0.13, findings=[partial, self.failing("Organization schema")])
        snippet = snippet_for("schema_markup", scored, ORIGIN)
        assert snippet is not None
        assert snippet.label == "Organization JSON-LD"

    def test_robots_snippet_has_sitemap(self):
        """The robots.txt snippet allows AI bots and points at the sitemap."""
        scored = category(0, 0.07, findings=[self.failing("robots.txt exists")])
        snippet = snippet_for("machine_readable_sitemaps", scored, ORIGIN)
        assert "User-agent: GPTBot" in snippet.code
        assert f"Sitemap: {ORIGIN}/sitemap.xml" in snippet.code

    def test_snippet_only_on_first_recommendation(self):
        """Within a category the snippet is attached once."""
        geo = ContentProfile(**{
            key: category(100, weight) for key, weight in CONTENT_WEIGHTS.items()
        }).model_copy(update={
            "schema_markup": category(
                20, CONTENT_WEIGHTS["schema_markup"],
                recommendations=["Add FAQPage schema.", "Add breadcrumbs."],
                findings=[self.failing("FAQPage schema")],
            ),
        })
        result = generate_recommendations(geo, integration_profile(), Archetype.GENERAL, ORIGIN)
        assert result[0].code_snippet is not None
        assert result[1].code_snippet is None


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
