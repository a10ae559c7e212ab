"""
Unit tests for scoring logic.

Tests the deterministic rounding, grading and blending functions with
exact expected outputs.
"""

import pytest

from evaluators.scoring import compute_scores, overall_score, weighted_score
from models.enums import (
    ARCHETYPE_SPLITS,
    CONTENT_WEIGHTS,
    GRADE_THRESHOLDS,
    INTEGRATION_WEIGHTS,
    Archetype,
    Grade,
)
from models.schemas import INTEGRATION_MODELS, CategoryScore, ContentProfile
from utils.rounding import grade_for, round_half_up, score_from_points


def uniform_category(score: int, weight: float) -> CategoryScore:
    return CategoryScore(score=score, grade=grade_for(score), weight=weight)


def uniform_content_profile(score: int) -> ContentProfile:
    return ContentProfile(**{
        key: uniform_category(score, weight) for key, weight in CONTENT_WEIGHTS.items()
    })


def uniform_integration_profile(archetype: Archetype, score: int):
    weights = INTEGRATION_WEIGHTS[archetype]
    return INTEGRATION_MODELS[archetype](**{
        key: uniform_category(score, weight) for key, weight in weights.items()
    })


class TestRoundHalfUp:
    """Tests for round_half_up function."""

    def test_round_half_up_rounds_up_on_half(self):
        """0.5 should round up to 1."""
        assert round_half_up(0.5) == 1
        assert round_half_up(2.5) == 3
        assert round_half_up(65.5) == 66

    def test_round_half_up_normal_rounding(self):
        """Normal rounding behavior."""
        assert round_half_up(2.4) == 2
        assert round_half_up(2.6) == 3
        assert round_half_up(0.0) == 0
        assert round_half_up(100.0) == 100

    def test_float_noise_does_not_leak(self):
        """52.00000000000001 + 14.0 still rounds to 66."""
        assert round_half_up(80 * 0.65 + 40 * 0.35) == 66


class TestScoreFromPoints:
    """Tests for score_from_points function."""

    def test_ratio_is_rounded(self):
        """2 of 3 points is 66.67%, rounded to 67."""
        assert score_from_points(2, 3) == 67
        assert score_from_points(85, 100) == 85
        assert score_from_points(0, 10) == 0

    def test_no_available_points_scores_zero(self):
        """A rubric without checks scores 0 rather than dividing by zero."""
        assert score_from_points(0, 0) == 0

    def test_clamped_to_100(self):
        """Points above the maximum never exceed 100."""
        assert score_from_points(12, 10) == 100


class TestGrades:
    """Tests for grade_for function."""

    def test_grade_boundaries(self):
        """Each threshold maps to its grade, one below maps to the next."""
        assert grade_for(100) == Grade.A_PLUS
        assert grade_for(90) == Grade.A_PLUS
        assert grade_for(89) == Grade.A
        assert grade_for(80) == Grade.A
        assert grade_for(79) == Grade.B
        assert grade_for(70) == Grade.B
        assert grade_for(69) == Grade.C
        assert grade_for(60) == Grade.C
        assert grade_for(59) == Grade.D
        assert grade_for(50) == Grade.D
        assert grade_for(49) == Grade.F
        assert grade_for(0) == Grade.F

    def test_every_score_has_a_grade(self):
        """Grading is total over 0-100."""
        for score in range(101):
            assert isinstance(grade_for(score), Grade)

    def test_grades_are_monotonic(self):
        """A higher score never earns a worse grade."""
        order = [grade for _, grade in GRADE_THRESHOLDS]
        ranks = [order.index(grade_for(score)) for score in range(101)]
        assert ranks == sorted(ranks, reverse=True)


class TestWeightTables:
    """Tests for the compiled-in weight and split tables."""

    def test_content_weights_sum_to_one(self):
        """The 11 content category weights sum to 1.0."""
        assert len(CONTENT_WEIGHTS) == 11
        assert sum(CONTENT_WEIGHTS.values()) == pytest.approx(1.0, abs=1e-9)

    @pytest.mark.parametrize("archetype", list(Archetype))
    def test_integration_weights_sum_to_one(self, archetype):
        """Every archetype's integration weights sum to 1.0."""
        assert sum(INTEGRATION_WEIGHTS[archetype].values()) == pytest.approx(1.0, abs=1e-9)

    @pytest.mark.parametrize("archetype", list(Archetype))
    def test_splits_sum_to_one(self, archetype):
        """Content and integration shares sum to 1.0."""
        content_share, integration_share = ARCHETYPE_SPLITS[archetype]
        assert content_share + integration_share == pytest.approx(1.0, abs=1e-9)

    @pytest.mark.parametrize("archetype", list(Archetype))
    def test_weight_keys_match_models(self, archetype):
        """Weight table keys are exactly the variant's category fields."""
        model = INTEGRATION_MODELS[archetype]
        fields = [name for name in model.model_fields if name != "archetype"]
        assert fields == list(INTEGRATION_WEIGHTS[archetype])


class TestWeightedScore:
    """Tests for weighted_score function."""

    def test_uniform_profile_scores_its_value(self):
        """A profile scoring 80 everywhere has a weighted score of 80."""
        assert weighted_score(uniform_content_profile(80)) == 80

    def test_single_category_contribution(self):
        """Only schema_markup at 100 contributes its weight × 100."""
        profile = uniform_content_profile(0)
        profile = profile.model_copy(update={
            "schema_markup": uniform_category(100, CONTENT_WEIGHTS["schema_markup"]),
        })
        assert weighted_score(profile) == 13

    def test_bounds(self):
        """Weighted scores stay within 0-100."""
        assert weighted_score(uniform_content_profile(0)) == 0
        assert weighted_score(uniform_content_profile(100)) == 100


class TestOverallScore:
    """Tests for overall_score and compute_scores."""

    def test_local_business_scenario(self):
        """GEO 80 and AEO 40 on a local business blend 65/35 to 66."""
        geo = uniform_content_profile(80)
        aeo = uniform_integration_profile(Archetype.LOCAL_BUSINESS, 40)

        (geo_score, geo_grade), (aeo_score, aeo_grade), (overall, overall_grade) = compute_scores(
            geo, aeo, Archetype.LOCAL_BUSINESS
        )

        assert (geo_score, geo_grade) == (80, Grade.A)
        assert (aeo_score, aeo_grade) == (40, Grade.F)
        assert (overall, overall_grade) == (66, Grade.C)

    def test_split_changes_with_archetype(self):
        """The same GEO/AEO pair blends differently per archetype."""
        assert overall_score(80, 40, Archetype.SAAS_API) == 60
        assert overall_score(80, 40, Archetype.CONTENT_PUBLISHER) == 68
        assert overall_score(80, 40, Archetype.GENERAL) == 64


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
