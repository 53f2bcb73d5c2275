"""
Tests for weighted fusion and the composite scorer.

Covers:
- Reference scenario (overall 81) and its variant with shared values (94)
- MissingProfileData before any other work
- Overall score bounds under extreme sub-scores
- Weight validation and config overrides
- Preview reasons
- Dealbreaker filters
"""

import numpy as np
import pytest

from matchcore.exceptions import MissingProfileData
from matchcore.fusion import WeightedFusion, ScoringWeights, create_fusion_from_config
from matchcore.inference import CompatibilityScorer, create_scorer, check_dealbreakers
from matchcore.similarity import LifestyleRules

from conftest import make_profile


# =============================================================================
# Fusion
# =============================================================================

class TestWeightedFusion:

    def test_default_weights(self):
        assert ScoringWeights().to_dict() == {
            "personality": 0.5, "interests_values": 0.25, "lifestyle": 0.25
        }

    def test_halves_round_up(self):
        fusion = WeightedFusion(ScoringWeights())
        # 50 + 6.25 + 6.25 = 62.5
        assert fusion.fuse_one(100, 25, 25) == 63

    def test_vectorised(self):
        fusion = WeightedFusion(ScoringWeights())
        result = fusion.fuse(np.array([100, 0, 100]), np.array([25, 0, 100]), np.array([100, 0, 100]))
        assert result.tolist() == [81, 0, 100]

    def test_shape_mismatch(self):
        fusion = WeightedFusion(ScoringWeights())
        with pytest.raises(ValueError, match="same shape"):
            fusion.fuse(np.array([1, 2]), np.array([1]), np.array([1, 2]))

    @pytest.mark.parametrize("weights", [
        ScoringWeights(personality=0.6, interests_values=0.25, lifestyle=0.25),
        ScoringWeights(personality=1.5, interests_values=-0.25, lifestyle=-0.25),
    ])
    def test_invalid_weights_rejected(self, weights):
        with pytest.raises(ValueError):
            WeightedFusion(weights)

    def test_contributions(self):
        fusion = WeightedFusion(ScoringWeights())
        assert fusion.contributions(100, 25, 100) == {
            "personality": 50.0, "interests_values": 6.25, "lifestyle": 25.0
        }

    def test_from_config(self):
        config = {"scoring": {"weights": {"personality": 0.4, "interests_values": 0.4, "lifestyle": 0.2}}}
        fusion = create_fusion_from_config(config)
        assert fusion.fuse_one(100, 50, 0) == 60

    def test_weights_save_load(self, tmp_path):
        weights = ScoringWeights(personality=0.4, interests_values=0.3, lifestyle=0.3)
        path = tmp_path / "weights.json"
        weights.save(str(path))
        assert ScoringWeights.load(str(path)) == weights


# =============================================================================
# Composite scorer
# =============================================================================

class TestCompatibilityScorer:

    def test_reference_scenario(self, scorer, scenario_a, scenario_b):
        result = scorer.score(scenario_a, scenario_b)

        assert result.personality.score == 100
        assert result.interests_and_values.interests.score == 50
        assert result.interests_and_values.values.score == 0
        assert result.interests_and_values.score == 25
        assert result.lifestyle.score == 100
        assert result.lifestyle.compatible == [
            "wants_kids", "drinking", "smoking", "cannabis", "politics"
        ]
        assert result.lifestyle.neutral == []
        assert result.overall_score == 81

    def test_reference_scenario_with_shared_values(self, scorer, scenario_a, scenario_b):
        scenario_a.values = ["honesty"]
        scenario_b.values = ["Honesty"]
        result = scorer.score(scenario_a, scenario_b)

        assert result.interests_and_values.values.score == 100
        assert result.interests_and_values.score == 75
        assert result.overall_score == 94

    def test_to_dict_shape(self, scorer, scenario_a, scenario_b):
        data = scorer.score(scenario_a, scenario_b).to_dict()
        assert set(data) == {
            "overall_score", "personality", "interests_and_values", "lifestyle", "reasons"
        }
        assert data["interests_and_values"]["interests"] == {
            "score": 50,
            "shared": ["coffee"],
            "unique": {"user1": ["hiking"], "user2": []},
        }
        assert data["personality"]["details"]["openness"]["difference"] == 0

    def test_missing_personality_raises(self, scorer, scenario_a):
        incomplete = make_profile(
            "casey", personality=None, interests=["coffee"], values=["honesty"],
            lifestyle={"wants_kids": "want", "drinking": "socially"}
        )
        with pytest.raises(MissingProfileData) as exc_info:
            scorer.score(scenario_a, incomplete)
        assert exc_info.value.user_ids == ["casey"]
        assert "casey" in str(exc_info.value)

    def test_missing_personality_on_both_sides(self, scorer):
        a = make_profile("a", personality=None)
        b = make_profile("b", personality=None)
        with pytest.raises(MissingProfileData) as exc_info:
            scorer.score(a, b)
        assert exc_info.value.user_ids == ["a", "b"]

    def test_bounds_with_extreme_inputs(self, scorer):
        low = make_profile(
            "low",
            personality={t: 0 for t in ("openness", "conscientiousness", "extraversion",
                                        "agreeableness", "neuroticism")},
            interests=["a"], values=["x"],
            lifestyle={"wants_kids": "want", "drinking": "never", "smoking": "never",
                       "cannabis_use": "never", "politics": "very_liberal"},
        )
        high = make_profile(
            "high",
            personality={t: 100 for t in ("openness", "conscientiousness", "extraversion",
                                          "agreeableness", "neuroticism")},
            interests=["b"], values=["y"],
            lifestyle={"wants_kids": "dont_want", "drinking": "regularly", "smoking": "regularly",
                       "cannabis_use": "regularly", "politics": "very_conservative"},
        )
        result = scorer.score(low, high)
        assert result.personality.score == 0
        assert result.interests_and_values.score == 0
        # 100 - 30 - 9 - 9 - 9 - 20
        assert result.lifestyle.score == 23
        assert result.overall_score == 6
        assert 0 <= result.overall_score <= 100

    def test_symmetric(self, scorer, scenario_a, scenario_b):
        forward = scorer.score(scenario_a, scenario_b)
        backward = scorer.score(scenario_b, scenario_a)
        assert forward.overall_score == backward.overall_score
        assert forward.lifestyle == backward.lifestyle

    def test_score_batch_preserves_order(self, scorer, scenario_a, scenario_b):
        other = make_profile("other", personality={t: 0 for t in (
            "openness", "conscientiousness", "extraversion", "agreeableness", "neuroticism")})
        results = scorer.score_batch([(scenario_a, scenario_b), (scenario_a, other)])
        assert [r.overall_score for r in results] == [81, scorer.score(scenario_a, other).overall_score]

    def test_create_scorer_from_config(self, scenario_a, scenario_b):
        config = {
            "scoring": {
                "weights": {"personality": 0.5, "interests_values": 0.25, "lifestyle": 0.25},
                "max_reasons": 1,
                "lifestyle": {"zero_religion_overlap_is_neutral": True},
            }
        }
        scorer = create_scorer(config)
        assert scorer.lifestyle_rules.zero_religion_overlap_is_neutral is True
        assert scorer.score(scenario_a, scenario_b).reasons == ["Very similar personalities"]

    def test_unknown_lifestyle_rule_rejected(self):
        with pytest.raises(ValueError, match="kids_bonus"):
            create_scorer({"scoring": {"lifestyle": {"kids_bonus": 5}}})

    def test_lifestyle_rules_save_load(self, tmp_path):
        rules = LifestyleRules(kids_mismatch_penalty=40)
        path = tmp_path / "rules.json"
        rules.save(str(path))
        assert LifestyleRules.load(str(path)) == rules

    def test_describe(self):
        described = CompatibilityScorer().describe()
        assert described["weights"]["personality"] == 0.5
        assert described["max_reasons"] == 3


# =============================================================================
# Reasons
# =============================================================================

class TestReasons:

    def test_reference_scenario_reasons(self, scorer, scenario_a, scenario_b):
        assert scorer.score(scenario_a, scenario_b).reasons == [
            "Very similar personalities",
            "Both love coffee",
            "Both want kids",
        ]

    def test_compatible_personality_and_two_interests(self, scorer):
        a = make_profile(
            "a", interests=["hiking", "coffee", "jazz"],
            lifestyle={"wants_kids": "dont_want", "religion": ["buddhist"]},
        )
        b = make_profile(
            "b",
            personality={"openness": 80, "conscientiousness": 80, "extraversion": 80,
                         "agreeableness": 50, "neuroticism": 50},
            interests=["Jazz", "hiking", "coffee"],
            lifestyle={"wants_kids": "have_dont_want_more", "religion": ["buddhist"]},
        )
        result = scorer.score(a, b)
        # rms = sqrt(3 * 900 / 5) = 23.24 -> 77
        assert result.personality.score == 77
        assert result.reasons == [
            "Compatible personalities",
            "Both love coffee & hiking",
            "Both child-free",
        ]

    def test_religion_reason_and_limit(self):
        scorer = CompatibilityScorer(max_reasons=5)
        a = make_profile("a", interests=["art"], lifestyle={"wants_kids": "want", "religion": ["jewish"]})
        b = make_profile("b", interests=["art"], lifestyle={"wants_kids": "want", "religion": ["Jewish"]})
        assert scorer.score(a, b).reasons == [
            "Very similar personalities",
            "Both love art",
            "Both want kids",
            "Share religious values",
        ]

    def test_no_reasons_for_distant_profiles(self, scorer):
        a = make_profile("a", personality={"openness": 0, "conscientiousness": 0, "extraversion": 0,
                                           "agreeableness": 0, "neuroticism": 0})
        b = make_profile("b", personality={"openness": 100, "conscientiousness": 100, "extraversion": 100,
                                           "agreeableness": 100, "neuroticism": 100})
        assert scorer.score(a, b).reasons == []


# =============================================================================
# Dealbreakers
# =============================================================================

class TestDealbreakers:

    def test_hard_kids_mismatch(self):
        a = make_profile("a", lifestyle={"wants_kids": "want"})
        b = make_profile("b", lifestyle={"wants_kids": "have_dont_want_more"})
        check = check_dealbreakers(a, b)
        assert check.compatible is False
        assert check.reason == "Incompatible kids preference"

    @pytest.mark.parametrize("kids_b", ["maybe", "prefer_not_to_say", "have_want_more", None])
    def test_kids_not_a_dealbreaker(self, kids_b):
        a = make_profile("a", lifestyle={"wants_kids": "want"})
        b = make_profile("b", lifestyle={"wants_kids": kids_b})
        assert check_dealbreakers(a, b).compatible is True

    def test_gender_preferences_match(self):
        a = make_profile("a", gender="Woman", looking_for=["man"])
        b = make_profile("b", gender="man", looking_for=["woman", "non-binary"])
        assert check_dealbreakers(a, b).to_dict() == {"compatible": True, "reason": None}

    def test_gender_preferences_mismatch(self):
        a = make_profile("a", gender="woman", looking_for=["man"])
        b = make_profile("b", gender="man", looking_for=["man"])
        check = check_dealbreakers(a, b)
        assert check.compatible is False
        assert check.reason == "Gender preference mismatch"

    def test_gender_check_skipped_when_undeclared(self):
        a = make_profile("a")
        b = make_profile("b")
        assert check_dealbreakers(a, b).compatible is True

    def test_declared_gender_needs_other_looking_for(self):
        a = make_profile("a", gender="woman")
        assert check_dealbreakers(a, make_profile("b", looking_for=["woman"])).compatible is True
        assert check_dealbreakers(a, make_profile("b", looking_for=["man"])).compatible is False
        assert check_dealbreakers(make_profile("b"), a).compatible is False

    def test_looking_for_applies_without_own_gender(self):
        a = make_profile("a", looking_for=["man"])
        assert check_dealbreakers(a, make_profile("b", gender="man")).compatible is True
        check = check_dealbreakers(make_profile("b", gender="woman"), a)
        assert check.reason == "Gender preference mismatch"
        assert check_dealbreakers(a, make_profile("b")).compatible is False
