"""
Compatibility scoring for a pair of user profiles.

This module provides the entry point that:
1. Scores personality similarity from the Big Five vectors
2. Scores interests and values overlap and averages them
3. Scores lifestyle compatibility
4. Applies weighted fusion for the overall score

Scoring is pure and synchronous; a single CompatibilityScorer can be
shared across threads to score a whole discovery feed.
"""

import logging
from typing import Dict, Any, Iterable, List, Optional, Tuple

from ..exceptions import MissingProfileData
from ..fusion import WeightedFusion, ScoringWeights
from ..schema import (
    UserProfile,
    CompatibilityResult,
    InterestsValuesComparison,
)
from ..similarity import (
    score_personality,
    score_label_overlap,
    score_lifestyle,
    round_half_up,
    LifestyleRules,
)
from .reasons import build_reasons

logger = logging.getLogger(__name__)


class CompatibilityScorer:
    """
    Composite compatibility scorer.

    Holds only immutable configuration, so scoring calls never interact.

    Attributes:
        weights: Component weights for the overall score
        lifestyle_rules: Constants for lifestyle scoring
        max_reasons: Maximum number of highlight reasons per result
    """

    def __init__(
        self,
        weights: Optional[ScoringWeights] = None,
        lifestyle_rules: Optional[LifestyleRules] = None,
        max_reasons: int = 3
    ):
        self.weights = weights or ScoringWeights()
        self.lifestyle_rules = lifestyle_rules or LifestyleRules()
        self.max_reasons = max_reasons
        self.fusion = WeightedFusion(self.weights)

    def score(self, profile_a: UserProfile, profile_b: UserProfile) -> CompatibilityResult:
        """
        Compute compatibility between two users.

        Args:
            profile_a: Profile for user A
            profile_b: Profile for user B

        Returns:
            CompatibilityResult with overall score and breakdown

        Raises:
            MissingProfileData: If either user has no personality vector
        """
        missing = [p.user_id for p in (profile_a, profile_b) if p.personality is None]
        if missing:
            raise MissingProfileData(missing)

        # 1. Personality
        personality = score_personality(profile_a.personality, profile_b.personality)

        # 2. Interests and values, averaged
        interests = score_label_overlap(profile_a.interests, profile_b.interests)
        values = score_label_overlap(profile_a.values, profile_b.values)
        combined = round_half_up((interests.score + values.score) / 2)
        interests_and_values = InterestsValuesComparison(
            score=combined, interests=interests, values=values
        )

        # 3. Lifestyle
        lifestyle = score_lifestyle(profile_a.lifestyle, profile_b.lifestyle, self.lifestyle_rules)

        # 4. Weighted fusion
        overall = self.fusion.fuse_one(personality.score, combined, lifestyle.score)

        reasons = build_reasons(
            profile_a, personality, interests_and_values, lifestyle, limit=self.max_reasons
        )

        logger.debug(
            f"Scored {profile_a.user_id}/{profile_b.user_id}: overall={overall} "
            f"(personality={personality.score}, interests_values={combined}, "
            f"lifestyle={lifestyle.score})"
        )

        return CompatibilityResult(
            overall_score=overall,
            personality=personality,
            interests_and_values=interests_and_values,
            lifestyle=lifestyle,
            reasons=reasons
        )

    def score_batch(
        self,
        pairs: Iterable[Tuple[UserProfile, UserProfile]]
    ) -> List[CompatibilityResult]:
        """
        Compute compatibility for multiple pairs.

        Args:
            pairs: Iterable of (profile_a, profile_b) tuples

        Returns:
            List of CompatibilityResult objects, in input order
        """
        return [self.score(profile_a, profile_b) for profile_a, profile_b in pairs]

    def describe(self) -> Dict[str, Any]:
        """Configuration snapshot for run metadata."""
        return {
            "weights": self.weights.to_dict(),
            "lifestyle_rules": self.lifestyle_rules.to_dict(),
            "max_reasons": self.max_reasons,
        }


def create_scorer(config: Optional[Dict[str, Any]] = None) -> CompatibilityScorer:
    """
    Factory function to create a CompatibilityScorer.

    Args:
        config: Main configuration dictionary (defaults when None)

    Returns:
        Configured CompatibilityScorer instance
    """
    config = config or {}
    return CompatibilityScorer(
        weights=ScoringWeights.from_config(config),
        lifestyle_rules=LifestyleRules.from_config(config),
        max_reasons=config.get("scoring", {}).get("max_reasons", 3)
    )
