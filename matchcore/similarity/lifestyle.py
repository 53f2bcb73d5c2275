"""
Lifestyle compatibility from categorical and ordinal answers.

A running score starts at the baseline (100) and is adjusted per category,
then clamped to [0, 100]. Categories:

    wants_kids  same stance +10 | either "maybe" 0 | otherwise -30
    religion    overlap > 50: +overlap*0.2 | 0 < overlap <= 50: neutral
    drinking,
    smoking,
    cannabis    rank diff 0: +10 | diff 1: +5 | diff >= 2: -3 * diff
    politics    rank diff 0: +10 | diff 1: +5 | diff >= 2: -5 * diff

A category is only evaluated when both users answered it, and then lands
in exactly one of the "compatible" / "neutral" lists. The one exception is
religion with zero overlap, which lands in neither list unless
zero_religion_overlap_is_neutral is set.
"""

import logging
from dataclasses import dataclass, asdict
from typing import Dict, Any, List, Optional, Tuple
import json

from ..schema import LifestyleProfile, LifestyleComparison
from .common import round_half_up, clamp_score
from .label_sets import jaccard_score

logger = logging.getLogger(__name__)

LIFESTYLE_CATEGORIES = (
    "wants_kids",
    "religion",
    "drinking",
    "smoking",
    "cannabis",
    "politics",
)


@dataclass
class LifestyleRules:
    """
    Bonus and penalty constants for lifestyle scoring.

    Defaults reproduce the production policy; overriding them is meant for
    experiments, not per-request tuning.
    """
    baseline: int = 100

    kids_match_bonus: int = 10
    kids_mismatch_penalty: int = 30

    religion_compatible_threshold: int = 50
    religion_bonus_factor: float = 0.2
    zero_religion_overlap_is_neutral: bool = False

    substance_exact_bonus: int = 10
    substance_adjacent_bonus: int = 5
    substance_penalty_per_step: int = 3

    politics_exact_bonus: int = 10
    politics_adjacent_bonus: int = 5
    politics_penalty_per_step: int = 5

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "LifestyleRules":
        return cls(**d)

    def save(self, filepath: str) -> None:
        with open(filepath, "w") as f:
            json.dump(self.to_dict(), f, indent=2)
        logger.info(f"Saved lifestyle rules to {filepath}")

    @classmethod
    def load(cls, filepath: str) -> "LifestyleRules":
        with open(filepath, "r") as f:
            d = json.load(f)
        return cls.from_dict(d)

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "LifestyleRules":
        """
        Create from main config dictionary.

        Unknown keys under scoring.lifestyle are rejected so that a typo
        in the config does not silently fall back to a default.
        """
        overrides = config.get("scoring", {}).get("lifestyle", {}) or {}
        known = set(cls.__dataclass_fields__)
        unknown = set(overrides) - known
        if unknown:
            raise ValueError(f"Unknown lifestyle rule(s) in config: {sorted(unknown)}")
        return cls(**overrides)


def _compare_ranks(
    rank_a: int,
    rank_b: int,
    exact_bonus: int,
    adjacent_bonus: int,
    penalty_per_step: int
) -> Tuple[int, bool]:
    """
    Compare two ordinal ranks.

    Returns:
        Tuple of (score delta, is_compatible)
    """
    diff = abs(rank_a - rank_b)
    if diff == 0:
        return exact_bonus, True
    if diff == 1:
        return adjacent_bonus, True
    return -penalty_per_step * diff, False


def score_lifestyle(
    lifestyle_a: LifestyleProfile,
    lifestyle_b: LifestyleProfile,
    rules: Optional[LifestyleRules] = None
) -> LifestyleComparison:
    """
    Score lifestyle compatibility between two users.

    Args:
        lifestyle_a: Lifestyle answers for user A
        lifestyle_b: Lifestyle answers for user B
        rules: Scoring constants (defaults to LifestyleRules())

    Returns:
        LifestyleComparison with the clamped score and category lists
    """
    rules = rules or LifestyleRules()
    score = rules.baseline
    compatible: List[str] = []
    neutral: List[str] = []

    # Kids intent
    if lifestyle_a.wants_kids and lifestyle_b.wants_kids:
        stance_a = lifestyle_a.wants_kids.stance
        stance_b = lifestyle_b.wants_kids.stance
        if stance_a == stance_b:
            compatible.append("wants_kids")
            score += rules.kids_match_bonus
        elif stance_a == "maybe" or stance_b == "maybe":
            neutral.append("wants_kids")
        else:
            neutral.append("wants_kids")
            score -= rules.kids_mismatch_penalty

    # Religion
    if lifestyle_a.religion and lifestyle_b.religion:
        overlap = jaccard_score(lifestyle_a.religion, lifestyle_b.religion)
        if overlap > rules.religion_compatible_threshold:
            compatible.append("religion")
            score += round_half_up(overlap * rules.religion_bonus_factor)
        elif overlap > 0 or rules.zero_religion_overlap_is_neutral:
            neutral.append("religion")

    # Drinking, smoking, cannabis share one ordinal rule
    substances = (
        ("drinking", lifestyle_a.drinking, lifestyle_b.drinking),
        ("smoking", lifestyle_a.smoking, lifestyle_b.smoking),
        ("cannabis", lifestyle_a.cannabis_use, lifestyle_b.cannabis_use),
    )
    for category, answer_a, answer_b in substances:
        if answer_a is None or answer_b is None:
            continue
        delta, is_compatible = _compare_ranks(
            answer_a.rank, answer_b.rank,
            rules.substance_exact_bonus,
            rules.substance_adjacent_bonus,
            rules.substance_penalty_per_step
        )
        score += delta
        (compatible if is_compatible else neutral).append(category)

    # Politics
    if lifestyle_a.politics is not None and lifestyle_b.politics is not None:
        delta, is_compatible = _compare_ranks(
            lifestyle_a.politics.rank, lifestyle_b.politics.rank,
            rules.politics_exact_bonus,
            rules.politics_adjacent_bonus,
            rules.politics_penalty_per_step
        )
        score += delta
        (compatible if is_compatible else neutral).append("politics")

    final_score = clamp_score(score)
    logger.debug(f"Lifestyle running score={score}, clamped={final_score}, "
                 f"compatible={compatible}, neutral={neutral}")

    return LifestyleComparison(score=final_score, compatible=compatible, neutral=neutral)
