"""
Short highlights shown on a discovery card next to the score.

Reasons are derived from an already computed breakdown; they never
influence the score itself.
"""

from typing import List

from ..schema import (
    UserProfile,
    PersonalityComparison,
    InterestsValuesComparison,
    LifestyleComparison,
)

VERY_SIMILAR_PERSONALITY = 80
COMPATIBLE_PERSONALITY = 70


def build_reasons(
    profile_a: UserProfile,
    personality: PersonalityComparison,
    interests_and_values: InterestsValuesComparison,
    lifestyle: LifestyleComparison,
    limit: int = 3
) -> List[str]:
    """
    Build up to `limit` reasons, most important first.

    Args:
        profile_a: Profile of the viewing user (kids stance is read from it)
        personality: Personality breakdown
        interests_and_values: Interests/values breakdown
        lifestyle: Lifestyle breakdown
        limit: Maximum number of reasons returned

    Returns:
        List of reason strings
    """
    reasons = []

    if personality.score >= VERY_SIMILAR_PERSONALITY:
        reasons.append("Very similar personalities")
    elif personality.score >= COMPATIBLE_PERSONALITY:
        reasons.append("Compatible personalities")

    shared_interests = interests_and_values.interests.shared
    if shared_interests:
        reasons.append(f"Both love {' & '.join(shared_interests[:2])}")

    if "wants_kids" in lifestyle.compatible:
        stance = profile_a.lifestyle.wants_kids.stance
        if stance == "yes":
            reasons.append("Both want kids")
        elif stance == "no":
            reasons.append("Both child-free")

    if "religion" in lifestyle.compatible:
        reasons.append("Share religious values")

    return reasons[:limit]
