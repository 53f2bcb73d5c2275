"""
Hard filters applied before two users are shown to each other.

Unlike the lifestyle score, which only penalises a kids mismatch, a
dealbreaker removes the pair from the discovery feed entirely.
"""

import logging

from ..schema import UserProfile, DealbreakerCheck

logger = logging.getLogger(__name__)


def _normalize(value: str) -> str:
    return value.strip().lower()


def _gender_accepted(viewer: UserProfile, other: UserProfile) -> bool:
    """
    Apply the viewer's own gender fields to the other user.

    A declared gender must appear in the other user's looking_for, and a
    non-empty looking_for must contain the other user's gender. An
    undeclared field on the viewer's side places no constraint.
    """
    if viewer.gender:
        wanted_by_other = {_normalize(g) for g in other.looking_for}
        if _normalize(viewer.gender) not in wanted_by_other:
            return False
    if viewer.looking_for:
        wanted_by_viewer = {_normalize(g) for g in viewer.looking_for}
        if not other.gender or _normalize(other.gender) not in wanted_by_viewer:
            return False
    return True


def check_dealbreakers(profile_a: UserProfile, profile_b: UserProfile) -> DealbreakerCheck:
    """
    Check whether two users pass the dealbreaker filters.

    Rules:
    - Kids: both answered, neither stance is "maybe", and stances differ
    - Gender: checked in each direction from whichever fields that user
      declared; a declared gender must be in the other's looking_for, and
      a declared looking_for must contain the other's gender

    Args:
        profile_a: First user
        profile_b: Second user

    Returns:
        DealbreakerCheck with compatible=False and a reason on violation
    """
    kids_a = profile_a.lifestyle.wants_kids
    kids_b = profile_b.lifestyle.wants_kids
    if (
        kids_a is not None
        and kids_b is not None
        and "maybe" not in (kids_a.stance, kids_b.stance)
        and kids_a.stance != kids_b.stance
    ):
        logger.debug(f"Dealbreaker for {profile_a.user_id}/{profile_b.user_id}: kids")
        return DealbreakerCheck(compatible=False, reason="Incompatible kids preference")

    if not (_gender_accepted(profile_a, profile_b) and _gender_accepted(profile_b, profile_a)):
        logger.debug(f"Dealbreaker for {profile_a.user_id}/{profile_b.user_id}: gender")
        return DealbreakerCheck(compatible=False, reason="Gender preference mismatch")

    return DealbreakerCheck(compatible=True)
