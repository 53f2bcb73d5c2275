"""
Personality similarity from Big Five vectors.

Formula:
    rms = sqrt(mean((A - B)^2))          over the five traits
    distance = rms / 100                 in [0, 1] for in-range vectors
    score = round((1 - distance) * 100)

Identical vectors score 100; all-0 against all-100 scores 0.
"""

import logging

import numpy as np

from ..schema import TRAITS, TRAIT_MAX, PersonalityVector, PersonalityComparison, TraitComparison
from .common import round_half_up, clamp_score

logger = logging.getLogger(__name__)

# Largest possible per-trait difference
MAX_TRAIT_DIFFERENCE = float(TRAIT_MAX)


def compute_trait_distance(vector_a: PersonalityVector, vector_b: PersonalityVector) -> float:
    """
    Normalised root-mean-square distance between two vectors.

    Returns:
        Distance in [0, 1]
    """
    diff = vector_a.as_array() - vector_b.as_array()
    rms = float(np.sqrt(np.mean(diff ** 2)))
    return rms / MAX_TRAIT_DIFFERENCE


def score_personality(
    vector_a: PersonalityVector,
    vector_b: PersonalityVector
) -> PersonalityComparison:
    """
    Score personality similarity between two users.

    Args:
        vector_a: Personality vector for user A
        vector_b: Personality vector for user B

    Returns:
        PersonalityComparison with the 0-100 score and per-trait details
    """
    distance = compute_trait_distance(vector_a, vector_b)
    score = clamp_score(round_half_up((1 - distance) * 100))

    traits = []
    for trait in TRAITS:
        value_a = getattr(vector_a, trait)
        value_b = getattr(vector_b, trait)
        traits.append(TraitComparison(
            trait=trait,
            value_a=value_a,
            value_b=value_b,
            difference=abs(value_a - value_b)
        ))

    logger.debug(f"Trait distance={distance:.4f}, personality score={score}")
    return PersonalityComparison(score=score, traits=traits)
