"""
Inference module for compatibility scoring.

This module provides the composite scorer that turns two user profiles
into a CompatibilityResult, plus dealbreaker filtering.
"""

from ..schema import UserProfile, PersonalityVector, LifestyleProfile, CompatibilityResult
from .predict import CompatibilityScorer, create_scorer
from .dealbreakers import check_dealbreakers
from .reasons import build_reasons

__all__ = [
    "UserProfile",
    "PersonalityVector",
    "LifestyleProfile",
    "CompatibilityResult",
    "CompatibilityScorer",
    "create_scorer",
    "check_dealbreakers",
    "build_reasons",
]
