"""
Shared fixtures for the matchcore test suite.

Profiles are built with make_profile(), which fills every field with a
neutral default so each test only spells out what it is about.
"""

from pathlib import Path

import pytest

from matchcore.inference import CompatibilityScorer
from matchcore.schema import UserProfile

PROJECT_ROOT = Path(__file__).parent.parent
SAMPLE_PROFILES = PROJECT_ROOT / "data" / "sample_profiles.json"
DEFAULT_CONFIG = PROJECT_ROOT / "configs" / "config.yaml"

NEUTRAL_PERSONALITY = {
    "openness": 50,
    "conscientiousness": 50,
    "extraversion": 50,
    "agreeableness": 50,
    "neuroticism": 50,
}


def make_profile(user_id="user_a", **overrides) -> UserProfile:
    """Create a UserProfile with a neutral personality and no other answers."""
    fields = {
        "personality": dict(NEUTRAL_PERSONALITY),
        "interests": [],
        "values": [],
        "lifestyle": {},
    }
    fields.update(overrides)
    return UserProfile(user_id=user_id, **fields)


@pytest.fixture
def scorer():
    return CompatibilityScorer()


@pytest.fixture
def scenario_a():
    """User A from the reference scenario."""
    return make_profile(
        "alex",
        interests=["coffee", "hiking"],
        lifestyle={
            "wants_kids": "want",
            "drinking": "socially",
            "smoking": "never",
            "cannabis_use": "never",
            "religion": [],
            "politics": "moderate",
        },
    )


@pytest.fixture
def scenario_b():
    """User B: as A, but only coffee and drinks regularly."""
    return make_profile(
        "blake",
        interests=["coffee"],
        lifestyle={
            "wants_kids": "want",
            "drinking": "regularly",
            "smoking": "never",
            "cannabis_use": "never",
            "religion": [],
            "politics": "moderate",
        },
    )


@pytest.fixture
def sample_profiles_path():
    return str(SAMPLE_PROFILES)
