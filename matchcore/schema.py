"""
Profile and result schema for compatibility scoring.

Defines the inputs (personality vector, label sets, lifestyle answers)
and the structured CompatibilityResult returned by the scorer.

Lifestyle answers are modelled as explicit enums with an ordinal rank,
so that a typo in an answer is rejected instead of silently producing
a wrong rank.
"""

import math
import numbers
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Dict, Any, List

import numpy as np

from .exceptions import InvalidInput

# Canonical trait order used everywhere a vector is built
TRAITS = (
    "openness",
    "conscientiousness",
    "extraversion",
    "agreeableness",
    "neuroticism",
)

TRAIT_MIN = 0
TRAIT_MAX = 100


def _choice_key(value: str) -> str:
    """Normalise a free-form answer into an enum lookup key."""
    key = value.strip().lower().replace("'", "")
    return re.sub(r"[\s\-]+", "_", key)


def _parse_choice(enum_cls, value, aliases: Dict[str, str]):
    """
    Parse an answer into a member of enum_cls.

    None and blank strings mean "not answered" and return None.

    Raises:
        InvalidInput: If the value is not a known answer
    """
    if value is None or isinstance(value, enum_cls):
        return value
    if not isinstance(value, str):
        raise InvalidInput(f"{enum_cls.__name__} answer must be a string, got {value!r}")

    key = _choice_key(value)
    if not key:
        return None
    key = aliases.get(key, key)
    try:
        return enum_cls(key)
    except ValueError:
        raise InvalidInput(f"Unknown {enum_cls.__name__} answer: {value!r}") from None


class KidsIntent(Enum):
    """Kids intent options from onboarding."""
    WANT = "want"
    MAYBE = "maybe"
    DONT_WANT = "dont_want"
    HAVE_WANT_MORE = "have_want_more"
    HAVE_OPEN_TO_MORE = "have_open_to_more"
    HAVE_DONT_WANT_MORE = "have_dont_want_more"
    PREFER_NOT_TO_SAY = "prefer_not_to_say"

    @property
    def stance(self) -> str:
        """Collapsed stance used for comparison: 'yes', 'no' or 'maybe'."""
        return _KIDS_STANCES[self]

    @classmethod
    def parse(cls, value) -> Optional["KidsIntent"]:
        return _parse_choice(cls, value, _KIDS_ALIASES)


_KIDS_STANCES = {
    KidsIntent.WANT: "yes",
    KidsIntent.HAVE_WANT_MORE: "yes",
    KidsIntent.DONT_WANT: "no",
    KidsIntent.HAVE_DONT_WANT_MORE: "no",
    KidsIntent.MAYBE: "maybe",
    KidsIntent.HAVE_OPEN_TO_MORE: "maybe",
    KidsIntent.PREFER_NOT_TO_SAY: "maybe",
}

_KIDS_ALIASES = {
    "yes": "want",
    "no": "dont_want",
    "do_not_want": "dont_want",
    "wants": "want",
}


class SubstanceUse(Enum):
    """Ordinal frequency scale shared by drinking, smoking and cannabis use."""
    NEVER = "never"
    RARELY = "rarely"
    SOCIALLY = "socially"
    REGULARLY = "regularly"

    @property
    def rank(self) -> int:
        return _SUBSTANCE_RANKS[self]

    @classmethod
    def parse(cls, value) -> Optional["SubstanceUse"]:
        return _parse_choice(cls, value, _SUBSTANCE_ALIASES)


_SUBSTANCE_RANKS = {
    SubstanceUse.NEVER: 0,
    SubstanceUse.RARELY: 1,
    SubstanceUse.SOCIALLY: 2,
    SubstanceUse.REGULARLY: 3,
}

_SUBSTANCE_ALIASES = {
    "no": "never",
    "not_at_all": "never",
    "sometimes": "rarely",
    "occasionally": "rarely",
    "prefer_not_to_say": "rarely",
    "yes": "regularly",
    "often": "regularly",
}


class PoliticalLeaning(Enum):
    """Ordinal political scale; apolitical sits at the moderate midpoint."""
    VERY_LIBERAL = "very_liberal"
    LIBERAL = "liberal"
    MODERATE = "moderate"
    CONSERVATIVE = "conservative"
    VERY_CONSERVATIVE = "very_conservative"
    APOLITICAL = "apolitical"

    @property
    def rank(self) -> int:
        return _POLITICS_RANKS[self]

    @classmethod
    def parse(cls, value) -> Optional["PoliticalLeaning"]:
        return _parse_choice(cls, value, _POLITICS_ALIASES)


_POLITICS_RANKS = {
    PoliticalLeaning.VERY_LIBERAL: 0,
    PoliticalLeaning.LIBERAL: 1,
    PoliticalLeaning.MODERATE: 2,
    PoliticalLeaning.CONSERVATIVE: 3,
    PoliticalLeaning.VERY_CONSERVATIVE: 4,
    PoliticalLeaning.APOLITICAL: 2,
}

_POLITICS_ALIASES = {
    "not_political": "apolitical",
    "other": "moderate",
    "prefer_not_to_say": "moderate",
}


def _coerce_labels(labels, field_name: str) -> List[str]:
    """Accept None, a single string or an iterable of strings."""
    if labels is None:
        return []
    if isinstance(labels, str):
        return [labels]
    result = []
    for label in labels:
        if not isinstance(label, str):
            raise InvalidInput(f"{field_name} labels must be strings, got {label!r}")
        result.append(label)
    return result


@dataclass(frozen=True)
class PersonalityVector:
    """
    Big Five personality scores, each in [0, 100].

    Produced externally by the personality-inference step and treated
    as opaque input here.
    """
    openness: float
    conscientiousness: float
    extraversion: float
    agreeableness: float
    neuroticism: float

    def __post_init__(self):
        """Validate trait bounds."""
        for trait in TRAITS:
            val = getattr(self, trait)
            if (
                isinstance(val, bool)
                or not isinstance(val, numbers.Real)
                or math.isnan(val)
                or not TRAIT_MIN <= val <= TRAIT_MAX
            ):
                raise InvalidInput(
                    f"{trait} must be a number between {TRAIT_MIN} and {TRAIT_MAX}, got {val!r}"
                )

    def as_array(self) -> np.ndarray:
        """Return the five traits as a float array in canonical order."""
        return np.array([float(getattr(self, t)) for t in TRAITS])

    def to_dict(self) -> Dict[str, float]:
        return {t: getattr(self, t) for t in TRAITS}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PersonalityVector":
        missing = [t for t in TRAITS if t not in data]
        if missing:
            raise InvalidInput(f"Personality vector missing traits: {missing}")
        return cls(**{t: data[t] for t in TRAITS})


@dataclass
class LifestyleProfile:
    """
    Lifestyle answers for one user. Every field is optional.

    Attributes:
        wants_kids: Kids intent
        religion: Religion labels (may be empty)
        drinking: Drinking frequency
        smoking: Smoking frequency
        cannabis_use: Cannabis use frequency
        politics: Political leaning
    """
    wants_kids: Optional[KidsIntent] = None
    religion: List[str] = field(default_factory=list)
    drinking: Optional[SubstanceUse] = None
    smoking: Optional[SubstanceUse] = None
    cannabis_use: Optional[SubstanceUse] = None
    politics: Optional[PoliticalLeaning] = None

    def __post_init__(self):
        """Convert string answers to enums."""
        self.wants_kids = KidsIntent.parse(self.wants_kids)
        self.religion = _coerce_labels(self.religion, "religion")
        self.drinking = SubstanceUse.parse(self.drinking)
        self.smoking = SubstanceUse.parse(self.smoking)
        self.cannabis_use = SubstanceUse.parse(self.cannabis_use)
        self.politics = PoliticalLeaning.parse(self.politics)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary with string values."""
        return {
            "wants_kids": self.wants_kids.value if self.wants_kids else None,
            "religion": list(self.religion),
            "drinking": self.drinking.value if self.drinking else None,
            "smoking": self.smoking.value if self.smoking else None,
            "cannabis_use": self.cannabis_use.value if self.cannabis_use else None,
            "politics": self.politics.value if self.politics else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LifestyleProfile":
        return cls(
            wants_kids=data.get("wants_kids"),
            religion=data.get("religion"),
            drinking=data.get("drinking"),
            smoking=data.get("smoking"),
            cannabis_use=data.get("cannabis_use"),
            politics=data.get("politics"),
        )


@dataclass
class UserProfile:
    """
    Everything the scorer needs about one user.

    Attributes:
        user_id: Identifier of the user
        personality: Big Five vector, or None if not yet analysed
        interests: Free-text interest labels
        values: Free-text value labels
        lifestyle: Lifestyle answers
        gender: Declared gender, used only by dealbreaker checks
        looking_for: Genders the user wants to be matched with
    """
    user_id: str
    personality: Optional[PersonalityVector] = None
    interests: List[str] = field(default_factory=list)
    values: List[str] = field(default_factory=list)
    lifestyle: LifestyleProfile = field(default_factory=LifestyleProfile)
    gender: Optional[str] = None
    looking_for: List[str] = field(default_factory=list)

    def __post_init__(self):
        """Validate identifier and convert nested dictionaries."""
        if not isinstance(self.user_id, str) or not self.user_id.strip():
            raise InvalidInput(f"user_id must be a non-empty string, got {self.user_id!r}")
        if isinstance(self.personality, dict):
            self.personality = PersonalityVector.from_dict(self.personality)
        if self.lifestyle is None:
            self.lifestyle = LifestyleProfile()
        elif isinstance(self.lifestyle, dict):
            self.lifestyle = LifestyleProfile.from_dict(self.lifestyle)
        self.interests = _coerce_labels(self.interests, "interests")
        self.values = _coerce_labels(self.values, "values")
        self.looking_for = _coerce_labels(self.looking_for, "looking_for")

    @property
    def has_personality(self) -> bool:
        return self.personality is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "user_id": self.user_id,
            "personality": self.personality.to_dict() if self.personality else None,
            "interests": list(self.interests),
            "values": list(self.values),
            "lifestyle": self.lifestyle.to_dict(),
            "gender": self.gender,
            "looking_for": list(self.looking_for),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UserProfile":
        """Create from dictionary."""
        if "user_id" not in data:
            raise InvalidInput("Profile is missing user_id")
        return cls(
            user_id=data["user_id"],
            personality=data.get("personality"),
            interests=data.get("interests"),
            values=data.get("values"),
            lifestyle=data.get("lifestyle"),
            gender=data.get("gender"),
            looking_for=data.get("looking_for"),
        )


# =============================================================================
# Results
# =============================================================================

@dataclass
class TraitComparison:
    """Raw values and absolute difference for one trait."""
    trait: str
    value_a: float
    value_b: float
    difference: float

    def to_dict(self) -> Dict[str, float]:
        return {"user1": self.value_a, "user2": self.value_b, "difference": self.difference}


@dataclass
class PersonalityComparison:
    score: int
    traits: List[TraitComparison]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "details": {t.trait: t.to_dict() for t in self.traits},
        }


@dataclass
class LabelOverlap:
    """
    Jaccard overlap between two label sets.

    All label lists hold normalised (trimmed, lowercased) labels.
    """
    score: int
    shared: List[str]
    unique_a: List[str]
    unique_b: List[str]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "shared": list(self.shared),
            "unique": {"user1": list(self.unique_a), "user2": list(self.unique_b)},
        }


@dataclass
class InterestsValuesComparison:
    """Combined interests and values score plus the two underlying overlaps."""
    score: int
    interests: LabelOverlap
    values: LabelOverlap

    def to_dict(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "interests": self.interests.to_dict(),
            "values": self.values.to_dict(),
        }


@dataclass
class LifestyleComparison:
    """Lifestyle score and the categories classified as compatible or neutral."""
    score: int
    compatible: List[str]
    neutral: List[str]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "compatible": list(self.compatible),
            "neutral": list(self.neutral),
        }


@dataclass
class CompatibilityResult:
    """
    Result of compatibility scoring.

    Attributes:
        overall_score: Weighted overall score [0, 100]
        personality: Trait distance breakdown
        interests_and_values: Combined label overlap breakdown
        lifestyle: Lifestyle category breakdown
        reasons: Short human-readable highlights (at most a few)
    """
    overall_score: int
    personality: PersonalityComparison
    interests_and_values: InterestsValuesComparison
    lifestyle: LifestyleComparison
    reasons: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the JSON document returned to callers."""
        return {
            "overall_score": self.overall_score,
            "personality": self.personality.to_dict(),
            "interests_and_values": self.interests_and_values.to_dict(),
            "lifestyle": self.lifestyle.to_dict(),
            "reasons": list(self.reasons),
        }


@dataclass
class DealbreakerCheck:
    compatible: bool
    reason: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"compatible": self.compatible, "reason": self.reason}
