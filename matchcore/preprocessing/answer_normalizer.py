"""
Onboarding answer normalizer.

Handles:
- Nested records ({"personality": {...}}) and flattened records
  ("personality.openness" columns from pandas.json_normalize, or plain
  "openness" columns from CSV)
- Field aliases used by the onboarding client (camelCase, "marijuana")
- Missing values: None, NaN and blank strings all mean "not answered"
- Label lists stored as ";"-separated strings
"""

import logging
from typing import Dict, Any, List, Optional

import numpy as np
import pandas as pd

from ..exceptions import InvalidInput
from ..schema import TRAITS, UserProfile, PersonalityVector, LifestyleProfile

logger = logging.getLogger(__name__)

LIST_SEPARATOR = ";"

# Canonical field -> accepted source keys, first match wins
USER_ID_KEYS = ["user_id", "userId", "id"]

LIFESTYLE_FIELD_ALIASES = {
    "wants_kids": ["wants_kids", "wantsKids", "kids"],
    "religion": ["religion"],
    "drinking": ["drinking"],
    "smoking": ["smoking"],
    "cannabis_use": ["cannabis_use", "cannabisUse", "cannabis", "marijuana", "marijuana_use"],
    "politics": ["politics"],
}

LABEL_FIELD_ALIASES = {
    "interests": ["interests"],
    "values": ["values"],
    "looking_for": ["looking_for", "lookingFor"],
}


def _is_missing(value: Any) -> bool:
    """True for None, NaN and blank strings."""
    if value is None or value is pd.NA:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (float, np.floating)):
        return bool(np.isnan(value))
    return False


def _to_native(value: Any) -> Any:
    """Convert numpy scalars to plain Python values."""
    if isinstance(value, np.generic):
        return value.item()
    return value


def split_labels(value: Any, separator: str = LIST_SEPARATOR) -> List[str]:
    """
    Turn a raw label field into a list of strings.

    Accepts lists/arrays (blank entries dropped) or a separator-joined string.
    """
    if _is_missing(value):
        return []
    if isinstance(value, str):
        return [part.strip() for part in value.split(separator) if part.strip()]
    if isinstance(value, (list, tuple, np.ndarray, pd.Series)):
        return [item for item in (_to_native(v) for v in value) if not _is_missing(item)]
    raise InvalidInput(f"Expected a label list or string, got {value!r}")


class AnswerNormalizer:
    """
    Converts raw profile records into UserProfile objects.

    Attributes:
        separator: Separator for label lists stored as strings
    """

    def __init__(self, separator: str = LIST_SEPARATOR):
        self.separator = separator

    def _lookup(self, record: Dict[str, Any], section: str, keys: List[str]) -> Any:
        """Find the first non-missing value among nested, dotted and plain keys."""
        nested = record.get(section)
        for key in keys:
            if isinstance(nested, dict) and not _is_missing(nested.get(key)):
                return nested[key]
            dotted = f"{section}.{key}"
            if not _is_missing(record.get(dotted)):
                return record[dotted]
            if not _is_missing(record.get(key)):
                return record[key]
        return None

    def _labels(self, value: Any) -> List[str]:
        return split_labels(value, self.separator)

    def normalize_personality(self, record: Dict[str, Any]) -> Optional[PersonalityVector]:
        """
        Extract the Big Five vector.

        Returns:
            PersonalityVector, or None if no trait is present

        Raises:
            InvalidInput: If only some traits are present or a value is out of range
        """
        raw = {trait: self._lookup(record, "personality", [trait]) for trait in TRAITS}
        present = {t: v for t, v in raw.items() if v is not None}
        if not present:
            return None
        missing = [t for t in TRAITS if t not in present]
        if missing:
            raise InvalidInput(f"Personality vector missing traits: {missing}")

        values = {}
        for trait, value in present.items():
            value = _to_native(value)
            if isinstance(value, str):
                try:
                    value = float(value)
                except ValueError:
                    raise InvalidInput(f"{trait} must be numeric, got {value!r}") from None
            values[trait] = value
        return PersonalityVector(**values)

    def normalize_lifestyle(self, record: Dict[str, Any]) -> LifestyleProfile:
        """Extract lifestyle answers; unknown answers raise InvalidInput."""
        answers = {
            name: self._lookup(record, "lifestyle", aliases)
            for name, aliases in LIFESTYLE_FIELD_ALIASES.items()
        }
        answers["religion"] = self._labels(answers["religion"])
        return LifestyleProfile(**answers)

    def normalize(self, record: Dict[str, Any]) -> UserProfile:
        """
        Normalize one raw record.

        Args:
            record: Raw profile record (dict or pandas row as dict)

        Returns:
            UserProfile

        Raises:
            InvalidInput: If the record has no user id or malformed answers
        """
        user_id = None
        for key in USER_ID_KEYS:
            if not _is_missing(record.get(key)):
                user_id = str(_to_native(record[key])).strip()
                break
        if user_id is None:
            raise InvalidInput(f"Profile record has no user id (tried {USER_ID_KEYS})")

        labels = {
            name: self._labels(next(
                (record[k] for k in aliases if not _is_missing(record.get(k))), None
            ))
            for name, aliases in LABEL_FIELD_ALIASES.items()
        }

        gender = record.get("gender")
        gender = None if _is_missing(gender) else str(gender).strip()

        try:
            personality = self.normalize_personality(record)
            lifestyle = self.normalize_lifestyle(record)
        except InvalidInput as e:
            raise InvalidInput(f"Profile {user_id}: {e}") from e

        return UserProfile(
            user_id=user_id,
            personality=personality,
            interests=labels["interests"],
            values=labels["values"],
            lifestyle=lifestyle,
            gender=gender,
            looking_for=labels["looking_for"],
        )

    def normalize_many(self, records: List[Dict[str, Any]]) -> List[UserProfile]:
        """Normalize a list of records, preserving order."""
        profiles = [self.normalize(r) for r in records]
        n_missing = sum(1 for p in profiles if not p.has_personality)
        logger.info(f"Normalized {len(profiles)} profiles ({n_missing} without personality)")
        return profiles
