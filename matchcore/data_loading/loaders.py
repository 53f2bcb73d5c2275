"""
Data loading functions for user profiles.

This module reads raw profile exports (JSON or CSV) into pandas DataFrames
and turns them into UserProfile objects via the AnswerNormalizer.
"""

import json
import logging
from pathlib import Path
from typing import List, Optional

import pandas as pd

from ..exceptions import InvalidInput
from ..preprocessing import AnswerNormalizer
from ..schema import UserProfile

logger = logging.getLogger(__name__)

SUPPORTED_FORMATS = ("json", "csv")
ID_COLUMNS = ["user_id", "userId", "id"]


def _infer_format(filepath: str, fmt: Optional[str]) -> str:
    if fmt is None:
        fmt = Path(filepath).suffix.lstrip(".").lower() or "json"
    fmt = fmt.lower()
    if fmt not in SUPPORTED_FORMATS:
        raise ValueError(f"Unsupported profile format '{fmt}', expected one of {SUPPORTED_FORMATS}")
    return fmt


def load_profile_frame(
    filepath: str,
    fmt: Optional[str] = None,
    delimiter: str = ","
) -> pd.DataFrame:
    """
    Load a profile export into a DataFrame.

    JSON files must hold a list of profile objects (or {"profiles": [...]});
    nested "personality" and "lifestyle" objects are flattened into
    dotted columns. CSV files hold one profile per row with label lists
    as ";"-separated strings.

    Args:
        filepath: Path to the profile file
        fmt: "json" or "csv" (inferred from the extension when None)
        delimiter: Field delimiter for CSV files

    Returns:
        DataFrame with one row per profile

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is empty or malformed
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Profile data file not found: {filepath}")

    fmt = _infer_format(filepath, fmt)
    logger.info(f"Loading profiles from {filepath} (format: {fmt})")

    if fmt == "csv":
        df = pd.read_csv(filepath, sep=delimiter)
    else:
        with open(filepath, "r") as f:
            records = json.load(f)
        if isinstance(records, dict):
            records = records.get("profiles", [])
        if not isinstance(records, list):
            raise ValueError(f"Expected a list of profiles in {filepath}")
        df = pd.json_normalize(records, max_level=1)

    if df.empty:
        raise ValueError(f"Profile data file is empty: {filepath}")

    logger.info(f"Loaded {len(df)} rows with {len(df.columns)} columns")
    return df


def validate_profile_columns(df: pd.DataFrame) -> List[str]:
    """
    Validate that a profile DataFrame has the columns needed for scoring.

    Args:
        df: Profile DataFrame

    Returns:
        List of missing column descriptions (empty if all present)
    """
    missing = []
    if not any(c in df.columns for c in ID_COLUMNS):
        missing.append(f"one of {ID_COLUMNS}")
    return missing


def profiles_from_frame(
    df: pd.DataFrame,
    normalizer: Optional[AnswerNormalizer] = None
) -> List[UserProfile]:
    """
    Convert a profile DataFrame into UserProfile objects.

    Args:
        df: Profile DataFrame from load_profile_frame
        normalizer: AnswerNormalizer to use (default instance when None)

    Returns:
        List of UserProfile objects in row order

    Raises:
        ValueError: If required columns are missing
        InvalidInput: If a row is malformed or a user id repeats
    """
    missing = validate_profile_columns(df)
    if missing:
        raise ValueError(f"Profile data missing required columns: {missing}")

    normalizer = normalizer or AnswerNormalizer()
    profiles = normalizer.normalize_many(df.to_dict(orient="records"))

    seen = set()
    duplicates = set()
    for profile in profiles:
        if profile.user_id in seen:
            duplicates.add(profile.user_id)
        seen.add(profile.user_id)
    if duplicates:
        raise InvalidInput(f"Duplicate user ids in profile data: {sorted(duplicates)}")

    return profiles


def load_profiles(
    filepath: str,
    fmt: Optional[str] = None,
    delimiter: str = ","
) -> List[UserProfile]:
    """
    Load and normalize profiles from a file.

    Args:
        filepath: Path to the profile file
        fmt: "json" or "csv" (inferred from the extension when None)
        delimiter: Field delimiter for CSV files

    Returns:
        List of UserProfile objects
    """
    df = load_profile_frame(filepath, fmt=fmt, delimiter=delimiter)
    return profiles_from_frame(df)
