"""Data loading module for profile exports."""

from .loaders import (
    load_profile_frame,
    load_profiles,
    profiles_from_frame,
    validate_profile_columns
)

__all__ = [
    "load_profile_frame",
    "load_profiles",
    "profiles_from_frame",
    "validate_profile_columns"
]
