"""HTTP service for compatibility scoring."""

from .service import create_app, CompatibilityRequest
from .store import ProfileStore, InMemoryProfileStore, JsonProfileStore

__all__ = [
    "create_app",
    "CompatibilityRequest",
    "ProfileStore",
    "InMemoryProfileStore",
    "JsonProfileStore",
]
