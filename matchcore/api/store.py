"""
Profile stores used by the HTTP service.

The scoring engine never fetches data itself; the service resolves
user ids to UserProfile objects through one of these stores first.
"""

import logging
from typing import Dict, Iterable, List, Optional

from ..data_loading import load_profiles
from ..exceptions import ProfileNotFound
from ..schema import UserProfile

logger = logging.getLogger(__name__)


class ProfileStore:
    """Base class: subclasses implement get_profile."""

    def get_profile(self, user_id: str) -> UserProfile:
        raise NotImplementedError

    def get_profiles(self, user_ids: Iterable[str]) -> List[UserProfile]:
        """
        Fetch several profiles at once.

        Raises:
            ProfileNotFound: Listing every id that could not be resolved
        """
        found = []
        missing = []
        for user_id in user_ids:
            try:
                found.append(self.get_profile(user_id))
            except ProfileNotFound:
                missing.append(user_id)
        if missing:
            raise ProfileNotFound(missing)
        return found


class InMemoryProfileStore(ProfileStore):
    """Profiles held in a dictionary keyed by user id."""

    def __init__(self, profiles: Iterable[UserProfile] = ()):
        self._profiles: Dict[str, UserProfile] = {}
        for profile in profiles:
            self.add(profile)

    def add(self, profile: UserProfile) -> None:
        self._profiles[profile.user_id] = profile

    def get_profile(self, user_id: str) -> UserProfile:
        try:
            return self._profiles[user_id]
        except KeyError:
            raise ProfileNotFound([user_id]) from None

    def __len__(self) -> int:
        return len(self._profiles)


class JsonProfileStore(InMemoryProfileStore):
    """
    File-backed store loaded through the profile loaders.

    Attributes:
        filepath: Path to the JSON or CSV profile export
    """

    def __init__(self, filepath: str, fmt: Optional[str] = None):
        super().__init__()
        self.filepath = filepath
        self.fmt = fmt
        self.reload()

    def reload(self) -> None:
        """Re-read the profile file, replacing the current contents."""
        profiles = load_profiles(self.filepath, fmt=self.fmt)
        self._profiles = {p.user_id: p for p in profiles}
        logger.info(f"Loaded {len(self._profiles)} profiles from {self.filepath}")
