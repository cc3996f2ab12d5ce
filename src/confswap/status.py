"""Drift detection: does the live config still match the active profile?"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass

from confswap.errors import ProfileMissingFileError
from confswap.fsutil import ensure_regular_file, ensure_regular_file_if_exists, files_equal
from confswap.names import CUSTOM, MODIFIED_SUFFIX
from confswap.store import ProfileStore

logger = logging.getLogger(__name__)


class State(enum.Enum):
    ACTIVE = "active"
    MODIFIED = "modified"
    CUSTOM = "custom"


@dataclass(frozen=True)
class CurrentStatus:
    """Result of a status check.

    ``profile`` is None only in the custom state.
    """

    state: State
    profile: str | None = None

    def render(self) -> str:
        if self.state is State.CUSTOM:
            return CUSTOM
        if self.state is State.MODIFIED:
            return f"{self.profile}{MODIFIED_SUFFIX}"
        return self.profile

    def __str__(self) -> str:
        return self.render()


def profile_matches(store: ProfileStore, name: str) -> bool:
    """True if every live file is byte-equal to the profile's copy.

    A missing live file counts as a mismatch. A file missing from the profile
    itself means the profile is damaged and raises ProfileMissingFileError.
    """
    for pair in store.file_pairs(name):
        try:
            ensure_regular_file(pair.profile_file)
        except FileNotFoundError:
            raise ProfileMissingFileError(pair.profile_file.name) from None

        if not ensure_regular_file_if_exists(pair.live_file):
            logger.debug("Live file %s is missing", pair.live_file)
            return False
        if not files_equal(pair.profile_file, pair.live_file):
            logger.debug("Live file %s differs from profile %r", pair.live_file, name)
            return False
    return True


def current_status(store: ProfileStore) -> CurrentStatus:
    """Compute the current status fresh from disk."""
    marker = store.read_marker()
    if marker.is_empty:
        return CurrentStatus(State.CUSTOM)

    if not store.exists(marker.profile):
        logger.debug(
            "Marker names %r, which no longer exists; reporting custom", marker.profile
        )
        return CurrentStatus(State.CUSTOM)

    if profile_matches(store, marker.profile):
        return CurrentStatus(State.ACTIVE, marker.profile)
    return CurrentStatus(State.MODIFIED, marker.profile)
