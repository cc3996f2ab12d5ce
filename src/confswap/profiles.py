"""Profile operations: save, switch, current, list, delete, exists."""

from __future__ import annotations

import logging
import shutil

from confswap.errors import (
    ConfigFileNotFoundError,
    ProfileAlreadyExistsError,
    ProfileNotFoundError,
    SymlinkError,
)
from confswap.fsutil import DIR_MODE, copy_file, make_private_dirs
from confswap.names import validate_profile_name
from confswap.status import CurrentStatus, current_status
from confswap.store import ProfileStore
from confswap.switch import switch_profile

__all__ = [
    "CurrentStatus",
    "current_status",
    "delete_profile",
    "list_profiles",
    "profile_exists",
    "save_profile",
    "switch_profile",
    "validate_profile_name",
]

logger = logging.getLogger(__name__)


def save_profile(store: ProfileStore, name: str, force: bool = False) -> None:
    """Snapshot the live config files as profile ``name``.

    Without ``force`` the profile directory is created exclusively, so an
    existing profile raises ProfileAlreadyExistsError. With ``force`` any
    existing profile is replaced entirely.
    """
    validate_profile_name(name)

    profile_dir = store.profile_dir(name)
    make_private_dirs(profile_dir.parent)
    if force:
        if profile_dir.is_symlink():
            raise SymlinkError(profile_dir)
        elif profile_dir.exists():
            shutil.rmtree(profile_dir)
    try:
        profile_dir.mkdir(mode=DIR_MODE)
    except FileExistsError:
        raise ProfileAlreadyExistsError(name) from None

    try:
        for pair in store.file_pairs(name):
            try:
                copy_file(pair.live_file, pair.profile_file)
            except FileNotFoundError:
                raise ConfigFileNotFoundError(pair.live_file) from None
    except Exception:
        # never leave a partial profile behind
        shutil.rmtree(profile_dir, ignore_errors=True)
        raise

    logger.info("Saved %s profile %r", store.tool.display_name, name)


def delete_profile(store: ProfileStore, name: str) -> bool:
    """Remove profile ``name``. Live config files are never touched.

    Returns True if it was the current profile, in which case the marker is
    cleared.
    """
    validate_profile_name(name)

    if not store.exists(name):
        raise ProfileNotFoundError(name)

    was_current = store.read_marker().profile == name

    shutil.rmtree(store.profile_dir(name))
    if was_current:
        store.write_marker("")

    logger.info("Deleted %s profile %r", store.tool.display_name, name)
    return was_current


def profile_exists(store: ProfileStore, name: str) -> bool:
    return store.exists(name)


def list_profiles(store: ProfileStore) -> list[str]:
    return store.list()
