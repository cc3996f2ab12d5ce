"""Switch engine: staging, backup, commit, and rollback.

A switch replaces every managed live file with the profile's copy, or none of
them. The phases are:

1. remember the current marker (unreadable means "unknown")
2. stage each profile file into a temp file beside its live target
3. back up each live file into a rollback directory, or note its absence
4. rename the staged files over the live files
5. point the marker at the new profile

A failure in 4 or 5 replays the rollback journal so every live file and the
marker end up as they were. Staged files and the rollback directory are removed
on every exit path.
"""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from dataclasses import dataclass, field
from pathlib import Path

from confswap.errors import (
    ConfswapError,
    ProfileMissingFileError,
    ProfileNotFoundError,
    RollbackFailedError,
    SwitchError,
)
from confswap.fsutil import (
    TEMP_PREFIX,
    copy_file,
    copy_into,
    ensure_parent_dir,
    ensure_regular_file_if_exists,
    make_private_dirs,
    remove_if_exists,
)
from confswap.names import validate_profile_name
from confswap.store import FilePair, ProfileStore

logger = logging.getLogger(__name__)

STAGE_PREFIX = f"{TEMP_PREFIX}stage-"
ROLLBACK_PREFIX = "rollback-"


@dataclass
class RollbackEntry:
    """Undo record for one live file.

    ``backup`` is None when the file did not exist before the switch, in which
    case undoing means deleting it.
    """

    target: Path
    backup: Path | None = None

    @property
    def existed(self) -> bool:
        return self.backup is not None


@dataclass
class RollbackJournal:
    """Ordered undo log for a switch.

    ``previous_profile`` is None when the marker could not be read beforehand;
    the marker is then left alone on rollback. When ``marker_existed`` is
    False the marker file is removed rather than rewritten.
    """

    store: ProfileStore
    previous_profile: str | None
    marker_existed: bool = True
    entries: list[RollbackEntry] = field(default_factory=list)

    def record_backup(self, target: Path, backup: Path) -> None:
        self.entries.append(RollbackEntry(target, backup))

    def record_absent(self, target: Path) -> None:
        self.entries.append(RollbackEntry(target))

    def restore(self) -> list[Exception]:
        """Replay every entry and the marker. Returns the failures, if any."""
        errors: list[Exception] = []
        for entry in self.entries:
            try:
                if entry.existed:
                    copy_file(entry.backup, entry.target)
                else:
                    remove_if_exists(entry.target)
            except (OSError, ConfswapError) as e:
                logger.error("Could not restore %s: %s", entry.target, e)
                errors.append(e)

        if self.previous_profile is not None:
            try:
                if self.marker_existed:
                    self.store.write_marker(self.previous_profile)
                else:
                    remove_if_exists(self.store.current_marker_path())
            except (OSError, ConfswapError) as e:
                logger.error("Could not restore current marker: %s", e)
                errors.append(e)
        return errors


def _read_previous_marker(store: ProfileStore) -> tuple[str | None, bool]:
    """Return (profile, marker file existed). Profile is None if unreadable."""
    try:
        existed = ensure_regular_file_if_exists(store.current_marker_path())
        return store.read_marker().profile, existed
    except (OSError, ValueError, ConfswapError) as e:
        logger.warning("Could not read current marker, it will not be rolled back: %s", e)
        return None, True


def stage_profile_files(pairs: list[FilePair]) -> dict[Path, Path]:
    """Copy each profile file into a temp file in its live target's directory.

    Returns {live_file: staged_file}. On failure every staged file created so
    far is removed before the exception propagates.
    """
    staged: dict[Path, Path] = {}
    try:
        for pair in pairs:
            ensure_parent_dir(pair.live_file)
            fd, tmp_name = tempfile.mkstemp(prefix=STAGE_PREFIX, dir=pair.live_file.parent)
            staged[pair.live_file] = Path(tmp_name)
            with os.fdopen(fd, "wb") as f:
                try:
                    copy_into(pair.profile_file, f)
                except FileNotFoundError:
                    raise ProfileMissingFileError(pair.profile_file.name) from None
            logger.debug("Staged %s as %s", pair.profile_file, tmp_name)
    except Exception:
        cleanup_stage_files(staged)
        raise
    return staged


def cleanup_stage_files(staged: dict[Path, Path]) -> None:
    for path in staged.values():
        try:
            remove_if_exists(path)
        except OSError as e:
            logger.warning("Could not remove staged file %s: %s", path, e)


def backup_live_files(
    pairs: list[FilePair],
    rollback_dir: Path,
    journal: RollbackJournal,
) -> None:
    """Record how to restore every live file, copying existing ones aside."""
    for pair in pairs:
        if not ensure_regular_file_if_exists(pair.live_file):
            journal.record_absent(pair.live_file)
            continue
        backup = rollback_dir / pair.live_file.name
        copy_file(pair.live_file, backup)
        journal.record_backup(pair.live_file, backup)


def _fail(journal: RollbackJournal, cause: BaseException) -> None:
    logger.warning("Switch failed (%s); rolling back", cause)
    errors = journal.restore()
    if errors:
        raise RollbackFailedError(cause, errors) from cause
    raise SwitchError(cause) from cause


def switch_profile(store: ProfileStore, name: str) -> None:
    """Make the live config files match profile ``name`` and mark it current."""
    validate_profile_name(name)

    previous, marker_existed = _read_previous_marker(store)

    if not store.exists(name):
        raise ProfileNotFoundError(name)

    pairs = store.file_pairs(name)
    staged = stage_profile_files(pairs)
    try:
        make_private_dirs(store.base_dir)
        rollback_dir = Path(tempfile.mkdtemp(prefix=ROLLBACK_PREFIX, dir=store.base_dir))
        try:
            journal = RollbackJournal(store, previous, marker_existed)
            backup_live_files(pairs, rollback_dir, journal)

            for pair in pairs:
                try:
                    os.replace(staged[pair.live_file], pair.live_file)
                except OSError as e:
                    _fail(journal, e)
                del staged[pair.live_file]
                logger.debug("Committed %s", pair.live_file)

            try:
                store.write_marker(name)
            except (OSError, ConfswapError) as e:
                _fail(journal, e)
        finally:
            shutil.rmtree(rollback_dir, ignore_errors=True)
    finally:
        cleanup_stage_files(staged)

    logger.info("Switched %s to profile %r", store.tool.display_name, name)
