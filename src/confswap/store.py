"""On-disk layout of a tool's profiles and current marker.

Directory structure::

    <root>/<tool>/
    ├── profiles/
    │   └── <profile>/        # one file per managed config file, by basename
    └── current.json          # {"profile": "<name-or-empty>"}
"""

from __future__ import annotations

import logging
import os
import stat
from dataclasses import dataclass
from pathlib import Path
from typing import NamedTuple

from confswap.config import (
    MARKER_FILE,
    CurrentMarker,
    ToolDescriptor,
    config_root,
    load_marker,
    save_marker,
)

logger = logging.getLogger(__name__)


class FilePair(NamedTuple):
    """A profile's stored copy of a file and the live path it belongs at."""

    profile_file: Path
    live_file: Path


@dataclass
class ProfileStore:
    """Maps a tool and a profile name to concrete paths.

    Path methods do no I/O and do not validate profile names.
    """

    tool: ToolDescriptor
    home: Path | None = None
    root: Path | None = None

    def __post_init__(self) -> None:
        self.home = Path(self.home) if self.home else Path.home()
        self.root = Path(self.root) if self.root else config_root(self.home)

    @property
    def base_dir(self) -> Path:
        return self.root / self.tool.name

    def profiles_dir(self) -> Path:
        return self.base_dir / "profiles"

    def profile_dir(self, name: str) -> Path:
        return self.profiles_dir() / name

    def current_marker_path(self) -> Path:
        return self.base_dir / MARKER_FILE

    def live_files(self) -> list[Path]:
        return self.tool.config_files(self.home)

    def file_pairs(self, name: str) -> list[FilePair]:
        profile_dir = self.profile_dir(name)
        return [FilePair(profile_dir / live.name, live) for live in self.live_files()]

    def list(self) -> list[str]:
        """Names of saved profiles, sorted ascending."""
        try:
            entries = list(os.scandir(self.profiles_dir()))
        except FileNotFoundError:
            return []
        return sorted(e.name for e in entries if e.is_dir(follow_symlinks=False))

    def exists(self, name: str) -> bool:
        try:
            st = os.lstat(self.profile_dir(name))
        except FileNotFoundError:
            return False
        return stat.S_ISDIR(st.st_mode)

    def read_marker(self) -> CurrentMarker:
        return load_marker(self.current_marker_path())

    def write_marker(self, profile: str) -> None:
        logger.debug("Setting current %s profile to %r", self.tool.name, profile)
        save_marker(CurrentMarker(profile=profile), self.current_marker_path())
