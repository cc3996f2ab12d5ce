"""Configuration locations, tool descriptors, and the current-profile marker."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path

from confswap.fsutil import FILE_MODE, ensure_regular_file_if_exists, write_file_atomic

APP_NAME = "confswap"
ROOT_ENV_VAR = "CONFSWAP_HOME"
MARKER_FILE = "current.json"


def config_root(home: Path | None = None) -> Path:
    """Directory under which every tool keeps its profiles and marker."""
    override = os.environ.get(ROOT_ENV_VAR)
    if override:
        return Path(override).expanduser()
    home = home or Path.home()
    return home / ".config" / APP_NAME


@dataclass(frozen=True)
class ToolDescriptor:
    """An external tool whose config files can be snapshotted."""

    name: str
    display_name: str
    config_rel_paths: tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.config_rel_paths:
            raise ValueError(f"Tool {self.name!r} must manage at least one file")
        names = [Path(p).name for p in self.config_rel_paths]
        if len(set(names)) != len(names):
            raise ValueError(f"Tool {self.name!r} has duplicate config file names")

    def config_files(self, home: Path | None = None) -> list[Path]:
        home = home or Path.home()
        return [home / rel for rel in self.config_rel_paths]


@dataclass
class CurrentMarker:
    """Which profile the live config was last switched to ("" for none)."""

    profile: str = ""

    @property
    def is_empty(self) -> bool:
        return not self.profile


def load_marker(path: Path) -> CurrentMarker:
    """Load the marker from disk. Returns an empty marker if the file doesn't exist."""
    if not ensure_regular_file_if_exists(path):
        return CurrentMarker()

    data = json.loads(Path(path).read_bytes())
    if not isinstance(data, dict):
        raise ValueError(f"Malformed marker file: {path}")

    profile = data.get("profile", "")
    if not isinstance(profile, str):
        raise ValueError(f"Malformed marker file: {path}")
    return CurrentMarker(profile=profile)


def save_marker(marker: CurrentMarker, path: Path) -> None:
    """Atomically write the marker to disk."""
    data = json.dumps({"profile": marker.profile}).encode()
    write_file_atomic(path, data, FILE_MODE)
