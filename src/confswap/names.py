"""Profile name rules and the reserved strings used when rendering status."""

from __future__ import annotations

import re

from confswap.errors import ValidationError

MAX_NAME_LENGTH = 64
CUSTOM = "<custom>"
MODIFIED_SUFFIX = " (modified)"

_ALLOWED = re.compile(r"[A-Za-z0-9_-]+")


def validate_profile_name(name: str) -> None:
    """Raise ValidationError unless name is usable as a profile name.

    A profile name becomes a directory name, so it must be a single path
    segment made of ASCII letters, digits, ``-`` and ``_``.
    """
    if not name.strip():
        raise ValidationError("profile name cannot be empty")
    if name.strip() != name:
        raise ValidationError("profile name cannot start or end with whitespace")
    if len(name) > MAX_NAME_LENGTH:
        raise ValidationError(
            f"profile name too long (max {MAX_NAME_LENGTH} characters)"
        )
    if name == CUSTOM:
        raise ValidationError("profile name is reserved")
    if name.endswith(MODIFIED_SUFFIX):
        raise ValidationError(f"profile name cannot end with {MODIFIED_SUFFIX!r}")
    if name.startswith("."):
        raise ValidationError("profile name cannot start with '.'")
    if "/" in name or "\\" in name:
        raise ValidationError(f"invalid profile name: {name!r}")
    if not name.isascii():
        raise ValidationError(f"invalid profile name: {name!r} (ASCII only)")
    if not _ALLOWED.fullmatch(name):
        raise ValidationError(
            f"invalid profile name: {name!r} (allowed: A-Z a-z 0-9 _ -)"
        )
