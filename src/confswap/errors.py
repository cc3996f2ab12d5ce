"""Exception hierarchy for confswap."""

from __future__ import annotations


class ConfswapError(Exception):
    """Base class for every error raised by the profile engine."""


class ValidationError(ConfswapError):
    """A profile name was rejected before anything touched the disk."""


class NotFoundError(ConfswapError):
    """A named resource does not exist."""


class ProfileNotFoundError(NotFoundError):
    def __init__(self, profile: str):
        super().__init__(f"profile {profile!r} not found")
        self.profile = profile


class ConfigFileNotFoundError(NotFoundError):
    def __init__(self, path):
        super().__init__(f"config file not found: {path}")
        self.path = path


class ConflictError(ConfswapError):
    """The requested name is already taken."""


class ProfileAlreadyExistsError(ConflictError):
    def __init__(self, profile: str):
        super().__init__(
            f"profile {profile!r} already exists (use --force to overwrite)"
        )
        self.profile = profile


class IntegrityError(ConfswapError):
    """A managed path is not the plain regular file it must be."""

    reason = "integrity check failed"

    def __init__(self, path, reason: str | None = None):
        self.path = path
        if reason is not None:
            self.reason = reason
        super().__init__(f"{self.reason}: {path}")


class SymlinkError(IntegrityError):
    reason = "symlink not allowed"


class IsDirectoryError(IntegrityError):
    reason = "expected file but found directory"


class NotRegularFileError(IntegrityError):
    reason = "expected regular file"


class ProfileMissingFileError(ConfswapError):
    """A saved profile lacks one of the files its tool declares."""

    def __init__(self, filename: str):
        super().__init__(f"profile is missing file: {filename}")
        self.filename = filename


class SwitchError(ConfswapError):
    """A switch failed after it started touching live files.

    The live files and the marker were restored; ``__cause__`` holds the
    failure that triggered the rollback.
    """

    def __init__(self, cause: BaseException):
        super().__init__(f"switch failed: {cause}")
        self.cause = cause


class RollbackFailedError(SwitchError):
    """A switch failed and restoring the previous state failed as well.

    Manual inspection of the live config may be required.
    """

    def __init__(self, cause: BaseException, rollback_errors: list[BaseException]):
        super().__init__(cause)
        self.rollback_errors = list(rollback_errors)
        details = "; ".join(str(e) for e in self.rollback_errors)
        self.args = (f"switch failed: {cause}; rollback failed: {details}",)
