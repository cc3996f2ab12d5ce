"""Filesystem primitives that refuse to follow symlinks.

Every read or write of a managed path goes through these helpers. A path is
inspected with ``os.lstat`` so a symlink planted at a config location is seen
as a symlink rather than as whatever it points to, and is rejected.
"""

from __future__ import annotations

import hashlib
import logging
import os
import shutil
import stat
import tempfile
from pathlib import Path
from typing import BinaryIO

from confswap.errors import (
    IntegrityError,
    IsDirectoryError,
    NotRegularFileError,
    SymlinkError,
)

logger = logging.getLogger(__name__)

DIR_MODE = 0o700
FILE_MODE = 0o600
TEMP_PREFIX = ".confswap-"
CHUNK_SIZE = 64 * 1024


def _check_mode(path: Path, mode: int) -> None:
    if stat.S_ISLNK(mode):
        raise SymlinkError(path)
    if stat.S_ISDIR(mode):
        raise IsDirectoryError(path)
    if not stat.S_ISREG(mode):
        raise NotRegularFileError(path)


def ensure_regular_file(path: Path) -> None:
    """Raise unless path is a regular file (not a symlink to one).

    A missing path raises ``FileNotFoundError``.
    """
    st = os.lstat(path)
    _check_mode(Path(path), st.st_mode)


def ensure_regular_file_if_exists(path: Path) -> bool:
    """Like ensure_regular_file, but report a missing path as False."""
    try:
        st = os.lstat(path)
    except FileNotFoundError:
        return False
    _check_mode(Path(path), st.st_mode)
    return True


def make_private_dirs(path: Path) -> None:
    """Create path and any missing ancestors, each with DIR_MODE.

    Existing directories keep their permissions.
    """
    missing = []
    path = Path(path)
    while not path.is_dir() and path.parent != path:
        missing.append(path)
        path = path.parent
    for d in reversed(missing):
        try:
            d.mkdir(mode=DIR_MODE)
        except FileExistsError:
            if not d.is_dir():
                raise


def ensure_parent_dir(path: Path) -> None:
    make_private_dirs(Path(path).parent)


def copy_file(src: Path, dst: Path) -> None:
    """Copy src over dst byte for byte.

    Both ends must be regular files; dst may also be absent, in which case it
    is created owner-read/write only.
    """
    ensure_regular_file(src)
    ensure_parent_dir(dst)
    ensure_regular_file_if_exists(dst)

    flags = os.O_WRONLY | os.O_CREAT | os.O_TRUNC | getattr(os, "O_NOFOLLOW", 0)
    with open(src, "rb") as fin:
        fd = os.open(dst, flags, FILE_MODE)
        with os.fdopen(fd, "wb") as fout:
            shutil.copyfileobj(fin, fout, CHUNK_SIZE)
    logger.debug("Copied %s -> %s", src, dst)


def copy_into(src: Path, fout: BinaryIO) -> None:
    """Stream a regular file into an already-open file and fsync it."""
    ensure_regular_file(src)
    with open(src, "rb") as fin:
        shutil.copyfileobj(fin, fout, CHUNK_SIZE)
    fout.flush()
    os.fsync(fout.fileno())


def file_hash(path: Path) -> str:
    hasher = hashlib.sha256()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(CHUNK_SIZE), b""):
            hasher.update(chunk)
    return hasher.hexdigest()


def files_equal(a: Path, b: Path) -> bool:
    """Byte-for-byte comparison: size first, then SHA-256."""
    ensure_regular_file(a)
    ensure_regular_file(b)

    if os.lstat(a).st_size != os.lstat(b).st_size:
        return False
    return file_hash(a) == file_hash(b)


def write_file_atomic(path: Path, data: bytes, mode: int = FILE_MODE) -> None:
    """Write data to path via a temp file in the same directory and a rename.

    The destination must be absent or a regular file. After the rename the
    destination is checked again; if something other than a regular file
    ended up there it is removed and IntegrityError is raised.
    """
    path = Path(path)
    ensure_parent_dir(path)
    ensure_regular_file_if_exists(path)

    fd, tmp_name = tempfile.mkstemp(prefix=TEMP_PREFIX, dir=path.parent)
    renamed = False
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
            os.chmod(tmp_name, mode)
        os.replace(tmp_name, path)
        renamed = True
    finally:
        if not renamed:
            remove_if_exists(Path(tmp_name))

    try:
        ensure_regular_file(path)
    except (IntegrityError, FileNotFoundError) as e:
        if not isinstance(e, IsDirectoryError):
            remove_if_exists(path)
        raise IntegrityError(path, f"post-write validation failed ({e})") from e
    logger.debug("Wrote %d bytes to %s", len(data), path)


def remove_if_exists(path: Path) -> None:
    try:
        os.unlink(path)
    except FileNotFoundError:
        pass
