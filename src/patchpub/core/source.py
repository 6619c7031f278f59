"""Filesystem source: file descriptors and chunk streams for file and directory pairs"""

import logging
import os
import stat
from pathlib import Path
from typing import Optional

from patchpub.core.models import (
    EXECUTABLE_MODE,
    REGULAR_MODE,
    SYMLINK_MODE,
    FileDescriptor,
    FilePatch,
    Patch,
    make_file_patch,
)
from patchpub.core.utils.diff import chunks_from_texts
from patchpub.core.utils.hashing import git_blob_hash


BINARY_SNIFF_BYTES = 8000

logger = logging.getLogger(__name__)


def file_mode(path: Path) -> int:
    """Git-style mode bits: symlink, executable, or regular file."""
    if path.is_symlink():
        return SYMLINK_MODE
    return EXECUTABLE_MODE if path.stat().st_mode & stat.S_IXUSR else REGULAR_MODE


def is_binary(data: bytes) -> bool:
    """Treat content as binary if a NUL byte appears in the first 8000 bytes."""
    return b"\0" in data[:BINARY_SNIFF_BYTES]


def _read(path: Path) -> bytes:
    try:
        if path.is_symlink():
            return os.readlink(path).encode("utf-8")
        return path.read_bytes()
    except OSError as e:
        raise RuntimeError(f"Failed to read {path}: {e}") from e


def load_file_patch(
    old_path: Optional[Path],
    new_path: Optional[Path],
    old_name: str = None,
    new_name: str = None,
    ) -> FilePatch:
    """Build a FilePatch for a pair of files; either side may be None (added/deleted).

    Names default to the file names and appear in the a/ and b/ paths; differing
    names on a modified pair produce a rename header.
    """
    old_data = _read(old_path) if old_path is not None else b""
    new_data = _read(new_path) if new_path is not None else b""

    from_file = to_file = None
    if old_path is not None:
        from_file = FileDescriptor(
            path=old_name or old_path.name, mode=file_mode(old_path), hash=git_blob_hash(old_data),
        )
    if new_path is not None:
        to_file = FileDescriptor(
            path=new_name or new_path.name, mode=file_mode(new_path), hash=git_blob_hash(new_data),
        )

    old_text, new_text = _decode(old_data), _decode(new_data)
    binary = old_text is None or new_text is None
    chunks = [] if binary else chunks_from_texts(old_text, new_text)
    return make_file_patch(from_file, to_file, chunks, is_binary=binary)


def _decode(data: bytes) -> Optional[str]:
    """Strict UTF-8 text, or None when the content must be treated as binary."""
    if is_binary(data):
        return None
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        logger.debug("Content is not valid UTF-8; treating it as binary")
        return None


def _relative_files(root: Path) -> dict[str, Path]:
    """Map posix relative path -> file for every file under root, skipping .git."""
    return {
        p.relative_to(root).as_posix(): p
        for p in root.rglob('*')
        if (p.is_file() or p.is_symlink()) and '.git' not in p.relative_to(root).parts
    }


def collect_patch(old_root: Path, new_root: Path, message: str = "") -> Patch:
    """Build a Patch comparing two files or two directory trees.

    Directory trees are paired by relative path in sorted order; files present on
    only one side become added/deleted patches and unchanged files are skipped.
    """
    if not old_root.exists():
        raise RuntimeError(f"Failed to read {old_root}: no such file or directory")
    if not new_root.exists():
        raise RuntimeError(f"Failed to read {new_root}: no such file or directory")

    if old_root.is_file() and new_root.is_file():
        fp = load_file_patch(old_root, new_root, new_root.name, new_root.name)
        return Patch(message=message, file_patches=[] if _unchanged(fp) else [fp])

    if old_root.is_file() or new_root.is_file():
        raise ValueError(f"Cannot compare a file with a directory: {old_root}, {new_root}")

    old_files, new_files = _relative_files(old_root), _relative_files(new_root)
    logger.debug("Collected %d old and %d new file(s)", len(old_files), len(new_files))

    file_patches = []
    for rel in sorted(old_files.keys() | new_files.keys()):
        fp = load_file_patch(old_files.get(rel), new_files.get(rel), rel, rel)
        if not _unchanged(fp):
            file_patches.append(fp)
    return Patch(message=message, file_patches=file_patches)


def _unchanged(fp: FilePatch) -> bool:
    from_file, to_file = fp.files
    return (
        from_file is not None and to_file is not None
        and from_file.hash == to_file.hash
        and from_file.mode == to_file.mode
        and from_file.path == to_file.path
    )
