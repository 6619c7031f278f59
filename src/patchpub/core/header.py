"""File-level patch headers: diff --git, mode, rename, index and body lines"""

from patchpub.core.models import AddedFile, DeletedFile, FilePatch, ModifiedFile
from patchpub.core.utils.hashing import ZERO_HASH


DEV_NULL = "/dev/null"


def _body_lines(from_ref: str, to_ref: str, is_binary: bool) -> list[str]:
    """Return the ---/+++ pair, or the single 'Binary files' line."""
    if is_binary:
        return [f"Binary files {from_ref} and {to_ref} differ"]
    return [f"--- {from_ref}", f"+++ {to_ref}"]


def _modified_lines(change: ModifiedFile, is_binary: bool) -> list[str]:
    src, dst = change.from_file, change.to_file
    hash_equal = src.hash == dst.hash
    mode_equal = src.mode == dst.mode

    lines = [f"diff --git a/{src.path} b/{dst.path}"]
    if not mode_equal:
        lines += [f"old mode {src.mode:o}", f"new mode {dst.mode:o}"]
    if src.path != dst.path:
        lines += [f"rename from {src.path}", f"rename to {dst.path}"]
    if hash_equal:
        return lines

    # mode suffix only when the mode did not change
    if mode_equal:
        lines.append(f"index {src.hash}..{dst.hash} {src.mode:o}")
    else:
        lines.append(f"index {src.hash}..{dst.hash}")
    return lines + _body_lines(f"a/{src.path}", f"b/{dst.path}", is_binary)


def header_lines(file_patch: FilePatch) -> list[str]:
    """Return the ordered header lines for a file patch."""
    change = file_patch.change
    if isinstance(change, ModifiedFile):
        return _modified_lines(change, file_patch.is_binary)

    if isinstance(change, AddedFile):
        dst = change.to_file
        return [
            f"diff --git a/{dst.path} b/{dst.path}",
            f"new file mode {dst.mode:o}",
            f"index {ZERO_HASH}..{dst.hash}",
        ] + _body_lines(DEV_NULL, f"b/{dst.path}", file_patch.is_binary)

    if isinstance(change, DeletedFile):
        src = change.from_file
        return [
            f"diff --git a/{src.path} b/{src.path}",
            f"deleted file mode {src.mode:o}",
            f"index {src.hash}..{ZERO_HASH}",
        ] + _body_lines(f"a/{src.path}", DEV_NULL, file_patch.is_binary)

    raise ValueError(f"Unknown file change: {change!r}")


def has_body(file_patch: FilePatch) -> bool:
    """True when hunks follow the header: content changed and the file is not binary."""
    if file_patch.is_binary:
        return False
    change = file_patch.change
    if isinstance(change, ModifiedFile):
        return change.from_file.hash != change.to_file.hash
    return True
