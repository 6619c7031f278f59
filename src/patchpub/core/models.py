"""Data models for chunk streams, file descriptors, patches and hunks"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


DEFAULT_CONTEXT_LINES = 3
REGULAR_MODE = 0o100644
EXECUTABLE_MODE = 0o100755
SYMLINK_MODE = 0o120000


class Operation(str, Enum):
    """Closed set of line operations in a diff"""
    equal = "equal"
    add = "add"
    delete = "delete"

    @property
    def prefix(self) -> str:
        """One-character unified diff prefix."""
        if self is Operation.equal:
            return " "
        if self is Operation.add:
            return "+"
        if self is Operation.delete:
            return "-"
        raise ValueError(f"Unknown operation: {self!r}")

    @property
    def css_class(self) -> str:
        return f"diff-{self.value}"

    @property
    def counts(self) -> tuple[int, int]:
        """(from, to) line increments contributed by one line of this operation."""
        if self is Operation.equal:
            return 1, 1
        if self is Operation.add:
            return 0, 1
        if self is Operation.delete:
            return 1, 0
        raise ValueError(f"Unknown operation: {self!r}")


class Line(BaseModel):
    """A single line of file content; only a file's last line may be unterminated."""
    model_config = ConfigDict(frozen=True)
    text: str
    terminated: bool = True


def split_lines(content: str) -> list[Line]:
    """Split content on '\\n'; the last line is unterminated if content lacks a final newline."""
    if not content:
        return []
    parts = content.split("\n")
    lines = [Line(text=p) for p in parts[:-1]]
    if parts[-1]:
        lines.append(Line(text=parts[-1], terminated=False))
    return lines


def join_lines(lines: list[Line]) -> str:
    """Inverse of split_lines."""
    return "".join(line.text + ("\n" if line.terminated else "") for line in lines)


class Chunk(BaseModel):
    """A maximal run of lines sharing one operation, in file order."""
    model_config = ConfigDict(frozen=True)
    op: Operation
    lines: list[Line] = []

    @classmethod
    def from_text(cls, op: Operation, content: str) -> "Chunk":
        return cls(op=op, lines=split_lines(content))


class FileDescriptor(BaseModel):
    """One side of a file pair: path, mode bits and content hash."""
    model_config = ConfigDict(frozen=True)
    path: str
    hash: str
    mode: int = REGULAR_MODE


class AddedFile(BaseModel):
    kind: Literal["added"] = "added"
    to_file: FileDescriptor


class DeletedFile(BaseModel):
    kind: Literal["deleted"] = "deleted"
    from_file: FileDescriptor


class ModifiedFile(BaseModel):
    kind: Literal["modified"] = "modified"
    from_file: FileDescriptor
    to_file: FileDescriptor


FileChange = Annotated[Union[AddedFile, DeletedFile, ModifiedFile], Field(discriminator="kind")]


class FilePatch(BaseModel):
    """Changes to a single file: which sides exist, binary flag, and the chunk stream."""
    change: FileChange
    is_binary: bool = False
    chunks: list[Chunk] = []

    @property
    def files(self) -> tuple[Optional[FileDescriptor], Optional[FileDescriptor]]:
        """Return (from, to) with None for the side that does not exist."""
        change = self.change
        if isinstance(change, AddedFile):
            return None, change.to_file
        if isinstance(change, DeletedFile):
            return change.from_file, None
        return change.from_file, change.to_file

    @property
    def display_path(self) -> str:
        from_file, to_file = self.files
        return (to_file or from_file).path


class Patch(BaseModel):
    """An ordered set of file patches with an optional leading message."""
    message: str = ""
    file_patches: list[FilePatch] = []


def make_file_patch(
    from_file: Optional[FileDescriptor],
    to_file: Optional[FileDescriptor],
    chunks: list[Chunk] = None,
    is_binary: bool = False,
    ) -> FilePatch:
    """Build a FilePatch from nullable descriptors. Raises ValueError if both are None."""
    if from_file is None and to_file is None:
        raise ValueError("File patch needs at least one side (from or to)")
    if from_file is None:
        change = AddedFile(to_file=to_file)
    elif to_file is None:
        change = DeletedFile(from_file=from_file)
    else:
        change = ModifiedFile(from_file=from_file, to_file=to_file)
    return FilePatch(change=change, is_binary=is_binary, chunks=chunks or [])


@dataclass
class Hunk:
    """A block of a unified diff; counts track ops as they are added."""
    from_start: int
    to_start: int
    context_prefix: str = ""
    from_count: int = 0
    to_count: int = 0
    ops: list[tuple[Operation, Line]] = field(default_factory=list)

    def add_ops(self, op: Operation, lines) -> None:
        from_inc, to_inc = op.counts
        for line in lines:
            self.ops.append((op, line))
            self.from_count += from_inc
            self.to_count += to_inc
