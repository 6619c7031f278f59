"""Chunk streams from difflib alignment, and line-count summaries"""

import difflib

from patchpub.core.models import Chunk, Line, Operation, split_lines


def _key(line: Line) -> str:
    return line.text + ("\n" if line.terminated else "")


def chunks_from_texts(old: str, new: str) -> list[Chunk]:
    """Align old and new with difflib and return the Equal/Delete/Add chunk stream.

    Lines are compared with their terminators so a dropped final newline is a change.
    A 'replace' opcode becomes a Delete chunk followed by an Add chunk.
    """
    old_lines, new_lines = split_lines(old), split_lines(new)
    old_keys = [_key(line) for line in old_lines]
    new_keys = [_key(line) for line in new_lines]
    matcher = difflib.SequenceMatcher(None, old_keys, new_keys)
    chunks: list[Chunk] = []

    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        if tag == "equal":
            chunks.append(Chunk(op=Operation.equal, lines=old_lines[i1:i2]))
            continue
        if tag in ("replace", "delete"):
            chunks.append(Chunk(op=Operation.delete, lines=old_lines[i1:i2]))
        if tag in ("replace", "insert"):
            chunks.append(Chunk(op=Operation.add, lines=new_lines[j1:j2]))

    return chunks


def diff_summary(chunks: list[Chunk]) -> dict[str, int]:
    """Return added/deleted/unchanged line counts. Useful for compact change stats."""
    counts = {"added": 0, "deleted": 0, "unchanged": 0}
    for chunk in chunks:
        if chunk.op is Operation.add:
            counts["added"] += len(chunk.lines)
        elif chunk.op is Operation.delete:
            counts["deleted"] += len(chunk.lines)
        else:
            counts["unchanged"] += len(chunk.lines)
    return counts
