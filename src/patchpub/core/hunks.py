"""Hunk accumulation: chunk stream -> bounded-context unified diff hunks"""

import logging
from collections import deque
from typing import Iterable

from patchpub.core.models import DEFAULT_CONTEXT_LINES, Chunk, Hunk, Line, Operation


logger = logging.getLogger(__name__)


class HunkAccumulator:
    """Single-pass conversion of chunks into hunks for one file.

    Counters hold the number of lines consumed on each side. Equal lines seen
    while no hunk is open are kept in a buffer of context_lines + 1 entries; the
    extra slot holds the line just before the context window, used as the hunk's
    context prefix. Equal lines seen while a hunk is open are held as
    after-context until they exceed 2 * context_lines, at which point the hunk
    is sealed with context_lines of trailing context.
    """

    def __init__(self, context_lines: int = DEFAULT_CONTEXT_LINES):
        if context_lines < 0:
            raise ValueError(f"context_lines must be >= 0, got {context_lines}")
        self.context_lines = context_lines
        self.hunks: list[Hunk] = []
        self._from_line = 0
        self._to_line = 0
        self._before: deque[Line] = deque(maxlen=context_lines + 1)
        self._after: list[Line] = []
        self._current: Hunk | None = None

    def feed(self, chunk: Chunk) -> None:
        """Consume one chunk. Zero-length chunks are ignored."""
        if not chunk.lines:
            return
        if chunk.op is Operation.equal:
            self._equal(chunk.lines)
        else:
            self._change(chunk.op, chunk.lines)

    def finish(self) -> list[Hunk]:
        """Seal any open hunk and return all hunks in order."""
        if self._current is not None:
            self._seal()
        return self.hunks

    def _equal(self, lines: list[Line]) -> None:
        self._from_line += len(lines)
        self._to_line += len(lines)
        if self._current is None:
            self._before.extend(lines)
            return
        self._after.extend(lines)
        if len(self._after) > 2 * self.context_lines:
            self._seal()

    def _change(self, op: Operation, lines: list[Line]) -> None:
        if self._current is None:
            self._open()
        elif self._after:
            # gap small enough to merge into the open hunk
            self._current.add_ops(Operation.equal, self._after)
            self._after = []

        self._current.add_ops(op, lines)
        from_inc, to_inc = op.counts
        self._from_line += from_inc * len(lines)
        self._to_line += to_inc * len(lines)

    def _open(self) -> None:
        before = list(self._before)
        prefix = ""
        if len(before) > self.context_lines:
            prefix = before[0].text
            before = before[1:]

        self._current = Hunk(
            from_start=self._from_line - len(before) + 1,
            to_start=self._to_line - len(before) + 1,
            context_prefix=prefix,
        )
        self._current.add_ops(Operation.equal, before)
        self._before.clear()

    def _seal(self) -> None:
        hunk = self._current
        hunk.add_ops(Operation.equal, self._after[:self.context_lines])
        self._before.extend(self._after[self.context_lines:])
        self._after = []

        # an empty range starts at the line before it
        if hunk.from_count == 0:
            hunk.from_start -= 1
        if hunk.to_count == 0:
            hunk.to_start -= 1

        self.hunks.append(hunk)
        self._current = None


def generate_hunks(chunks: Iterable[Chunk], context_lines: int = DEFAULT_CONTEXT_LINES) -> list[Hunk]:
    """Return the ordered hunks for a chunk stream with context_lines of context."""
    acc = HunkAccumulator(context_lines)
    for chunk in chunks:
        acc.feed(chunk)
    hunks = acc.finish()
    logger.debug("Generated %d hunk(s) with %d context line(s)", len(hunks), context_lines)
    return hunks
