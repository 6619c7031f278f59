"""Patch rendering: plain unified diff text or escaped, operation-tagged HTML"""

import html
import logging
from typing import TextIO

from patchpub.core.header import has_body, header_lines
from patchpub.core.hunks import generate_hunks
from patchpub.core.models import DEFAULT_CONTEXT_LINES, FilePatch, Hunk, Line, Operation, Patch


NO_NEWLINE_MARKER = "\\ No newline at end of file"

logger = logging.getLogger(__name__)


def _esc(text: str) -> str:
    """Escape &, <, >, " and ' as &amp; &lt; &gt; &quot; &#x27;."""
    return html.escape(text, quote=True)


def format_range(start: int, count: int) -> str:
    """'start' when count is 1, else 'start,count'."""
    return str(start) if count == 1 else f"{start},{count}"


def hunk_header(hunk: Hunk) -> str:
    header = f"@@ -{format_range(hunk.from_start, hunk.from_count)} +{format_range(hunk.to_start, hunk.to_count)} @@"
    if hunk.context_prefix:
        header += f" {hunk.context_prefix}"
    return header


def op_text(op: Operation, line: Line) -> str:
    """One plain diff line (newline-terminated), plus the no-newline marker when needed."""
    out = f"{op.prefix}{line.text}\n"
    if not line.terminated:
        out += f"{NO_NEWLINE_MARKER}\n"
    return out


def op_markup(op: Operation, line: Line) -> str:
    """One <span> per op; the no-newline marker stays inside the same span."""
    body = op.prefix + _esc(line.text)
    if not line.terminated:
        body += f"\n{NO_NEWLINE_MARKER}"
    return f'<span class="{op.css_class}">{body}</span>\n'


def render_hunk(hunk: Hunk, markup: bool = False) -> str:
    header = hunk_header(hunk)
    parts = [(_esc(header) if markup else header) + "\n"]
    render_op = op_markup if markup else op_text
    parts.extend(render_op(op, line) for op, line in hunk.ops)
    return "".join(parts)


def render_file_patch(
    file_patch: FilePatch,
    context_lines: int = DEFAULT_CONTEXT_LINES,
    markup: bool = False,
    ) -> str:
    """Render header lines and hunks for a single file. Binary patches render header only."""
    lines = header_lines(file_patch)
    if markup:
        lines = [_esc(line) for line in lines]
    parts = ["\n".join(lines) + "\n"]

    if has_body(file_patch):
        hunks = generate_hunks(file_patch.chunks, context_lines)
        parts.extend(render_hunk(h, markup) for h in hunks)
    return "".join(parts)


def _message_text(message: str, markup: bool) -> str:
    if not message:
        return ""
    if not message.endswith("\n"):
        message += "\n"
    return _esc(message) if markup else message


def render_patch(
    patch: Patch,
    context_lines: int = DEFAULT_CONTEXT_LINES,
    markup: bool = False,
    ) -> str:
    """Render a whole patch: optional message, then file patches separated by blank lines."""
    rendered = [render_file_patch(fp, context_lines, markup) for fp in patch.file_patches]
    return _message_text(patch.message, markup) + "\n".join(rendered)


class PatchEncoder:
    """Writes a rendered patch to a text sink, one file patch at a time.

    A failed write aborts the remaining output; earlier files stay written.
    """

    def __init__(self, writer: TextIO, context_lines: int = DEFAULT_CONTEXT_LINES, markup: bool = False):
        if context_lines < 0:
            raise ValueError(f"context_lines must be >= 0, got {context_lines}")
        self.writer = writer
        self.context_lines = context_lines
        self.markup = markup

    def encode(self, patch: Patch) -> int:
        """Write patch to the sink. Returns the number of file patches written."""
        message = _message_text(patch.message, self.markup)
        if message:
            self._write(message, "message")

        for i, fp in enumerate(patch.file_patches):
            text = render_file_patch(fp, self.context_lines, self.markup)
            if i:
                text = "\n" + text
            self._write(text, fp.display_path)
            logger.debug("Wrote patch for %s", fp.display_path)
        return len(patch.file_patches)

    def _write(self, text: str, what: str) -> None:
        try:
            self.writer.write(text)
        except (OSError, ValueError) as e:
            raise RuntimeError(f"Failed to write patch for {what}: {e}") from e
