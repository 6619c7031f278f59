"""CLI command implementations"""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from pydantic import ValidationError

from patchpub.config import Settings, load_config
from patchpub.core.models import Patch
from patchpub.core.render import PatchEncoder, render_patch
from patchpub.core.source import collect_patch
from patchpub.core.utils.diff import diff_summary


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling, then configure logging."""
    try:
        settings = load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))
    logging.basicConfig(level=getattr(logging, settings.log_level), format='%(levelname)s: %(message)s')
    return settings


def _collect(old: str, new: str, message: str = "") -> Patch:
    try:
        return collect_patch(Path(old), Path(new), message)
    except (RuntimeError, ValueError) as e:
        _fail(str(e))


def _emit(patch: Patch, settings: Settings, out: Optional[str]) -> None:
    """Write the rendered patch to out, or to stdout when out is None."""
    markup = settings.output_format == "html"
    if out is None:
        typer.echo(render_patch(patch, settings.context_lines, markup), nl=False)
        return
    try:
        with open(out, "w", encoding="utf-8") as f:
            written = PatchEncoder(f, settings.context_lines, markup).encode(patch)
    except (OSError, RuntimeError) as e:
        _fail(f"Could not write {out}", e)
    typer.echo(f"Wrote {written} file patch(es) to {out}", err=True)


def diff_cmd(
    old: Annotated[str, typer.Argument(help="Old file or directory")],
    new: Annotated[str, typer.Argument(help="New file or directory")],
    context: Annotated[Optional[int], typer.Option("--context", "-U", help="Context lines around changes")] = None,
    fmt: Annotated[Optional[str], typer.Option("--format", help="text or html")] = None,
    out: Annotated[Optional[str], typer.Option("--out", "-o", help="Output file (default: stdout)")] = None,
    message: Annotated[str, typer.Option("--message", "-m", help="Text placed before the first file header")] = "",
    ):
    """Render the patch between two files or two directory trees."""
    settings = _settings(overrides={"context_lines": context, "output_format": fmt})
    patch = _collect(old, new, message)
    _emit(patch, settings, out)


def render_cmd(
    path: Annotated[str, typer.Argument(help="Patch JSON (message, file_patches with chunks)")],
    context: Annotated[Optional[int], typer.Option("--context", "-U", help="Context lines around changes")] = None,
    fmt: Annotated[Optional[str], typer.Option("--format", help="text or html")] = None,
    out: Annotated[Optional[str], typer.Option("--out", "-o", help="Output file (default: stdout)")] = None,
    ):
    """Render a patch supplied as JSON chunk streams and file descriptors."""
    settings = _settings(overrides={"context_lines": context, "output_format": fmt})
    try:
        patch = Patch.model_validate_json(Path(path).read_text(encoding="utf-8"))
    except OSError as e:
        _fail(f"Failed to read {path}", e)
    except ValidationError as e:
        _fail(f"Invalid patch JSON in {path}", e)
    _emit(patch, settings, out)


def stat_cmd(
    old: Annotated[str, typer.Argument(help="Old file or directory")],
    new: Annotated[str, typer.Argument(help="New file or directory")],
    ):
    """Print added/deleted line counts per changed file."""
    _settings()
    patch = _collect(old, new)
    if not patch.file_patches:
        typer.echo("No changes.")
        return

    added = deleted = 0
    for fp in patch.file_patches:
        if fp.is_binary:
            typer.echo(f"  {fp.display_path} | Bin")
            continue
        counts = diff_summary(fp.chunks)
        added += counts["added"]
        deleted += counts["deleted"]
        typer.echo(f"  {fp.display_path} | +{counts['added']} -{counts['deleted']}")
    typer.echo(
        f"{len(patch.file_patches)} file(s) changed, "
        f"{added} insertion(s), "
        f"{deleted} deletion(s)"
    )
