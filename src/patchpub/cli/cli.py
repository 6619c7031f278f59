"""CLI entrypoint: Typer app definition and command registration"""

import typer

from patchpub.cli.commands import diff_cmd, render_cmd, stat_cmd


app = typer.Typer(name="patchpub", no_args_is_help=True, help="Unified diff hunks as patch text or HTML")

app.command(name="diff")(diff_cmd)
app.command(name="render")(render_cmd)
app.command(name="stat")(stat_cmd)
