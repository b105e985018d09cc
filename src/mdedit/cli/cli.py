"""CLI entrypoint: Typer app definition and command registration"""

import typer

from mdedit.cli.commands import convert_cmd, stats_cmd, toggle_block_cmd, toggle_mark_cmd


app = typer.Typer(name="mdedit", no_args_is_help=True, help="Rich-text document editing core: convert, inspect, and edit documents")

app.command(name="convert")(convert_cmd)
app.command(name="stats")(stats_cmd)
app.command(name="toggle-block")(toggle_block_cmd)
app.command(name="toggle-mark")(toggle_mark_cmd)
