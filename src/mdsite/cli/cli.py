"""CLI entrypoint: Typer app definition and command registration"""

import logging
from typing import Annotated

import typer

from mdsite.cli.commands import build_cmd, init_cmd, list_cmd


app = typer.Typer(name="mdsite", no_args_is_help=True, help="Markdown/MDX content build pipeline")


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log each file and transform step")] = False,
    ):
    """Configure logging for every command."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )


app.command(name="build")(build_cmd)
app.command(name="list")(list_cmd)
app.command(name="init")(init_cmd)
