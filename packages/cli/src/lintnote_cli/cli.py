"""CLI entry point for lintnote.

Commands:
  comment  — reconcile pull-request review comments with analyzer findings
  locate   — offline: show which findings fall inside a local diff
"""

from __future__ import annotations

import importlib.metadata
import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from lintnote_cli.commands.comment import comment_cmd
from lintnote_cli.commands.locate import locate_cmd

console = Console()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )
    # PyGithub's request logging is noise even in verbose mode.
    logging.getLogger("github").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)


@click.group()
@click.version_option(
    version=importlib.metadata.version("lintnote"),
    prog_name="lintnote",
)
@click.option(
    "--config",
    "config_path",
    default=".lintnote.yml",
    show_default=True,
    help="Path to the configuration file.",
    envvar="LINTNOTE_CONFIG",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging.")
@click.pass_context
def main(ctx: click.Context, config_path: str, verbose: bool):
    """Post Dart/Flutter analyzer findings as GitHub pull-request review comments."""
    from lintnote_core.config import load_config

    ctx.ensure_object(dict)

    config = load_config(config_path)
    _configure_logging(verbose or bool(config.get("verbose")))

    ctx.obj["config_path"] = config_path
    ctx.obj["config"] = config


main.add_command(comment_cmd)
main.add_command(locate_cmd)
