"""locate command — check findings against a local diff without GitHub."""

from __future__ import annotations

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from lintnote_core.comments import SEVERITY_ICONS
from lintnote_core.errors import LogReadError
from lintnote_core.locator import locate_findings
from lintnote_core.log_parser import load_findings

console = Console()

_severity_style = {"info": "blue", "warning": "yellow", "error": "red"}


@click.command("locate")
@click.option(
    "--diff",
    "diff_path",
    required=True,
    type=click.Path(exists=True, dir_okay=False),
    help="Unified diff file, e.g. from `git diff origin/main...`.",
)
@click.option("--analyze-log", "analyze_logs", multiple=True, help="Analyzer log (text or JSON). Repeatable.")
@click.option("--custom-lint-log", "custom_lint_logs", multiple=True, help="custom_lint log. Repeatable.")
@click.option("--working-dir", default=None, help="Prefix stripped from analyzer paths.")
@click.pass_context
def locate_cmd(ctx, diff_path: str, analyze_logs, custom_lint_logs, working_dir: str | None):
    """Show which findings land on lines changed by a diff.

    Useful to preview a run locally: in-diff findings would become inline
    comments, the rest would go to the outside-diff summary.
    """
    config = (ctx.obj or {}).get("config", {})
    log_paths = list(analyze_logs) + list(custom_lint_logs)
    if not log_paths:
        log_paths = list(config.get("analyze_log", [])) + list(config.get("custom_lint_log", []))
    if not log_paths:
        raise click.UsageError("No analyzer log given. Pass --analyze-log or --custom-lint-log.")

    try:
        findings = load_findings(log_paths, working_dir or config.get("working_dir") or "")
    except LogReadError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        ctx.exit(1)

    with open(diff_path, encoding="utf-8") as f:
        diff_text = f.read()
    located, outside = locate_findings(findings, diff_text)

    table = Table(title=f"Findings — {escape(diff_path)}", show_header=True, header_style="bold cyan")
    table.add_column("", width=2)
    table.add_column("File")
    table.add_column("Line", justify="right", width=6)
    table.add_column("Diff", width=8)
    table.add_column("Message")

    # Paths and messages come straight from analyzer output and may contain [brackets].
    for lf in located:
        f = lf.finding
        style = _severity_style[f.severity]
        table.add_row(
            SEVERITY_ICONS[f.severity], escape(f.path), str(f.line), f"[{style}]inline[/{style}]", escape(f.message)
        )
    for f in outside:
        table.add_row(SEVERITY_ICONS[f.severity], escape(f.path), str(f.line), "[dim]summary[/dim]", escape(f.message))

    console.print(table)
    console.print(f"{len(located)} finding(s) in the diff, {len(outside)} outside it.")
