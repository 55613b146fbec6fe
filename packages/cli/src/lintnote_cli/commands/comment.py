"""comment command — reconcile pull-request comments with analyzer findings."""

from __future__ import annotations

import click
from rich.console import Console
from rich.markup import escape

from lintnote_cli.actions import resolve_pr_number, resolve_repository
from lintnote_core.commenter import run_commenter
from lintnote_core.errors import CommentStoreError, LogReadError
from lintnote_core.log_parser import load_findings
from lintnote_store.pull_request import PullRequestStore

console = Console()


@click.command("comment")
@click.option("--repo", default=None, help="GitHub repository in owner/name format. Defaults to $GITHUB_REPOSITORY.")
@click.option(
    "--pr",
    "pr_number",
    type=int,
    default=None,
    help="Pull request number. Defaults to the pull request of the triggering GitHub Actions event.",
)
@click.option(
    "--analyze-log",
    "analyze_logs",
    multiple=True,
    help="Log written by `flutter analyze` / `dart analyze` (text or JSON). Repeatable.",
)
@click.option(
    "--custom-lint-log",
    "custom_lint_logs",
    multiple=True,
    help="Log written by `dart run custom_lint`. Repeatable.",
)
@click.option("--working-dir", default=None, help="Prefix stripped from analyzer paths. Defaults to $GITHUB_WORKSPACE.")
@click.option("--max-issues", type=int, default=None, help="Post only a summary when there are more findings.")
@click.option(
    "--shadow",
    "-s",
    is_flag=True,
    help="Dry-run mode: print the planned changes without touching the pull request.",
)
@click.pass_context
def comment_cmd(
    ctx,
    repo: str | None,
    pr_number: int | None,
    analyze_logs: tuple[str, ...],
    custom_lint_logs: tuple[str, ...],
    working_dir: str | None,
    max_issues: int | None,
    shadow: bool,
):
    """Post analyzer findings as review comments on a pull request.

    Findings on lines added by the pull request become inline comments;
    findings elsewhere are listed in one summary comment. Comments from earlier
    runs that no longer match a finding are deleted.

    \b
    Required environment variables:
      GITHUB_TOKEN         GitHub token (or GH_TOKEN, or a gh CLI session)
    """
    from lintnote_cli.auth import resolve_github_token
    from lintnote_core.config import load_config, validate_config

    config_path = (ctx.obj or {}).get("config_path", ".lintnote.yml")
    config = load_config(
        config_path,
        cli_overrides={
            "analyze_log": list(analyze_logs) or None,
            "custom_lint_log": list(custom_lint_logs) or None,
            "working_dir": working_dir,
            "max_issues": max_issues,
        },
    )
    try:
        validate_config(config)
    except ValueError as e:
        raise click.UsageError(str(e))

    token = resolve_github_token(config.get("github_token"))
    if not token:
        raise click.UsageError(
            "No GitHub token found. Set GITHUB_TOKEN or run `gh auth login` first.\n"
            "Create a token at https://github.com/settings/tokens"
        )
    config["github_token"] = token

    repo = repo or resolve_repository()
    if not repo:
        raise click.UsageError("No repository given. Pass --repo or set GITHUB_REPOSITORY.")
    pr_number = pr_number or resolve_pr_number()
    if pr_number is None:
        raise click.UsageError("No pull request given. Pass --pr or run on a pull_request event.")

    log_paths = config["analyze_log"] + config["custom_lint_log"]
    if not log_paths:
        raise click.UsageError("No analyzer log given. Pass --analyze-log or --custom-lint-log.")

    try:
        findings = load_findings(log_paths, config["working_dir"])
    except LogReadError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        ctx.exit(1)

    console.print(f"Parsed {len(findings)} finding(s) from {len(log_paths)} log(s).")

    try:
        store = PullRequestStore(repo, pr_number, token=token, per_page=config["per_page"])
        summary = run_commenter(findings, store, store, config, shadow=shadow)
    except CommentStoreError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        ctx.exit(1)

    if not summary.ok:
        ctx.exit(1)
