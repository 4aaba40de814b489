# cli.py
from __future__ import annotations

import json
import sys

import click

from repobatch.config import Settings, TOKEN_ENV
from repobatch.errors import BatchIOError, ParseError, RemoteError
from repobatch.model import Batch, display_name
from repobatch.parser import load_batch
from repobatch.remote.github import GitHubClient
from repobatch.report import results_to_dict, summarize
from repobatch.runner import Engine
from repobatch.ui.console import Console, get_console, set_console


def _load_or_exit(batch_file: str, debug: bool) -> Batch:
    """Load the batch file, printing a structured error and exiting on failure."""
    console = get_console()
    try:
        return load_batch(batch_file)
    except (BatchIOError, ParseError) as e:
        if isinstance(e, BatchIOError):
            console.print_error(
                "Batch file not readable",
                e.message,
                details=[f"path={e.details.get('path')}"],
                suggestion="Check the path passed with --batch-file.",
            )
        else:
            details = [f"at {e.details['location']}"] if "location" in e.details else None
            console.print_error(
                "Invalid batch file",
                e.message,
                details=details,
                suggestion="Fix the batch document and retry:\n  repobatch validate --batch-file <file>",
            )
        if debug:
            import traceback
            traceback.print_exc()
        sys.exit(1)


def plan_lines(batch: Batch) -> list[str]:
    """Human readable outline of what a batch would do."""
    lines = [f"Batch: {display_name(batch.name)} (version {batch.version})"]
    for job in batch.jobs:
        targets = ", ".join(r.full_name for r in job.on_repositories) or "none"
        lines.append(f"  job: {display_name(job.name)} [repositories: {targets}]")
        for step in job.steps:
            lines.append(f"    step: {display_name(step.name)}")
            for command in step.runs:
                lines.append(f"      - {command.kind}")
    return lines


@click.group()
@click.option(
    "--debug",
    is_flag=True,
    default=False,
    help="Enable debug mode (show stack traces and detailed output)",
)
@click.pass_context
def cli(ctx, debug):
    """repobatch: run declarative batches of GitHub operations."""
    # Initialize console with debug flag
    console = Console(debug=debug)
    set_console(console)
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug


@cli.command()
@click.option("--batch-file", required=True, help="The batch file to run")
@click.option("--workers", default=None, type=click.IntRange(min=1), help="Max concurrent remote calls for the whole run")
@click.option("--api-url", default=None, help="GitHub API base URL (defaults to https://api.github.com)")
@click.option("--timeout", default=None, type=click.IntRange(min=1), help="HTTP timeout in seconds")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the full result tree as JSON")
@click.pass_context
def run(ctx, batch_file, workers, api_url, timeout, as_json):
    """Run a batch file against GitHub."""
    debug = ctx.obj.get("debug", False)

    try:
        settings = Settings.from_env()
    except ValueError as e:
        get_console().print_error("Invalid configuration", str(e))
        sys.exit(1)

    if as_json:
        # keep stdout clean for the JSON document
        set_console(Console(debug=debug, quiet=True))
    console = get_console()

    batch = _load_or_exit(batch_file, debug)

    token = settings.token
    if not token:
        token = click.prompt(
            f"Enter your personal access token (scope: repo) [or set {TOKEN_ENV}]",
            hide_input=True,
            err=True,
        )

    client = GitHubClient(
        token,
        base_url=api_url or settings.api_url,
        timeout=timeout or settings.timeout,
    )

    try:
        login = client.authenticated_user()
        console.print_authenticated(login)
    except RemoteError as e:
        console.print_error(
            "Authentication failed",
            e.message,
            suggestion=f"Check the token (or {TOKEN_ENV}) and its scopes.",
        )
        sys.exit(1)

    engine = Engine(client, max_workers=workers or settings.max_workers)

    try:
        results = engine.run_batch(batch)
    except KeyboardInterrupt:
        console.print_info("\nInterrupted by user")
        sys.exit(130)
    except Exception as e:
        console.print_exception(e)
        sys.exit(1)

    summary = summarize(results)
    if as_json:
        click.echo(json.dumps(results_to_dict(batch, results), indent=2))
    else:
        console.print_results(summary.total, summary.succeeded, summary.failed, summary.skipped)

    if not summary.ok:
        sys.exit(1)


@cli.command()
@click.option("--batch-file", required=True, help="The batch file to check")
@click.pass_context
def validate(ctx, batch_file):
    """Parse a batch file and print what it would run."""
    batch = _load_or_exit(batch_file, ctx.obj.get("debug", False))
    get_console().print_plan(plan_lines(batch))


if __name__ == "__main__":
    cli()
