"""supercommit CLI: all commands."""

import re
import subprocess
import sys
from datetime import date
from pathlib import Path
from typing import Annotated

import typer
from rich import print as rprint
from rich.markup import escape
from rich.table import Table

from supercommit.errors import SuperCommitError
from supercommit.logging_config import get_logger, setup_logging
from supercommit.models import ParsedDirectives
from supercommit.parser import parse_commit_message, sanitize_first_line
from supercommit.settings import CONFIG_PATH, SupercommitSettings, get_settings

app = typer.Typer(help="supercommit: read issue-tracker directives (STATUS, LOG, COMMENT, ...) from commit messages", no_args_is_help=True)

logger = get_logger(__name__)

TodayOpt = Annotated[
    bool,
    typer.Option("--today", help="Use today's date for a LOG without @date or DATE"),
]

_MERGE_RE = re.compile(r"^Merge\b", re.IGNORECASE)

# Written to .git/hooks/commit-msg by install-hook. Git passes the message file as $1.
_HOOK_MARKER = "supercommit check"
_HOOK_TEMPLATE = """\
#!/bin/sh
# Installed by supercommit install-hook. Rejects commits whose subject line
# does not follow: ISSUE-123 [STATUS:..] [LOG:..] [COMMENT:..] ...
exec supercommit check "$1"
"""


# ---------------------------------------------------------------------------
# Parse helpers
# ---------------------------------------------------------------------------


def is_merge_commit(message: str) -> bool:
    return bool(_MERGE_RE.match(sanitize_first_line(message)))


def _default_log_date(today: bool, settings: SupercommitSettings) -> date | None:
    return date.today() if (today or settings.fill_today) else None


def _resolve_message(message: str | None, settings: SupercommitSettings) -> str:
    """Pick the message argument, '-' for stdin, or the configured COMMIT_MESSAGE."""
    if message == "-":
        return sys.stdin.read()
    if message is not None:
        return message
    if settings.commit_message:
        return settings.commit_message
    rprint("[red]No commit message given. Pass one as an argument or set COMMIT_MESSAGE.[/red]")
    raise typer.Exit(1)


def _parse_or_exit(message: str, default_log_date: date | None) -> ParsedDirectives:
    try:
        parsed = parse_commit_message(message, default_log_date=default_log_date)
    except SuperCommitError as exc:
        logger.info("Rejected commit line: %s", exc)
        rprint(f"[red]error: {escape(str(exc))}[/red]", file=sys.stderr)
        raise typer.Exit(1) from exc
    logger.debug("Parsed %r -> %s", parsed.first_line, parsed.model_dump())
    return parsed


def summarize(parsed: ParsedDirectives) -> str:
    """One-line summary, e.g. ``issue=ABC-1 status=Done log=1.5@today phase=(none)``."""
    log = f"{parsed.log_hours:g}@{parsed.log_date or 'today'}" if parsed.has_log else "(none)"
    return (
        f"issue={parsed.issue} status={parsed.status or '(none)'} "
        f"log={log} phase={parsed.phase or '(none)'}"
    )


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


def _fmt(value: object) -> str:
    if value is None:
        return "[dim](none)[/dim]"
    if isinstance(value, bool):
        return "yes" if value else "no"
    if isinstance(value, float):
        return f"{value:g}"
    return escape(str(value))


def render_table(parsed: ParsedDirectives) -> Table:
    table = Table(title=escape(parsed.first_line))
    table.add_column("Field", style="bold")
    table.add_column("Value")

    table.add_row("Issue", parsed.issue)
    table.add_row("Status", _fmt(parsed.status))
    table.add_row("Log hours", _fmt(parsed.log_hours))
    table.add_row("Log date", _fmt(parsed.log_date))
    table.add_row("Comment", _fmt(parsed.comment))
    table.add_row("Phase", _fmt(parsed.phase))
    table.add_row("Ready", _fmt(parsed.ready))
    return table


# ---------------------------------------------------------------------------
# Step output helpers
# ---------------------------------------------------------------------------


def _flag(value: bool | None) -> str:
    if value is None:
        return ""
    return "true" if value else "false"


def step_outputs(parsed: ParsedDirectives) -> list[tuple[str, str]]:
    """Flatten parsed directives into GitHub step outputs. Missing values are empty strings."""
    return [
        ("skip", "no"),
        ("issue", parsed.issue),
        ("status", parsed.status or ""),
        ("log_hours", f"{parsed.log_hours:g}" if parsed.log_hours is not None else ""),
        ("log_seconds", str(parsed.log_seconds) if parsed.log_seconds is not None else ""),
        ("log_date", parsed.log_date or ""),
        ("comment", parsed.comment or ""),
        ("phase", parsed.phase or ""),
        ("ready", _flag(parsed.ready)),
        ("has_status", _flag(parsed.has_status)),
        ("has_log", _flag(parsed.has_log)),
        ("has_comment", _flag(parsed.has_comment)),
    ]


def write_step_outputs(pairs: list[tuple[str, str]], target: Path | None) -> None:
    """Append name=value lines to the step-output file, or echo them when there is none."""
    if target is None:
        for name, value in pairs:
            typer.echo(f"[OUTPUT] {name}={value}")
        return
    with target.open("a", encoding="utf-8") as fh:
        for name, value in pairs:
            fh.write(f"{name}={value}\n")
    logger.info("Wrote %d step outputs to %s", len(pairs), target)


# ---------------------------------------------------------------------------
# Hook helpers
# ---------------------------------------------------------------------------


def _git_hooks_dir() -> Path:
    """Return the hooks directory git uses for the current repository."""
    result = subprocess.run(["git", "rev-parse", "--git-path", "hooks"], capture_output=True, text=True)
    if result.returncode != 0:
        typer.echo("error: not inside a git repository", err=True)
        raise typer.Exit(1)
    return Path(result.stdout.strip())


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@app.callback()
def main(
    verbose: Annotated[int, typer.Option("--verbose", "-v", count=True, help="Increase log verbosity")] = 0,
) -> None:
    """Parse commit message directives and feed them to CI."""
    settings = get_settings()
    setup_logging(verbose, level=settings.log_level)


@app.command("parse")
def parse_cmd(
    message: Annotated[
        str | None,
        typer.Argument(help="Commit message, '-' for stdin. Defaults to COMMIT_MESSAGE"),
    ] = None,
    as_json: Annotated[bool, typer.Option("--json", help="Print JSON instead of a table")] = False,
    today: TodayOpt = False,
) -> None:
    """Show the directives found in a commit message."""
    settings = get_settings()
    text = _resolve_message(message, settings)
    parsed = _parse_or_exit(text, _default_log_date(today, settings))

    if as_json:
        typer.echo(parsed.model_dump_json(by_alias=True, indent=2))
    else:
        rprint(render_table(parsed))


@app.command("check")
def check_cmd(
    path: Annotated[Path, typer.Argument(help="Commit message file (git passes it to commit-msg hooks)")],
) -> None:
    """Validate a commit message file. Exits 1 when the subject line is malformed."""
    settings = get_settings()
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        typer.echo(f"error: could not read {path}: {exc}", err=True)
        raise typer.Exit(2) from exc

    if settings.skip_merge_commits and is_merge_commit(text):
        logger.info("Merge commit detected, skipping validation")
        rprint("[dim]Merge commit detected, skipping.[/dim]")
        return

    parsed = _parse_or_exit(text, None)
    rprint(f"[green]✓[/green] {escape(summarize(parsed))}")


@app.command("outputs")
def outputs_cmd(
    message: Annotated[
        str | None,
        typer.Argument(help="Commit message, '-' for stdin. Defaults to COMMIT_MESSAGE"),
    ] = None,
    output_file: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Step-output file. Defaults to GITHUB_OUTPUT"),
    ] = None,
    today: TodayOpt = False,
) -> None:
    """Write parsed directives as CI step outputs (name=value lines)."""
    settings = get_settings()
    target = output_file or settings.github_output
    text = _resolve_message(message, settings)

    # Pull requests are only opened by a later, explicit trigger.
    pairs = [("create_pr", "no")]

    if settings.skip_merge_commits and is_merge_commit(text):
        logger.info("Merge commit detected, skipping entirely")
        write_step_outputs([*pairs, ("skip", "yes")], target)
        return

    parsed = _parse_or_exit(text, _default_log_date(today, settings))
    logger.info(summarize(parsed))
    write_step_outputs(pairs + step_outputs(parsed), target)


@app.command("install-hook")
def install_hook(
    hooks_dir: Annotated[
        Path | None,
        typer.Option("--hooks-dir", help="Directory to install into. Defaults to the repo's git hooks dir"),
    ] = None,
    force: Annotated[bool, typer.Option("--force", help="Overwrite an existing commit-msg hook")] = False,
) -> None:
    """Install a git commit-msg hook that runs `supercommit check`."""
    target_dir = hooks_dir or _git_hooks_dir()
    hook = target_dir / "commit-msg"

    if hook.exists() and not force:
        if _HOOK_MARKER in hook.read_text(encoding="utf-8", errors="replace"):
            rprint(f"[yellow]supercommit hook already present in {hook}.[/yellow] Use --force to rewrite.")
            raise typer.Exit(0)
        rprint(f"[red]{hook} exists and was not written by supercommit.[/red] Use --force to overwrite.")
        raise typer.Exit(1)

    action = "Updated" if hook.exists() else "Wrote"
    target_dir.mkdir(parents=True, exist_ok=True)
    hook.write_text(_HOOK_TEMPLATE, encoding="utf-8")
    hook.chmod(0o755)
    logger.debug("Hook contents:\n%s", _HOOK_TEMPLATE)
    rprint(f"[green]✓[/green] {action} {hook}")


@app.command("config-show")
def config_show() -> None:
    """Show resolved configuration."""
    settings = get_settings()

    def show(val: object) -> str:
        return "[dim](not set)[/dim]" if val is None else escape(str(val))

    table = Table(title="supercommit configuration")
    table.add_column("Field", style="bold")
    table.add_column("Value")

    table.add_row("config_file", f"{CONFIG_PATH}" if CONFIG_PATH.exists() else f"{CONFIG_PATH} [dim](missing)[/dim]")
    table.add_row("commit_message", show(settings.commit_message))
    table.add_row("github_output", show(settings.github_output))
    table.add_row("fill_today", show(settings.fill_today))
    table.add_row("skip_merge_commits", show(settings.skip_merge_commits))
    table.add_row("log_level", show(settings.log_level))

    rprint(table)
