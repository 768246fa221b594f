"""PZT CLI — all commands."""

from typing import Annotated

import tomlkit
import typer
from rich import print as rprint
from rich.table import Table

from pzt.exceptions import ConfigError, TrackerError
from pzt.log import setup_logging
from pzt.models import Puzzle
from pzt.providers.gitlab import GitLabClient
from pzt.settings import CONFIG_PATH, _list_profiles, get_settings
from pzt.sources import Sources
from pzt.tickets import GitLabTickets, make_title, mention_handles, title_length

app = typer.Typer(help="puzzle-tickets: keep GitLab issues in step with code puzzles", no_args_is_help=True)

ProfileOpt = Annotated[
    str | None,
    typer.Option("--profile", "-k", help="Profile name from ~/.config/pzt/config.toml"),
]
PuzzleIdOpt = Annotated[str, typer.Option("--id", help="Puzzle ID (e.g. 42-3b5f7e1a)")]
FileOpt = Annotated[str, typer.Option("--file", "-f", help="Source file holding the puzzle")]
LinesOpt = Annotated[str, typer.Option("--lines", "-l", help="Line range, e.g. 10-12")]
BodyOpt = Annotated[str, typer.Option("--body", "-b", help="Puzzle text")]


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log tracker calls")] = False,
) -> None:
    setup_logging("DEBUG" if verbose else None)


# ---------------------------------------------------------------------------
# Tickets factory
# ---------------------------------------------------------------------------


def get_tickets(profile: str | None = None) -> GitLabTickets:
    settings = get_settings(profile=profile)
    if not settings.repo:
        rprint("[red]No repository set. Use PZT_REPO or repo in your config profile.[/red]")
        raise typer.Exit(1)
    return GitLabTickets(
        settings.repo,
        GitLabClient(settings),
        Sources(settings.sources_file),
        web_url=settings.gitlab_url,
    )


def _fail(exc: Exception) -> typer.Exit:
    rprint(f"[red]{exc}[/red]")
    return typer.Exit(1)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@app.command("submit")
def submit(
    puzzle_id: PuzzleIdOpt,
    file: FileOpt,
    lines: LinesOpt,
    body: BodyOpt,
    ticket: Annotated[str | None, typer.Option("--ticket", help="Issue the puzzle came from")] = None,
    author: Annotated[str | None, typer.Option("--author", help="Puzzle author")] = None,
    time: Annotated[str | None, typer.Option("--time", help="When the puzzle was created")] = None,
    estimate: Annotated[int | None, typer.Option("--estimate", min=0, help="Estimate in minutes")] = None,
    role: Annotated[str | None, typer.Option("--role", help="Role expected to solve it")] = None,
    profile: ProfileOpt = None,
) -> None:
    """Open an issue for a puzzle."""
    tickets = get_tickets(profile)
    puzzle = Puzzle(
        id=puzzle_id,
        file=file,
        lines=lines,
        body=body,
        ticket=ticket,
        author=author,
        time=time,
        estimate=estimate,
        role=role,
    )
    try:
        ref = tickets.submit(puzzle)
    except (TrackerError, ConfigError) as exc:
        raise _fail(exc) from exc

    rprint(f"[green]✓[/green] [bold]#{ref.number}[/bold] {puzzle.id}")
    rprint(f"  {ref.href}")


@app.command("close")
def close(
    puzzle_id: PuzzleIdOpt,
    issue: Annotated[str, typer.Option("--issue", "-i", help="Issue number recorded for the puzzle")],
    profile: ProfileOpt = None,
) -> None:
    """Close the issue of a puzzle that disappeared from the code."""
    tickets = get_tickets(profile)
    puzzle = Puzzle(id=puzzle_id, file="", lines="0-0", body="", issue=issue)
    try:
        tickets.close(puzzle)
    except (TrackerError, ConfigError) as exc:
        raise _fail(exc) from exc

    rprint(f"[green]✓[/green] Issue #{issue} is closed")


@app.command("notify")
def notify(
    issue: Annotated[str, typer.Argument(help="Issue number")],
    message: Annotated[str, typer.Argument(help="Comment text")],
    profile: ProfileOpt = None,
) -> None:
    """Comment on an issue, addressing its author."""
    tickets = get_tickets(profile)
    try:
        tickets.notify(issue, message)
    except TrackerError as exc:
        raise _fail(exc) from exc


@app.command("title")
def title_cmd(
    file: FileOpt,
    lines: LinesOpt,
    body: BodyOpt,
    profile: ProfileOpt = None,
) -> None:
    """Print the issue title submit would use (no trailing newline)."""
    settings = get_settings(profile=profile, require_token=False)
    try:
        config = Sources(settings.sources_file).config()
    except ConfigError as exc:
        raise _fail(exc) from exc
    puzzle = Puzzle(id="", file=file, lines=lines, body=body)
    typer.echo(make_title(puzzle, config), nl=False)


@app.command("set-default")
def set_default(
    profile: Annotated[str, typer.Argument(help="Profile name to set as default")],
) -> None:
    """Set the default profile in ~/.config/pzt/config.toml."""
    if not CONFIG_PATH.exists():
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        doc = tomlkit.document()
        doc.add("default_profile", profile)
        CONFIG_PATH.write_text(tomlkit.dumps(doc))
        rprint(f'[green]✓[/green] Default profile set to "{profile}" in {CONFIG_PATH}')
        return

    doc = tomlkit.load(CONFIG_PATH.open())
    profiles = _list_profiles(doc)
    if profile not in profiles:
        rprint(f"[red]Profile '{profile}' not found in {CONFIG_PATH}. Available: {profiles or '(none)'}[/red]")
        raise typer.Exit(1)

    doc["default_profile"] = profile
    CONFIG_PATH.write_text(tomlkit.dumps(doc))
    rprint(f'[green]✓[/green] Default profile set to "{profile}" in {CONFIG_PATH}')


@app.command("config-show")
def config_show(profile: ProfileOpt = None) -> None:
    """Show resolved configuration (masks credentials)."""
    settings = get_settings(profile=profile, require_token=False)
    try:
        config = Sources(settings.sources_file).config()
    except ConfigError as exc:
        raise _fail(exc) from exc

    def mask(val: str | None, prefix: str = "") -> str:
        if val is None:
            return "[dim](not set)[/dim]"
        if len(val) <= 5:
            return "***"
        return f"{prefix}...{val[-5:]}"

    options = [o.strip().lower() for o in config.format] if config and config.format else []
    mentions = mention_handles(config)

    table = Table(title="PZT Configuration")
    table.add_column("Field", style="bold")
    table.add_column("Value")

    table.add_row("default_profile", settings.default_profile or "[dim](not set)[/dim]")
    table.add_row("gitlab_url", settings.gitlab_url)
    table.add_row(
        "gitlab_token",
        mask(
            settings.gitlab_token.get_secret_value() if settings.gitlab_token else None,
            prefix="glpat-",
        ),
    )
    table.add_row("repo", settings.repo or "[dim](not set)[/dim]")
    table.add_row("sources_file", str(settings.sources_file))
    table.add_row("format", ", ".join(options) if options else "none")
    table.add_row("title length", str(title_length(options)))
    table.add_row("mentions", " ".join(mentions) if mentions else "none")

    rprint(table)
