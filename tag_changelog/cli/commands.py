"""CLI commands for tag-changelog."""

import logging
from pathlib import Path

import typer
from model_lib.serialize import dump
from rich.console import Console
from rich.markdown import Markdown
from typer import Typer

from tag_changelog.cli.interactive import select_bump
from tag_changelog.cli.options import (
    option_from_ref,
    option_is_bot,
    option_no_emoji,
    option_pretty,
    option_remote_name,
    option_repo_path,
    option_select_bump,
    option_skip_lookup,
    option_skip_remote,
    option_tag_prefix,
    option_to_ref,
    option_write,
)
from tag_changelog.cli.workflows import (
    ChangelogRun,
    NextVersionInfo,
    generate_changelog,
)
from tag_changelog.errors import ChangelogError
from tag_changelog.settings import ChangelogSettings, changelog_settings

logger = logging.getLogger(__name__)
app = Typer(
    name="tag-changelog",
    help="Changelog and next version from conventional commits between tags",
)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    repo_path: Path = option_repo_path,
    from_ref: str | None = option_from_ref,
    to_ref: str | None = option_to_ref,
    tag_prefix: str | None = option_tag_prefix,
    remote_name: str | None = option_remote_name,
    is_bot: bool = option_is_bot,
):
    """tag-changelog: changelog sections and next versions for a commit range"""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()
    ctx.obj = changelog_settings(
        repo_path.resolve(),
        from_ref=from_ref,
        to_ref=to_ref,
        tag_prefix=tag_prefix,
        remote_name=remote_name,
        is_bot=is_bot,
    )


def _run(settings: ChangelogSettings, *, select: bool = False) -> ChangelogRun:
    bump_selector = None
    if select:
        if settings.is_bot:
            logger.warning("--select-bump ignored for bots, using the default bumps")
        else:
            bump_selector = select_bump
    try:
        return generate_changelog(settings, bump_selector=bump_selector)
    except ChangelogError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


@app.command()
def generate(
    ctx: typer.Context,
    write: bool = option_write,
    no_emoji: bool = option_no_emoji,
    skip_lookup: bool = option_skip_lookup,
    skip_remote: bool = option_skip_remote,
    select: bool = option_select_bump,
    pretty: bool = option_pretty,
):
    """Render the changelog sections, newest first"""
    settings: ChangelogSettings = ctx.obj
    settings.use_emoji = not no_emoji
    settings.lookup_handles = not skip_lookup
    settings.use_remote_history = not skip_remote
    run = _run(settings, select=select)
    if write:
        run.write(settings)
        typer.echo(f"Updated {settings.changelog_md}")
    elif pretty:
        Console().print(Markdown(run.markdown))
    else:
        typer.echo(run.markdown)


@app.command()
def next_version(
    ctx: typer.Context,
    as_json: bool = typer.Option(False, "--json", help="Print all candidates as json"),
):
    """Print the version of the newest segment, the existing tag if already tagged"""
    settings: ChangelogSettings = ctx.obj
    settings.lookup_handles = False
    settings.use_remote_history = False
    run = _run(settings)
    release = run.newest_release
    if as_json:
        typer.echo(dump(NextVersionInfo.from_release(release), "json"))
    else:
        typer.echo(release.to_name)
