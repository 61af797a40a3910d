"""CLI options for tag-changelog commands."""

from pathlib import Path

import typer

option_repo_path = typer.Option(
    ...,
    "-p",
    "--path",
    default_factory=Path.cwd,
    exists=True,
    file_okay=False,
    help="Path to the git repository",
)

option_from_ref = typer.Option(
    None,
    "-f",
    "--from",
    envvar="TAG_CHANGELOG_FROM_REF",
    help="Tag or commit to start from (exclusive). Defaults to the latest version tag.",
)

option_to_ref = typer.Option(
    None,
    "-t",
    "--to",
    envvar="TAG_CHANGELOG_TO_REF",
    help="Tag or commit to end at (inclusive). Defaults to HEAD.",
)

option_tag_prefix = typer.Option(
    None,
    "--prefix",
    envvar="TAG_CHANGELOG_TAG_PREFIX",
    help="{prefix}{version} used for tags, defaults to 'v'",
)

option_remote_name = typer.Option(
    None,
    "-r",
    "--remote",
    envvar="TAG_CHANGELOG_REMOTE_NAME",
    help="Remote used for compare and commit links, defaults to 'origin'",
)

option_is_bot = typer.Option(
    False,
    "--is-bot",
    envvar="TAG_CHANGELOG_IS_BOT",
    help="For CI to avoid any prompt hanging",
)

option_write = typer.Option(
    False,
    "--write",
    "-w",
    help="Add the sections to CHANGELOG.md instead of printing them",
)

option_no_emoji = typer.Option(False, "--no-emoji", help="Plain section headings")

option_skip_lookup = typer.Option(
    False,
    "--skip-lookup",
    help="Skip looking up GitHub handles of commit authors",
)

option_skip_remote = typer.Option(
    False,
    "--skip-remote",
    help="Skip reading author logins from the GitHub commit history",
)

option_select_bump = typer.Option(
    False,
    "--select-bump",
    help="Choose major/minor/patch for each untagged segment",
)

option_pretty = typer.Option(
    False,
    "--pretty",
    help="Render the markdown in the terminal instead of printing it raw",
)
