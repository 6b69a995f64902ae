"""CLI entry point for Maildir Archiver."""

from __future__ import annotations

import shlex
from pathlib import Path

import click

from .constants import DEFAULT_AGE_DAYS, DEFAULT_LOG_LEVEL, LOG_LEVEL_ENVVAR, LOG_LEVELS
from .display import display_run_summary, setup_logging
from .errors import SinkError, StoreError
from .pipeline import run_retirement
from .policy import RetentionPolicy
from .sink import DiscardSink, check_archive_target, open_sink
from .store import MaildirStore
from .transformer import ExternalFilterTransformer


def _split_command(ctx: click.Context, param: click.Parameter, value: str | None) -> list[str] | None:
    if not value:
        return None
    try:
        return shlex.split(value)
    except ValueError as e:
        raise click.BadParameter(str(e)) from e


@click.command()
@click.version_option(version="0.1.0", prog_name="maildir-archiver")
@click.option(
    "-d",
    "--dir",
    "maildir",
    required=True,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="The maildir to process and search for old messages.",
)
@click.option(
    "-a",
    "--archive",
    default=None,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Where to put the old messages (mbox file, gzipped if it ends in .gz).",
)
@click.option("-r", "--remove", is_flag=True, help="Remove messages instead of archiving.")
@click.option("-c", "--confirm", is_flag=True, help="Actually run the actions (default is dry-run).")
@click.option("-n", "--new", "include_new", is_flag=True, help='Process "new" (unread) old messages too.')
@click.option(
    "-A",
    "--age",
    default=DEFAULT_AGE_DAYS,
    show_default=True,
    type=click.IntRange(min=0),
    help="Age in days.",
)
@click.option(
    "--filter",
    "filter_command",
    default=None,
    callback=_split_command,
    help="Header normalization command (default: formail -I 'Status: RO').",
)
@click.option(
    "--log-level",
    default=DEFAULT_LOG_LEVEL,
    envvar=LOG_LEVEL_ENVVAR,
    show_default=True,
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    help="Logging verbosity.",
)
def cli(
    maildir: Path,
    archive: Path | None,
    remove: bool,
    confirm: bool,
    include_new: bool,
    age: int,
    filter_command: list[str] | None,
    log_level: str,
) -> None:
    """Archive or remove too old emails from a maildir.

    Old messages are either deleted or appended to an mbox file (optionally a
    gzipped one). Without --confirm only a preview is shown.
    """
    if archive is not None and remove:
        raise click.UsageError("You can either archive or remove, not both")
    if archive is None and not remove:
        raise click.UsageError("Give either --archive or --remove")

    setup_logging(log_level)

    try:
        store = MaildirStore(maildir)
    except StoreError as e:
        raise click.ClickException(str(e)) from e

    transformer = ExternalFilterTransformer(filter_command)
    policy = RetentionPolicy.from_age(age, include_unread=include_new)

    try:
        if confirm:
            sink = open_sink(archive, remove=remove)
        else:
            if archive is not None:
                check_archive_target(archive)
            sink = DiscardSink()
    except SinkError as e:
        raise click.ClickException(f"Failed to open the destination: {e}") from e

    try:
        with sink:
            counters = run_retirement(
                store,
                policy,
                transformer,
                sink,
                confirm=confirm,
                include_new=include_new,
            )
    except SinkError as e:
        raise click.ClickException(str(e)) from e

    display_run_summary(counters, confirm=confirm, remove=remove)
