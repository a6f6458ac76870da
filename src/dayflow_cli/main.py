import json
import logging

import typer
import humanize

from dayflow import __version__
from dayflow.core import (EmptyInput, FileSystem, NotFound, PersistenceError,
                          Workspace)
from dayflow.core.log import configure_logging
from dayflow.core.reminders import REMINDER_MESSAGE
from dayflow.models import ImageAttachment, LinkAttachment

from dayflow_cli import theme
from dayflow_cli.formatter import ActivityFormatter
from dayflow_cli.utils import edit_file, image_to_data_uri, resolve_natural_date

from pathlib import Path
from typing import Optional

import pendulum
from rich.console import Console

cli = typer.Typer(help="Log what you did today.")

cli.add_typer(theme.app, name="theme")

NOT_SAVED = "This change might not survive a restart."

@cli.callback()
def main(ctx: typer.Context,
         verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging.")):
    configure_logging(logging.DEBUG if verbose else logging.WARNING)

    # init doesn't need a workspace - it creates one
    if ctx.invoked_subcommand == "init":
        ctx.obj = None
        return

    try:
        ctx.obj = Workspace()
    except FileNotFoundError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(1)
    except (ValueError, PersistenceError) as e:
        typer.echo(f"Error loading dayflow data: {e}", err=True)
        raise typer.Exit(1)

@cli.command()
def init(ctx: typer.Context):
    """
    cli: dayflow init
    Create the dayflow data directory.
    """
    fs = FileSystem()
    try:
        fs.initialise()
    except FileExistsError as e:
        typer.echo(f"Not initialising: {e}")
        raise typer.Exit(1)
    typer.echo(f"Initialised dayflow at {fs.ROOT}.")

@cli.command()
def config(ctx: typer.Context):
    """
    cli: dayflow config
    Edit the dayflow configuration in your preferred editor.
    """
    ws: Workspace = ctx.obj
    if edit_file(ws.fs.CONFIG_PATH):
        typer.echo("Configuration file was updated.")
    else:
        typer.echo("No changes detected.")

@cli.command()
def status(ctx: typer.Context):
    """
    cli: dayflow status
    Show what dayflow knows about.
    """
    ws: Workspace = ctx.obj
    now = ws.now()
    activities = ws.activities.all()

    typer.echo(f"dayflow {__version__}, data at: {ws.fs.ROOT}")
    typer.echo(f"Stored activities: {len(activities)} "
               f"({sum(1 for a in activities if a.is_favorite)} favorites)")
    typer.echo(f"Visible now: {len(ws.activities.visible(now))}")

    if activities:
        latest = max(activities, key=lambda a: a.timestamp)
        typer.echo(f"Last logged: {humanize.naturaltime(ActivityFormatter.age(latest, now))}")
    else:
        typer.echo("Nothing logged yet.")

    next_reminder = ws.reminders.next_after(now)
    if next_reminder:
        typer.echo(f"Next reminder: {next_reminder.format('ddd HH:mm')}")
    else:
        typer.echo("Reminders are off.")

@cli.command()
def add(ctx: typer.Context,
        text: str = typer.Argument("", help="What did you do?"),
        image: Optional[Path] = typer.Option(None, "--image", "-i", help="Attach an image file."),
        link: Optional[str] = typer.Option(None, "--link", "-l", help="Attach a link.")):
    """
    cli: dayflow add
    Log an activity.
    """
    ws: Workspace = ctx.obj

    if image and link:
        typer.echo("Error: --image and --link are mutually exclusive.", err=True)
        raise typer.Exit(1)

    attachment = None
    try:
        if image:
            attachment = ImageAttachment(image_to_data_uri(image))
        elif link and link.strip():
            attachment = LinkAttachment(link.strip())
    except (OSError, ValueError) as e:
        typer.echo(f"Error reading attachment: {e}", err=True)
        raise typer.Exit(1)

    try:
        activity = ws.activities.create(text, attachment)
    except EmptyInput as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(1)
    except PersistenceError as e:
        typer.echo(f"Error saving activity: {e}. {NOT_SAVED}", err=True)
        raise typer.Exit(1)

    typer.echo(f"Logged activity {activity.id} at {ActivityFormatter.time_label(activity, ws.now())}.")

@cli.command(name="list") # To avoid conflict with list type
def list_activities(ctx: typer.Context,
                    as_of: Optional[str] = typer.Option(None, "--as-of", help="Show the list as it looked at the end of this date."),
                    json_output: bool = typer.Option(False, "--json", help="Output as JSON.")):
    """
    cli: dayflow list
    Show today's and yesterday's activities, plus every favorite.
    """
    ws: Workspace = ctx.obj

    now = ws.now()
    if as_of:
        try:
            resolved = resolve_natural_date(ws.today(), as_of)
        except ValueError as e:
            typer.echo(f"Error: {e}", err=True)
            raise typer.Exit(1)
        now = pendulum.datetime(resolved.year, resolved.month, resolved.day,
                                tz=ws.config.timezone).end_of("day")

    activities = ws.activities.visible(now)

    if json_output:
        typer.echo(json.dumps([a.to_dict() for a in activities], indent=2))
        return

    if not activities:
        typer.echo(ActivityFormatter.EMPTY_STATE)
        return

    Console().print(ActivityFormatter.table(activities, now))

@cli.command()
def show(ctx: typer.Context, activity_id: int):
    """
    cli: dayflow show
    Show a single activity.
    """
    ws: Workspace = ctx.obj
    try:
        activity = ws.activities.get(activity_id)
    except NotFound as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(1)
    typer.echo(ActivityFormatter.detail(activity, ws.now()))

@cli.command()
def fav(ctx: typer.Context, activity_id: int):
    """
    cli: dayflow fav
    Pin or unpin an activity. Favorites are always shown.
    """
    ws: Workspace = ctx.obj
    try:
        activity = ws.activities.toggle_favorite(activity_id)
    except NotFound as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(1)
    except PersistenceError as e:
        typer.echo(f"Error updating activity: {e}. {NOT_SAVED}", err=True)
        raise typer.Exit(1)

    if activity.is_favorite:
        typer.echo(f"Activity {activity.id} is now a favorite.")
    else:
        typer.echo(f"Activity {activity.id} is no longer a favorite.")

@cli.command()
def rm(ctx: typer.Context,
       activity_id: int,
       yes: bool = typer.Option(False, "--yes", "-y", help="Don't ask for confirmation.")):
    """
    cli: dayflow rm
    Delete an activity.
    """
    ws: Workspace = ctx.obj
    try:
        activity = ws.activities.get(activity_id)
    except NotFound as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(1)

    if not yes and not typer.confirm(f"Delete activity {activity.id} ({activity.text or activity.attachment.kind})?"):
        typer.echo("Nothing deleted.")
        return

    try:
        ws.activities.delete(activity_id)
    except NotFound as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(1)
    except PersistenceError as e:
        typer.echo(f"Error deleting activity: {e}. {NOT_SAVED}", err=True)
        raise typer.Exit(1)
    typer.echo(f"Deleted activity {activity_id}.")

@cli.command()
def clear(ctx: typer.Context,
          yes: bool = typer.Option(False, "--yes", "-y", help="Don't ask for confirmation.")):
    """
    cli: dayflow clear
    Delete every activity, favorites included.
    """
    ws: Workspace = ctx.obj

    if not yes and not typer.confirm(
            f"Delete all {len(ws.activities)} activities, favorites included? This cannot be undone."):
        typer.echo("Nothing deleted.")
        return

    try:
        ws.activities.clear_all()
    except PersistenceError as e:
        typer.echo(f"Error clearing activities: {e}. {NOT_SAVED}", err=True)
        raise typer.Exit(1)
    typer.echo("All activities deleted.")

@cli.command()
def remind(ctx: typer.Context):
    """
    cli: dayflow remind
    Nudge if nothing has been logged today, and show when the next reminder is.
    """
    ws: Workspace = ctx.obj
    now = ws.now()

    if ws.reminders.is_due(now, ws.activities):
        typer.echo(REMINDER_MESSAGE)

    next_reminder = ws.reminders.next_after(now)
    if next_reminder:
        typer.echo(f"Next reminder: {next_reminder.format('ddd HH:mm')}")
    else:
        typer.echo("Reminders are off.")
