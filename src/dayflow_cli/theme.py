import typer

from dayflow.core import Workspace, PersistenceError

app = typer.Typer(help="Show or change the light/dark theme.", invoke_without_command=True)

"""
dayflow theme
dayflow theme set <light|dark>
dayflow theme toggle
"""

@app.callback()
def show(ctx: typer.Context):
    """
    cli: dayflow theme
    Show the current theme.
    """
    if ctx.invoked_subcommand is None:
        ws: Workspace = ctx.obj
        typer.echo(f"Theme: {ws.get_theme()}")

@app.command(name="set")
def set_theme(ctx: typer.Context, theme: str = typer.Argument(..., help="light or dark")):
    """
    cli: dayflow theme set
    Choose the theme.
    """
    ws: Workspace = ctx.obj
    try:
        typer.echo(f"Theme set to {ws.set_theme(theme.lower())}.")
    except (ValueError, PersistenceError) as e:
        typer.echo(f"Error setting theme: {e}", err=True)
        raise typer.Exit(1)

@app.command()
def toggle(ctx: typer.Context):
    """
    cli: dayflow theme toggle
    Switch between light and dark.
    """
    ws: Workspace = ctx.obj
    try:
        typer.echo(f"Theme set to {ws.toggle_theme()}.")
    except PersistenceError as e:
        typer.echo(f"Error setting theme: {e}", err=True)
        raise typer.Exit(1)
