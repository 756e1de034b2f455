"""Collaborators CLI sub-commands."""

from pathlib import Path

import typer

app = typer.Typer(no_args_is_help=True)


@app.command("list")
def list_collaborators(
    month: str = typer.Option(None, "--month", "-m", help="Month (1-12)"),
    year: int = typer.Option(None, "--year", "-y", help="Year"),
):
    """List collaborator snapshots with their projects and days worked."""
    from tjmtracker.collaborators.snapshots import list_snapshots
    from tjmtracker.core import TrackerError, get_db

    try:
        with get_db(readonly=True) as conn:
            snapshots = list_snapshots(conn, month=month, year=year)
    except TrackerError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if not snapshots:
        typer.echo("No collaborators found.")
        return

    for s in snapshots:
        tjm = f"{s['tjm']:g}" if s["tjm"] is not None else "-"
        typer.echo(
            f"  {s['id']:<6} {s['name']:<25} {s['month']}/{s['year']}  "
            f"TJM {tjm:<8} {s['totalDaysWorked']:g} day(s)"
        )
        for p in s["projects"]:
            typer.echo(f"           - {p['name']}: {p['daysWorked']:g}")
    typer.echo(f"\n  {len(snapshots)} snapshot(s)")


@app.command()
def record(
    snapshot_id: int = typer.Argument(..., help="Collaborator snapshot id"),
    project_id: int = typer.Argument(..., help="Project id"),
    days: float = typer.Argument(..., help="Days worked"),
    month: str = typer.Option(None, "--month", "-m", help="Month (default: current)"),
    year: int = typer.Option(None, "--year", "-y", help="Year (default: current)"),
):
    """Set days worked on a project for a month."""
    from tjmtracker.collaborators.recorder import record_days
    from tjmtracker.core import TrackerError, get_db
    from tjmtracker.core.periods import resolve_period

    try:
        _month, _year = resolve_period(month, year)
        with get_db() as conn:
            snapshot, created = record_days(conn, snapshot_id, project_id, days, _month, _year)
    except TrackerError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    note = " (new snapshot)" if created else ""
    typer.echo(
        f"{snapshot['name']} {snapshot['month']}/{snapshot['year']}{note}: "
        f"{snapshot['totalDaysWorked']:g} day(s) total"
    )


@app.command()
def export(
    output: Path = typer.Argument(..., help="Destination .xlsx file"),
    month: str = typer.Option(None, "--month", "-m", help="Month (1-12)"),
    year: int = typer.Option(None, "--year", "-y", help="Year"),
):
    """Export collaborator snapshots to Excel."""
    from tjmtracker.collaborators.excel_io import export_snapshots_xlsx
    from tjmtracker.core import TrackerError, get_db

    try:
        with get_db(readonly=True) as conn:
            data = export_snapshots_xlsx(conn, month=month, year=year)
    except TrackerError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    output.write_bytes(data.getvalue())
    typer.echo(f"Wrote {output}")
