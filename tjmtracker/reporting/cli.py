"""Reporting CLI sub-commands."""

import typer

from tjmtracker.core.output import OutputFormat

app = typer.Typer(no_args_is_help=True)


@app.command()
def recap(
    year: int = typer.Option(None, "--year", "-y", help="Only this year"),
    fmt: OutputFormat = typer.Option(OutputFormat.HUMAN, "--format", "-f", help="Output format"),
):
    """Show project costs per month (days worked x TJM)."""
    from tjmtracker.core import get_db
    from tjmtracker.core.output import format_table
    from tjmtracker.reporting.recap import recap_by_month

    with get_db(readonly=True) as conn:
        months = recap_by_month(conn, year=year)

    if not months and fmt != OutputFormat.JSON:
        typer.echo("No data.")
        return

    rows = []
    for m in months:
        period = f"{m['month']}/{m['year']}"
        for p in m["projects"]:
            rows.append([period, p["name"], float(p["totalCost"])])
        rows.append([period, "TOTAL", float(m["totalMonthCost"])])

    typer.echo(format_table(rows, ["Month", "Project", "Cost"], fmt, title="Monthly recap", raw=months))
