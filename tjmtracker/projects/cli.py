"""Projects CLI sub-commands."""

import typer

app = typer.Typer(no_args_is_help=True)


@app.command("list")
def list_projects():
    """List all projects in the registry."""
    from tjmtracker.core import get_db
    from tjmtracker.projects.registry import list_projects as _list_projects

    with get_db(readonly=True) as conn:
        projects = _list_projects(conn)

    if not projects:
        typer.echo("No projects found.")
        return

    for p in projects:
        typer.echo(f"  {p['id']:<6} {p['name']}")
    typer.echo(f"\n  {len(projects)} project(s)")


@app.command()
def add(name: str = typer.Argument(..., help="Project name")):
    """Create a project."""
    from tjmtracker.core import ValidationError, get_db
    from tjmtracker.projects.registry import create_project

    try:
        with get_db() as conn:
            project = create_project(conn, name)
    except ValidationError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    typer.echo(f"Created project {project['id']}: {project['name']}")


@app.command()
def rename(
    project_id: int = typer.Argument(..., help="Project id"),
    name: str = typer.Argument(..., help="New name"),
):
    """Rename a project."""
    from tjmtracker.core import TrackerError, get_db
    from tjmtracker.projects.registry import rename_project

    try:
        with get_db() as conn:
            project = rename_project(conn, project_id, name)
    except TrackerError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    typer.echo(f"Renamed project {project['id']} to {project['name']}")


@app.command()
def delete(project_id: int = typer.Argument(..., help="Project id")):
    """Delete a project (collaborator assignments are kept)."""
    from tjmtracker.core import NotFoundError, get_db
    from tjmtracker.projects.registry import delete_project

    try:
        with get_db() as conn:
            delete_project(conn, project_id)
    except NotFoundError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    typer.echo(f"Deleted project {project_id}")
