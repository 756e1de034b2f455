"""
TJM Tracker CLI - Main Entry Point

Unified Typer CLI that assembles all module sub-commands.

Usage:
    tjm version
    tjm migrate
    tjm serve
    tjm projects [command]
    tjm collaborators [command]
    tjm report [command]
"""

import typer

import tjmtracker

app = typer.Typer(
    name="tjm",
    help="Collaborator staffing, days worked and TJM cost tracking.",
    no_args_is_help=True,
)


@app.command()
def version():
    """Show TJM Tracker version."""
    typer.echo(f"tjmtracker {tjmtracker.__version__}")


@app.command()
def migrate():
    """Run database schema migrations for all modules."""
    from tjmtracker.core.db import migrate_all

    migrate_all()
    typer.echo("Database migration complete.")


@app.command()
def serve(
    port: int = typer.Option(None, "--port", "-p", help="Port number (default: config server.port)"),
    host: str = typer.Option(None, "--host", "-h", help="Host address (default: config server.host, 127.0.0.1 debug)"),
    debug: bool = typer.Option(False, "--debug", help="Use Flask dev server with auto-reload (localhost only)"),
    threads: int = typer.Option(None, "--threads", "-t", help="Waitress worker threads (production only)"),
):
    """Launch the TJM Tracker web interface.

    Default: Waitress production server.
    With --debug: Flask dev server on 127.0.0.1 with auto-reload.
    """
    from tjmtracker.api import create_app
    from tjmtracker.core import get_config_value

    web = create_app()
    _port = port or get_config_value("server", "port", default=5000)

    if debug:
        _host = host or "127.0.0.1"
        typer.echo(f"Starting Flask dev server at http://{_host}:{_port}")
        web.run(host=_host, port=_port, debug=True)
        return

    from waitress import serve as waitress_serve

    _host = host or get_config_value("server", "host", default="0.0.0.0")
    _threads = threads or get_config_value("server", "threads", default=8)
    typer.echo(f"Starting Waitress production server on {_host}:{_port} ({_threads} threads)")
    waitress_serve(web, host=_host, port=_port, threads=_threads)


def _register_modules():
    """Register module CLI sub-apps."""
    import importlib

    module_registry = [
        ("tjmtracker.projects.cli", "projects", "Project registry"),
        ("tjmtracker.collaborators.cli", "collaborators", "Collaborator snapshots & days worked"),
        ("tjmtracker.reporting.cli", "report", "Monthly cost reports"),
    ]

    for module_path, name, help_text in module_registry:
        mod = importlib.import_module(module_path)
        app.add_typer(mod.app, name=name, help=help_text)


_register_modules()


def main():
    """Entry point for the tjm CLI."""
    app()


if __name__ == "__main__":
    main()
