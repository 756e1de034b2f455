"""
TJM Tracker - collaborator staffing and cost tracking

Records collaborators, the projects they are staffed on, days worked per
project per month and a daily rate (TJM), and reports monthly costs.

Modules:
    core          - Shared services (db, config, logging, errors, periods)
    projects      - Project registry
    collaborators - Monthly collaborator snapshots and days-worked recording
    reporting     - Monthly cost recap
    api           - Flask web application and JSON API
    cli           - Typer command line
"""

__version__ = "0.1.0"
