"""
Projects Blueprint — Flask routes for the project registry and monthly recap.

Thin delivery layer: all business logic lives in projects.registry and
reporting.recap.
"""

from flask import Blueprint, jsonify, request

from tjmtracker.api.schemas import PROJECT_BODY, FieldDef, parse_body
from tjmtracker.core import get_db
from tjmtracker.projects import registry
from tjmtracker.reporting.recap import recap_by_month

bp = Blueprint("projects", __name__)


# ---------------------------------------------------------------------------
# Projects API
# ---------------------------------------------------------------------------


@bp.route("/projects", methods=["GET"])
def api_list_projects():
    with get_db(readonly=True) as conn:
        return jsonify(registry.list_projects(conn))


@bp.route("/projects", methods=["POST"])
def api_create_project():
    data = parse_body(request.get_json(silent=True), PROJECT_BODY)
    with get_db() as conn:
        project = registry.create_project(conn, data["name"])
    return jsonify(project), 201


@bp.route("/projects/<int:project_id>", methods=["PUT"])
def api_rename_project(project_id):
    data = parse_body(request.get_json(silent=True), PROJECT_BODY)
    with get_db() as conn:
        project = registry.rename_project(conn, project_id, data["name"])
    return jsonify(project)


@bp.route("/projects/<int:project_id>", methods=["DELETE"])
def api_delete_project(project_id):
    with get_db() as conn:
        registry.delete_project(conn, project_id)
    return jsonify({"message": "Project deleted successfully"})


# ---------------------------------------------------------------------------
# Recap API
# ---------------------------------------------------------------------------


@bp.route("/projects/recap", methods=["GET"])
@bp.route("/recap", methods=["GET"])
def api_recap():
    args = parse_body({"year": request.args.get("year")}, [FieldDef("year", "year")])
    with get_db(readonly=True) as conn:
        return jsonify(recap_by_month(conn, year=args["year"]))
