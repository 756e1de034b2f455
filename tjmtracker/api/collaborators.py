"""
Collaborators Blueprint — Flask routes for monthly snapshots.

Missing month/year values are filled from the current period here, at the
boundary; the business logic always receives them explicitly.
"""

from flask import Blueprint, jsonify, request, send_file

from tjmtracker.api.schemas import (
    ADD_DAYS_BODY,
    COMMENT_BODY,
    SNAPSHOT_CREATE_BODY,
    SNAPSHOT_UPDATE_BODY,
    parse_body,
    parse_query_period,
)
from tjmtracker.collaborators import recorder, snapshots
from tjmtracker.core import get_db
from tjmtracker.core.periods import resolve_period

bp = Blueprint("collaborators", __name__, url_prefix="/collaborators")


@bp.route("", methods=["GET"])
def api_list_snapshots():
    period = parse_query_period(request.args)
    with get_db(readonly=True) as conn:
        return jsonify(
            snapshots.list_snapshots(conn, month=period["month"], year=period["year"])
        )


@bp.route("", methods=["POST"])
def api_create_snapshot():
    data = parse_body(request.get_json(silent=True), SNAPSHOT_CREATE_BODY)
    month, year = resolve_period(data["month"], data["year"])
    with get_db() as conn:
        snapshot = snapshots.create_snapshot(
            conn, data["name"], data["projects"], month, year
        )
    return jsonify(snapshot), 201


@bp.route("/<int:snapshot_id>", methods=["PUT"])
def api_update_snapshot(snapshot_id):
    data = parse_body(request.get_json(silent=True), SNAPSHOT_UPDATE_BODY)
    with get_db() as conn:
        snapshot = snapshots.update_snapshot(
            conn, snapshot_id, data["name"], data["projects"]
        )
    return jsonify(snapshot)


@bp.route("/<int:snapshot_id>", methods=["DELETE"])
def api_delete_snapshot(snapshot_id):
    with get_db() as conn:
        snapshots.delete_snapshot(conn, snapshot_id)
    return jsonify({"message": "Collaborator deleted successfully"})


@bp.route("/<int:snapshot_id>/add-days", methods=["PUT"])
def api_record_days(snapshot_id):
    data = parse_body(request.get_json(silent=True), ADD_DAYS_BODY)
    month, year = resolve_period(data["month"], data["year"])
    with get_db() as conn:
        snapshot, created = recorder.record_days(
            conn, snapshot_id, data["projectId"], data["days"], month, year
        )
    return jsonify({
        "message": "Days worked updated successfully",
        "collaborator": snapshot,
        "created": created,
    })


@bp.route("/<int:snapshot_id>/comment", methods=["PUT"])
def api_update_comment(snapshot_id):
    data = parse_body(request.get_json(silent=True), COMMENT_BODY)
    with get_db() as conn:
        snapshot = snapshots.update_comment(conn, snapshot_id, data["comments"])
    return jsonify({"message": "Comment updated successfully", "collaborator": snapshot})


@bp.route("/export", methods=["GET"])
def api_export_snapshots():
    from tjmtracker.collaborators.excel_io import export_snapshots_xlsx

    period = parse_query_period(request.args)
    with get_db(readonly=True) as conn:
        output = export_snapshots_xlsx(conn, month=period["month"], year=period["year"])

    suffix = "_".join(str(v) for v in (period["year"], period["month"]) if v)
    return send_file(
        output,
        mimetype="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        as_attachment=True,
        download_name=f"collaborators{'_' + suffix if suffix else ''}.xlsx",
    )
