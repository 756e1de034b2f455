"""TJM Blueprint — daily rate editor routes."""

from flask import Blueprint, jsonify, request

from tjmtracker.api.schemas import TJM_BODY, parse_body
from tjmtracker.collaborators import snapshots
from tjmtracker.core import get_db

bp = Blueprint("tjm", __name__, url_prefix="/api/tjm")


@bp.route("", methods=["GET"])
def api_list_rates():
    with get_db(readonly=True) as conn:
        return jsonify(snapshots.list_rates(conn))


@bp.route("/<int:snapshot_id>/update-tjm", methods=["PUT"])
def api_update_rate(snapshot_id):
    data = parse_body(request.get_json(silent=True), TJM_BODY)
    with get_db() as conn:
        snapshot = snapshots.update_rate(conn, snapshot_id, data["tjm"])
    return jsonify(snapshot)
