"""Pages Blueprint — server-rendered shells for the browser client views."""

from flask import Blueprint, redirect, render_template, url_for

from tjmtracker.core.periods import current_period

bp = Blueprint("pages", __name__)

_MONTHS = [
    ("01", "January"), ("02", "February"), ("03", "March"), ("04", "April"),
    ("05", "May"), ("06", "June"), ("07", "July"), ("08", "August"),
    ("09", "September"), ("10", "October"), ("11", "November"), ("12", "December"),
]


@bp.route("/")
def index():
    return redirect(url_for("pages.collaborators_page"))


@bp.route("/ui/collaborators")
def collaborators_page():
    month, year = current_period()
    return render_template(
        "collaborators.html", months=_MONTHS, current_month=month, current_year=year
    )


@bp.route("/ui/projects")
def projects_page():
    return render_template("projects.html")


@bp.route("/ui/tjm")
def tjm_page():
    return render_template("tjm.html")


@bp.route("/ui/recap")
def recap_page():
    _, year = current_period()
    return render_template("recap.html", months=dict(_MONTHS), current_year=year)
