"""Dashboard summary route."""
from flask import Blueprint, jsonify

from careforme.api import deps
from careforme.api.middleware.auth import require_session
from careforme.api.middleware.rate_limit import rate_limit

bp = Blueprint("dashboard", __name__)


@bp.route("/dashboard", methods=["GET"])
@require_session
@rate_limit
def get_dashboard():
    """Totals, top groups and the top-rated doctor."""
    return jsonify({
        "success": True,
        "data": deps.report_service().dashboard()
    }), 200
