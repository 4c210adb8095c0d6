"""Reports and CSV export routes."""
from flask import Blueprint, Response, jsonify, request

from careforme.api import deps
from careforme.api.middleware.auth import require_session
from careforme.api.middleware.rate_limit import rate_limit
from careforme.core.exceptions import ValidationError
from careforme.services.csv_export import EXPORT_FILENAME, EXPORT_MIMETYPE
from careforme.services.filters import DoctorFilter

bp = Blueprint("reports", __name__)


def _year_param():
    value = request.args.get("year")
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        raise ValidationError(f"Invalid year: {value}", field="year")


@bp.route("/reports", methods=["GET"])
@require_session
@rate_limit
def get_report():
    """Charts over every doctor plus the filtered table.

    Accepts the same filters as ``GET /api/doctors`` and an optional
    ``year`` for the monthly registrations chart.
    """
    criteria = DoctorFilter.from_query(request.args)
    year = _year_param()

    return jsonify({
        "success": True,
        "data": deps.report_service().report(criteria, year)
    }), 200


@bp.route("/reports/export", methods=["GET"])
@require_session
@rate_limit
def export_report():
    criteria = DoctorFilter.from_query(request.args)
    content = deps.report_service().export_csv(criteria)

    return Response(
        content,
        mimetype=EXPORT_MIMETYPE,
        headers={"Content-Disposition": f"attachment; filename={EXPORT_FILENAME}"}
    )
