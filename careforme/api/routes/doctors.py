"""Doctor directory management routes."""
from flask import Blueprint, jsonify, request

from careforme.api import deps
from careforme.api.middleware.auth import require_session
from careforme.api.middleware.rate_limit import rate_limit
from careforme.models.doctor import SPECIALTIES, WEEKDAYS
from careforme.services.filters import AvailabilityFilter, DoctorFilter
from careforme.services.normalizer import display_normalize

bp = Blueprint("doctors", __name__)


@bp.route("/doctors", methods=["GET"])
@require_session
@rate_limit
def list_doctors():
    """List doctors matching the query-string filters.

    Query params: ``q`` (name, email or city substring), ``specialty``,
    ``city`` and ``availability`` (all, available, unavailable, suspended).
    """
    criteria = DoctorFilter.from_query(request.args)
    view = deps.directory_view(refresh=True)
    rows = view.filtered(criteria)

    return jsonify({
        "success": True,
        "data": {
            "doctors": [record.to_api_dict() for record in rows],
            "filteredCount": len(rows),
            "totalCount": len(view.records),
            "filters": criteria.to_dict()
        }
    }), 200


@bp.route("/doctors/options", methods=["GET"])
def doctor_options():
    """Choices offered by the doctor form and filters."""
    return jsonify({
        "success": True,
        "data": {
            "specialties": list(SPECIALTIES),
            "weekdays": list(WEEKDAYS),
            "availability": [item.value for item in AvailabilityFilter]
        }
    }), 200


@bp.route("/doctors/<doctor_id>", methods=["GET"])
@require_session
@rate_limit
def get_doctor(doctor_id: str):
    record = deps.doctor_service().get_doctor(doctor_id)
    return jsonify({
        "success": True,
        "data": display_normalize(record)
    }), 200


@bp.route("/doctors", methods=["POST"])
@require_session
@rate_limit
def create_doctor():
    record = deps.doctor_service().create_doctor(deps.json_body())
    return jsonify({
        "success": True,
        "message": "Doctor added successfully",
        "data": record.to_api_dict()
    }), 201


@bp.route("/doctors/<doctor_id>", methods=["PUT", "PATCH"])
@require_session
@rate_limit
def update_doctor(doctor_id: str):
    record = deps.doctor_service().update_doctor(doctor_id, deps.json_body())
    return jsonify({
        "success": True,
        "message": "Doctor updated successfully",
        "data": record.to_api_dict()
    }), 200


@bp.route("/doctors/<doctor_id>", methods=["DELETE"])
@require_session
@rate_limit
def delete_doctor(doctor_id: str):
    deps.directory_view().delete(doctor_id)
    return jsonify({
        "success": True,
        "message": "Doctor deleted successfully",
        "data": {"id": doctor_id}
    }), 200


@bp.route("/doctors/<doctor_id>/suspension", methods=["POST"])
@require_session
@rate_limit
def toggle_suspension(doctor_id: str):
    """Suspend an active doctor or reinstate a suspended one."""
    record = deps.directory_view().toggle_suspension(doctor_id)
    return jsonify({
        "success": True,
        "message": "Doctor suspended" if record.suspended else "Doctor unsuspended",
        "data": record.to_api_dict()
    }), 200
