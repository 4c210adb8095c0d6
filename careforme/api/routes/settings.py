"""Admin notification settings routes."""
from flask import Blueprint, g, jsonify

from careforme.api.deps import get_services, json_body
from careforme.api.middleware.auth import require_session
from careforme.api.middleware.rate_limit import rate_limit
from careforme.core.exceptions import ValidationError
from careforme.repositories.settings_repository import SETTINGS_FIELDS
from careforme.utils.validators import validate_email

bp = Blueprint("settings", __name__)


@bp.route("/settings/notifications", methods=["GET"])
@require_session
@rate_limit
def get_notification_settings():
    settings = get_services().settings_store.get(g.session.uid, g.session.email)
    return jsonify({
        "success": True,
        "data": settings
    }), 200


@bp.route("/settings/notifications", methods=["PUT"])
@require_session
@rate_limit
def update_notification_settings():
    """Save the notification email and new-doctor alert preference."""
    data = json_body()

    unknown = sorted(key for key in data if key not in SETTINGS_FIELDS)
    if unknown:
        raise ValidationError(f"Unknown fields: {', '.join(unknown)}", details={"unknown": unknown})

    email = data.get("notificationEmail")
    if email is not None:
        if not isinstance(email, str) or (email.strip() and not validate_email(email)):
            raise ValidationError("Invalid notification email", field="notificationEmail")
        data["notificationEmail"] = email.strip()

    if "notifyOnNewDoctors" in data and not isinstance(data["notifyOnNewDoctors"], bool):
        raise ValidationError("notifyOnNewDoctors must be true or false", field="notifyOnNewDoctors")

    store = get_services().settings_store
    store.save(g.session.uid, data)

    return jsonify({
        "success": True,
        "message": "Settings saved",
        "data": store.get(g.session.uid, g.session.email)
    }), 200
