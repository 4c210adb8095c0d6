"""Admin sign-in, sign-out and account routes."""
from flask import Blueprint, g, jsonify

from careforme.api.deps import get_services, json_body
from careforme.api.middleware.auth import require_session
from careforme.api.middleware.rate_limit import rate_limit

bp = Blueprint("auth", __name__)


@bp.route("/auth/login", methods=["POST"])
@rate_limit
def login():
    """Exchange email and password for a session and its tokens."""
    data = json_body()
    session = get_services().auth_service.login(data.get("email", ""), data.get("password", ""))

    return jsonify({
        "success": True,
        "data": session.to_dict()
    }), 200


@bp.route("/auth/logout", methods=["POST"])
@require_session
@rate_limit
def logout():
    get_services().auth_service.logout(g.session)
    return jsonify({
        "success": True,
        "message": "Logged out"
    }), 200


@bp.route("/auth/session", methods=["GET"])
@require_session
@rate_limit
def current_session():
    """Who the bearer token belongs to."""
    return jsonify({
        "success": True,
        "data": {
            "uid": g.session.uid,
            "email": g.session.email
        }
    }), 200


@bp.route("/auth/password", methods=["POST"])
@require_session
@rate_limit
def change_password():
    data = json_body()
    get_services().auth_service.change_password(
        g.session,
        data.get("newPassword", ""),
        data.get("confirmPassword", "")
    )

    return jsonify({
        "success": True,
        "message": "Password updated successfully"
    }), 200
