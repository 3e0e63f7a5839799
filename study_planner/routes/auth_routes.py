# study_planner/routes/auth_routes.py
from flask import Blueprint, current_app, g, jsonify, request, session

from study_planner.services.auth_service import authenticate_user
from study_planner.services.storage_service import DuplicateUsernameError, NotFoundError, get_storage
from study_planner.utils.decorators import login_required
from study_planner.utils.validators import (
    ValidationError,
    parse_login,
    parse_registration,
    parse_user_update,
)

auth_bp = Blueprint("auth", __name__)


@auth_bp.before_app_request
def load_logged_in_user():
    user_id = session.get("user_id")

    if user_id is None:
        g.user = None
        return

    user = get_storage().get_user(user_id)

    # Session outlived its user
    if user is None:
        session.clear()
    g.user = user


def _start_session(user):
    session.clear()
    session["user_id"] = user.id
    session["username"] = user.username
    g.user = user


@auth_bp.route("/register", methods=["POST"])
def register():
    try:
        data = parse_registration(request.get_json(silent=True))
        user = get_storage().create_user(data["username"], data["password"], data["grade"])
    except (ValidationError, DuplicateUsernameError) as e:
        return jsonify({"error": str(e)}), 400
    except Exception:
        current_app.logger.exception("Registration failed")
        return jsonify({"error": "Failed to register user"}), 500

    _start_session(user)
    current_app.logger.info("Registered user %s (id=%s)", user.username, user.id)
    return jsonify(user.to_dict()), 201


@auth_bp.route("/login", methods=["POST"])
def login():
    try:
        data = parse_login(request.get_json(silent=True))
    except ValidationError:
        return jsonify({"error": "Invalid username or password"}), 401

    user = authenticate_user(get_storage(), data["username"], data["password"])
    if not user:
        return jsonify({"error": "Invalid username or password"}), 401

    _start_session(user)
    current_app.logger.info("User %s logged in", user.username)
    return jsonify(user.to_dict())


@auth_bp.route("/logout", methods=["POST"])
def logout():
    session.clear()
    g.user = None
    return jsonify({"success": True})


@auth_bp.route("/user", methods=["GET"])
@login_required
def current_user():
    return jsonify(g.user.to_dict())


@auth_bp.route("/user", methods=["PATCH"])
@login_required
def update_current_user():
    try:
        fields = parse_user_update(request.get_json(silent=True))
        user = get_storage().update_user(g.user.id, fields)
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    except NotFoundError as e:
        return jsonify({"error": str(e)}), 404

    return jsonify(user.to_dict())
