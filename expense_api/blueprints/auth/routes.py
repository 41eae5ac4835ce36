import logging

from flask import Blueprint, request, jsonify
from ...errors import ApiError, ErrorKind, InvalidCredentials, ServiceError
from ...services import get_services

logger = logging.getLogger(__name__)

auth_bp = Blueprint("auth", __name__, url_prefix="/api")


def _json_body():
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _issue_session(user, status):
    token = get_services().tokens.issue(user.id)
    return jsonify({"user": user.to_dict(), "token": token}), status


@auth_bp.route("/register", methods=["POST"])
def register():
    data = _json_body()
    try:
        user = get_services().credentials.register(
            data.get("username"), data.get("email"), data.get("password")
        )
    except ServiceError as exc:
        logger.info("Registration rejected: %s", exc)
        raise ApiError(ErrorKind.VALIDATION_FAILURE, "Registration failed") from exc
    return _issue_session(user, 201)


@auth_bp.route("/login", methods=["POST"])
def login():
    data = _json_body()
    try:
        user = get_services().credentials.authenticate(data.get("email"), data.get("password"))
    except InvalidCredentials as exc:
        logger.warning("Failed login attempt")
        raise ApiError(ErrorKind.VALIDATION_FAILURE, "Login failed") from exc
    except ServiceError as exc:
        raise ApiError(ErrorKind.VALIDATION_FAILURE, "Login failed") from exc
    logger.info("User %s logged in", user.id)
    return _issue_session(user, 200)
