from flask import Blueprint, request, jsonify
from flask_login import login_required, current_user
from ...errors import ApiError, ErrorKind, ServiceError
from ...services import get_services

categories_bp = Blueprint("categories", __name__, url_prefix="/api/categories")


def _json_body():
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


@categories_bp.route("", methods=["POST"])
@login_required
def create_category():
    data = _json_body()
    try:
        category = get_services().categories.create(current_user.id, data.get("name"))
    except ServiceError as exc:
        raise ApiError(ErrorKind.VALIDATION_FAILURE, "Failed to create category") from exc
    return jsonify(category.to_dict()), 201


@categories_bp.route("", methods=["GET"])
@login_required
def list_categories():
    try:
        categories = get_services().categories.list_for_owner(current_user.id)
    except ServiceError as exc:
        raise ApiError(ErrorKind.STORE_FAILURE, "Failed to fetch categories") from exc
    return jsonify([c.to_dict() for c in categories])
