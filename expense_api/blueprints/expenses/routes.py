from flask import Blueprint, request, jsonify
from flask_login import login_required, current_user
from ...errors import ApiError, ErrorKind, NotFound, ServiceError
from ...services import get_services

expenses_bp = Blueprint("expenses", __name__, url_prefix="/api/expenses")


def _json_body():
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


@expenses_bp.route("", methods=["POST"])
@login_required
def create_expense():
    data = _json_body()
    try:
        expense = get_services().expenses.create(
            current_user.id,
            amount=data.get("amount"),
            description=data.get("description"),
            category_id=data.get("category"),
            date=data.get("date"),
        )
    except ServiceError as exc:
        raise ApiError(ErrorKind.VALIDATION_FAILURE, "Failed to create expense") from exc
    return jsonify(expense.to_dict()), 201


@expenses_bp.route("", methods=["GET"])
@login_required
def list_expenses():
    try:
        expenses = get_services().expenses.list_for_owner(current_user.id)
    except ServiceError as exc:
        raise ApiError(ErrorKind.STORE_FAILURE, "Failed to fetch expenses") from exc
    return jsonify([e.to_dict(populate=True) for e in expenses])


@expenses_bp.route("/<int:expense_id>", methods=["PATCH"])
@login_required
def update_expense(expense_id):
    try:
        expense = get_services().expenses.update(current_user.id, expense_id, _json_body())
    except NotFound as exc:
        raise ApiError(ErrorKind.NOT_FOUND, "Expense not found") from exc
    except ServiceError as exc:
        raise ApiError(ErrorKind.VALIDATION_FAILURE, "Failed to update expense") from exc
    return jsonify(expense.to_dict())


@expenses_bp.route("/<int:expense_id>", methods=["DELETE"])
@login_required
def delete_expense(expense_id):
    try:
        expense = get_services().expenses.delete(current_user.id, expense_id)
    except NotFound as exc:
        raise ApiError(ErrorKind.NOT_FOUND, "Expense not found") from exc
    except ServiceError as exc:
        raise ApiError(ErrorKind.STORE_FAILURE, "Failed to delete expense") from exc
    return jsonify(expense.to_dict())
