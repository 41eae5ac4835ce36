import math
from datetime import datetime, timezone

from sqlalchemy.orm import joinedload

from ..errors import NotFound, ValidationFailure
from ..models import Expense
from .base import Repository

# ids are stored as signed 64-bit integers
MAX_ID = 2 ** 63 - 1


def in_id_range(value) -> bool:
    return 0 < value <= MAX_ID


def parse_amount(value) -> float:
    if isinstance(value, bool):
        raise ValidationFailure("amount must be a number")
    try:
        amount = float(value)
    except (TypeError, ValueError, OverflowError):
        raise ValidationFailure("amount must be a number")
    if not math.isfinite(amount):
        raise ValidationFailure("amount must be finite")
    return amount


def parse_description(value) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationFailure("description is required")
    return value.strip()


def parse_date(value) -> datetime:
    """Accept a datetime or an ISO-8601 string; return naive UTC."""
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            value = datetime.fromisoformat(text)
        except ValueError:
            raise ValidationFailure("date must be an ISO-8601 timestamp")
    if not isinstance(value, datetime):
        raise ValidationFailure("date must be an ISO-8601 timestamp")
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def parse_id(value, field="category") -> int:
    if isinstance(value, str) and value.strip().isdecimal():
        value = int(value.strip())
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationFailure(f"{field} must be an id")
    if not in_id_range(value):
        raise ValidationFailure(f"{field} is out of range")
    return value


class ExpenseService(Repository):
    """Owner-scoped CRUD for expenses.

    The owner id is part of every lookup predicate, so an expense belonging
    to someone else behaves exactly like one that does not exist.
    """

    def __init__(self, session, categories):
        super().__init__(session)
        self.categories = categories

    def create(self, owner_id, amount, description, category_id, date=None) -> Expense:
        expense = Expense(
            user_id=owner_id,
            amount=parse_amount(amount),
            description=parse_description(description),
            category_id=self._owned_category_id(owner_id, category_id),
            date=parse_date(date) if date is not None else datetime.utcnow(),
        )
        self.session.add(expense)
        self.commit()
        return expense

    def list_for_owner(self, owner_id):
        return self.fetch(
            lambda: self.session.query(Expense)
            .options(joinedload(Expense.category))
            .filter_by(user_id=owner_id)
            .order_by(Expense.date.desc(), Expense.id.desc())
            .all()
        )

    def get_for_owner(self, owner_id, expense_id):
        if not in_id_range(expense_id):
            return None
        return self.fetch(
            lambda: self.session.query(Expense).filter_by(id=expense_id, user_id=owner_id).first()
        )

    def update(self, owner_id, expense_id, fields) -> Expense:
        expense = self.get_for_owner(owner_id, expense_id)
        if expense is None:
            raise NotFound("Expense not found")

        # validate everything before touching the row; owner and id are never taken from fields
        changes = {}
        if "amount" in fields:
            changes["amount"] = parse_amount(fields["amount"])
        if "description" in fields:
            changes["description"] = parse_description(fields["description"])
        if "date" in fields:
            changes["date"] = parse_date(fields["date"])
        if "category" in fields:
            changes["category_id"] = self._owned_category_id(owner_id, fields["category"])

        for name, value in changes.items():
            setattr(expense, name, value)
        self.commit()
        return expense

    def delete(self, owner_id, expense_id) -> Expense:
        expense = self.get_for_owner(owner_id, expense_id)
        if expense is None:
            raise NotFound("Expense not found")
        self.session.delete(expense)
        self.commit()
        return expense

    def _owned_category_id(self, owner_id, category_id):
        category_id = parse_id(category_id)
        if self.categories.get_for_owner(owner_id, category_id) is None:
            raise ValidationFailure("category does not exist")
        return category_id
