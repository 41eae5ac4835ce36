from datetime import datetime
from ..extensions import db


class Expense(db.Model):
    __tablename__ = "expenses"
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    category_id = db.Column(db.Integer, db.ForeignKey("categories.id"), nullable=False)
    amount = db.Column(db.Float, nullable=False)
    description = db.Column(db.String(500), nullable=False)
    date = db.Column(db.DateTime, default=datetime.utcnow, nullable=False, index=True)

    def to_dict(self, populate=False):
        """Serialize the expense.

        With ``populate`` the referenced category is embedded instead of its id.
        """
        category = self.category_id
        if populate and self.category is not None:
            category = self.category.to_dict()
        return {
            "id": self.id,
            "amount": self.amount,
            "description": self.description,
            "date": self.date.isoformat() if self.date else None,
            "category": category,
            "user": self.user_id,
        }
