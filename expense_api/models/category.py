from ..extensions import db


class Category(db.Model):
    __tablename__ = "categories"
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    name = db.Column(db.String(100), nullable=False)

    expenses = db.relationship("Expense", backref="category", lazy=True)

    def to_dict(self):
        return {"id": self.id, "name": self.name, "user": self.user_id}
