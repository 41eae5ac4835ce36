from ..errors import ValidationFailure
from ..models import Category
from .base import Repository


class CategoryService(Repository):
    """Owner-scoped access to categories. Every query filters on ``user_id``."""

    def create(self, owner_id, name) -> Category:
        if not isinstance(name, str) or not name.strip():
            raise ValidationFailure("name is required")
        category = Category(user_id=owner_id, name=name.strip())
        self.session.add(category)
        self.commit()
        return category

    def list_for_owner(self, owner_id):
        return self.fetch(
            lambda: self.session.query(Category).filter_by(user_id=owner_id).order_by(Category.id).all()
        )

    def get_for_owner(self, owner_id, category_id):
        return self.fetch(
            lambda: self.session.query(Category).filter_by(id=category_id, user_id=owner_id).first()
        )
