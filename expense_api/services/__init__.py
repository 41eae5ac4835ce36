from flask import current_app

from .categories import CategoryService
from .credentials import CredentialStore
from .expenses import ExpenseService
from .tokens import TokenService

EXTENSION_KEY = "expense_api"


class Services:
    """Holds the service objects built once per application."""

    def __init__(self, session, hash_method=None):
        self.tokens = TokenService()
        self.credentials = CredentialStore(session, hash_method=hash_method)
        self.categories = CategoryService(session)
        self.expenses = ExpenseService(session, self.categories)

    def init_app(self, app):
        app.extensions[EXTENSION_KEY] = self


def get_services() -> Services:
    return current_app.extensions[EXTENSION_KEY]


__all__ = [
    "CategoryService",
    "CredentialStore",
    "ExpenseService",
    "Services",
    "TokenService",
    "get_services",
]
