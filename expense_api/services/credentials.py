import logging

from sqlalchemy import or_
from werkzeug.security import check_password_hash, generate_password_hash

from ..errors import DuplicateKey, InvalidCredentials, ValidationFailure
from ..models import User
from .base import Repository

logger = logging.getLogger(__name__)


def _required_text(value, field):
    if not isinstance(value, str) or not value.strip():
        raise ValidationFailure(f"{field} is required")
    return value


class CredentialStore(Repository):
    """Persists user identities and checks passwords against salted hashes."""

    def __init__(self, session, hash_method=None):
        super().__init__(session)
        self.hash_method = hash_method
        self._dummy_hash = None

    def register(self, username, email, password) -> User:
        username = _required_text(username, "username").strip()
        email = _required_text(email, "email").strip()
        password = _required_text(password, "password")

        existing = self.fetch(
            lambda: self.session.query(User)
            .filter(or_(User.username == username, User.email == email))
            .first()
        )
        if existing:
            raise DuplicateKey("Username or email already registered")

        user = User(username=username, email=email)
        user.set_password(password, self.hash_method)
        self.session.add(user)
        self.commit()
        logger.info("Registered user %s", user.id)
        return user

    def authenticate(self, email, password) -> User:
        if not isinstance(email, str) or not isinstance(password, str):
            raise InvalidCredentials("Invalid credentials")

        user = self.fetch(lambda: self.session.query(User).filter_by(email=email.strip()).first())
        if user is None:
            # compare against a throwaway hash so both failure paths cost the same
            check_password_hash(self._get_dummy_hash(), password)
            raise InvalidCredentials("Invalid credentials")
        if not user.check_password(password):
            raise InvalidCredentials("Invalid credentials")
        return user

    def find_by_id(self, user_id):
        return self.fetch(lambda: self.session.get(User, user_id))

    def _get_dummy_hash(self):
        if self._dummy_hash is None:
            if self.hash_method:
                self._dummy_hash = generate_password_hash("dummy-password", method=self.hash_method)
            else:
                self._dummy_hash = generate_password_hash("dummy-password")
        return self._dummy_hash
