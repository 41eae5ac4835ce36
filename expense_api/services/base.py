import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from ..errors import DuplicateKey, StoreFailure

logger = logging.getLogger(__name__)


class Repository:
    """Common session handling for the store-backed services."""

    def __init__(self, session):
        self.session = session

    def commit(self):
        try:
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            raise DuplicateKey("Record violates a uniqueness constraint") from exc
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.exception("Store write failed")
            raise StoreFailure("Store write failed") from exc

    def fetch(self, query_fn):
        """Run a read, turning store errors into :class:`StoreFailure`."""
        try:
            return query_fn()
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.exception("Store read failed")
            raise StoreFailure("Store read failed") from exc
