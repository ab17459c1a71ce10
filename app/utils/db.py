from contextlib import contextmanager
import logging
from sqlalchemy.exc import IntegrityError
from models import db


class DuplicateKeyError(Exception):
    """A write collided with a unique index."""

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


@contextmanager
def transactional(message="DB transaction failed"):
    """Context manager to wrap a database transaction.

    Unique-index violations are re-raised as ``DuplicateKeyError`` so callers
    never inspect driver error codes.
    """
    try:
        yield
        db.session.commit()
    except IntegrityError as e:
        db.session.rollback()
        logging.warning(f"{message}: unique constraint violated")
        raise DuplicateKeyError(str(e.orig)) from e
    except Exception as e:
        logging.error(f"{message}: %s", e, exc_info=True)
        db.session.rollback()
        raise
