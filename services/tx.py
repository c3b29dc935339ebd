import logging
from contextlib import contextmanager

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from models import db
from services.errors import Conflict, InternalError, ServiceError

logger = logging.getLogger(__name__)


@contextmanager
def atomic(operation: str, integrity_conflict=None):
    """
    Runs the block as one transaction on ``db.session``.

    Commits on success. Business rejections roll back and propagate as-is;
    data-store failures roll back and surface as InternalError, or as
    Conflict(integrity_conflict) for a unique-constraint violation when given.
    """
    try:
        yield db.session
        db.session.commit()
    except ServiceError:
        db.session.rollback()
        raise
    except IntegrityError as exc:
        db.session.rollback()
        if integrity_conflict:
            logger.info("%s rejected by constraint: %s", operation, exc.orig)
            raise Conflict(integrity_conflict) from exc
        logger.exception("%s failed, transaction rolled back", operation)
        raise InternalError("Database error") from exc
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.exception("%s failed, transaction rolled back", operation)
        raise InternalError("Database error") from exc
