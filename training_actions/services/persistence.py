import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session

from ..errors import ConflictError, InternalError

log = logging.getLogger(__name__)


def commit(session: Session, *, conflict_message: str, failure_message: str) -> None:
    """Commit the unit of work, translating storage failures into error kinds.

    A uniqueness violation raised by the database is the same Conflict a
    pre-check would have reported. Anything else rolls back and becomes an
    InternalError; nothing from the failed unit stays pending.
    """
    try:
        session.commit()
    except IntegrityError as exc:
        session.rollback()
        log.warning("Integrity violation on commit: %s", exc.orig)
        raise ConflictError(conflict_message) from exc
    except SQLAlchemyError as exc:
        session.rollback()
        log.exception("Storage failure on commit")
        raise InternalError(failure_message) from exc
