"""
Write Transactions

Every mutating catalog operation runs inside write_transaction(): the base
row change and its dependent maintenance either commit together or roll back
together.
"""

from contextlib import contextmanager

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from models import db
from utils.logger import get_logger
from .errors import CatalogError, ConstraintViolation, MaintenanceError

logger = get_logger(__name__)


@contextmanager
def write_transaction(action):
    """
    Unit of work for one catalog write.

    Commits when the block exits cleanly. On any failure the session is
    rolled back and the error re-raised, with database errors translated:

    - IntegrityError -> ConstraintViolation
    - any other SQLAlchemyError -> MaintenanceError
    """
    session = db.session
    try:
        yield session
        session.commit()
    except CatalogError as e:
        session.rollback()
        logger.warning("%s rejected: %s", action, e)
        raise
    except IntegrityError as e:
        session.rollback()
        logger.warning("%s violated a constraint: %s", action, e.orig)
        raise ConstraintViolation(str(e.orig)) from e
    except SQLAlchemyError as e:
        session.rollback()
        logger.error("%s failed, rolled back: %s", action, e)
        raise MaintenanceError(f"{action} failed: {e}") from e
    except Exception:
        session.rollback()
        logger.exception("%s failed, rolled back", action)
        raise
    else:
        logger.info("%s committed", action)
