"""SQLAlchemy-backed Unit of Work.

One ``Session`` (and therefore one database transaction) per ``with``
block.  Storage errors are rolled back and translated before they leave
the block: lock and serialization failures become ``ConflictError``,
anything else becomes an opaque ``OperationFailedError``.
"""

from __future__ import annotations

import structlog
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from shopcore.domain.exceptions import ConflictError, OperationFailedError
from shopcore.domain.repository.unit_of_work import UnitOfWork
from shopcore.infrastructure.persistence.sqlalchemy_order_repository import (
    SqlAlchemyOrderRepository,
)
from shopcore.infrastructure.persistence.sqlalchemy_product_repository import (
    SqlAlchemyProductRepository,
)
from shopcore.infrastructure.persistence.sqlalchemy_selection_repository import (
    SqlAlchemySelectionRepository,
)

logger = structlog.get_logger(__name__)

# PostgreSQL SQLSTATEs for serialization_failure and deadlock_detected
_RETRYABLE_SQLSTATES = {"40001", "40P01"}


class SqlAlchemyUnitOfWork(UnitOfWork):

    def __init__(self, session_factory: sessionmaker) -> None:
        self._session_factory = session_factory
        self._session: Session | None = None

    def __enter__(self) -> SqlAlchemyUnitOfWork:
        self._session = self._session_factory()
        self.products = SqlAlchemyProductRepository(self._session)
        self.selections = SqlAlchemySelectionRepository(self._session)
        self.orders = SqlAlchemyOrderRepository(self._session)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        try:
            self.rollback()
        finally:
            self._session.close()
            self._session = None
        if isinstance(exc_val, SQLAlchemyError):
            raise _translate(exc_val) from exc_val

    def commit(self) -> None:
        try:
            self._session.commit()
        except SQLAlchemyError as exc:
            self._session.rollback()
            raise _translate(exc) from exc

    def rollback(self) -> None:
        if self._session is not None:
            self._session.rollback()


def _translate(exc: SQLAlchemyError) -> Exception:
    if _is_conflict(exc):
        logger.warning("Transaction conflict", error=type(exc).__name__)
        return ConflictError(
            "The operation conflicted with a concurrent update; please retry"
        )
    logger.error("Storage failure", exc_info=exc)
    return OperationFailedError()


def _is_conflict(exc: SQLAlchemyError) -> bool:
    orig = getattr(exc, "orig", None)
    sqlstate = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if sqlstate in _RETRYABLE_SQLSTATES:
        return True
    if isinstance(exc, OperationalError):
        message = str(orig).lower()
        return "database is locked" in message or "deadlock" in message
    return False
