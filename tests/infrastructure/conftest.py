import pytest

from shopcore.infrastructure.bootstrap import (
    build_engine,
    build_session_factory,
    init_schema,
)
from shopcore.infrastructure.persistence.sqlalchemy_unit_of_work import (
    SqlAlchemyUnitOfWork,
)


@pytest.fixture
def uow_factory():
    """Fresh in-memory SQLite database per test."""
    engine = build_engine("sqlite://")
    init_schema(engine)
    session_factory = build_session_factory(engine)
    yield lambda: SqlAlchemyUnitOfWork(session_factory)
    engine.dispose()
