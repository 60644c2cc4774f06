# tests/conftest.py
import pytest

from infra.db.base import Base, create_db_engine, create_session_factory
from infra.services import build_service_graph


@pytest.fixture
def session():
    # separate in-memory DB for tests
    engine = create_db_engine("sqlite:///:memory:")
    TestingSessionLocal = create_session_factory(engine)
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        engine.dispose()


@pytest.fixture
def services(session):
    return build_service_graph(session).as_dict()


@pytest.fixture
def typed_services(session):
    return build_service_graph(session, dependency_mode="typed").as_dict()
