"""
Shared pytest fixtures for the gradpass test suite.
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from gradpass.database import get_db, init_db, make_engine
from gradpass.main import app
from gradpass.middleware.rate_limit import limiter
from gradpass.services.codes import CodeGenerator
from gradpass.services.issuance import IssuanceService
from gradpass.services.issuers import IssuerService
from gradpass.services.reporting import TicketQueryService
from gradpass.services.validation import ValidationService
from gradpass.store.sql import SQLAlchemyTicketStore

TEST_SECRET = "test-code-secret"


@pytest.fixture
def engine():
    """In-memory SQLite database shared by every session of one test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    init_db(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def file_session_factory(tmp_path):
    """File-backed SQLite so concurrent threads get real, separate connections."""
    engine = make_engine(f"sqlite:///{tmp_path / 'gradpass.db'}")
    init_db(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture
def store(db):
    return SQLAlchemyTicketStore(db)


@pytest.fixture
def code_generator():
    return CodeGenerator(secret=TEST_SECRET)


@pytest.fixture
def issuance(store, code_generator):
    return IssuanceService(store, code_generator=code_generator, max_code_attempts=5)


@pytest.fixture
def validation(store):
    return ValidationService(store)


@pytest.fixture
def issuers(store):
    return IssuerService(store)


@pytest.fixture
def queries(store):
    return TicketQueryService(store)


@pytest.fixture
def ana(issuers):
    """Issuer 'Ana' with the default cap of five tickets."""
    return issuers.register("Ana", "ana-password")


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    limiter.reset()
    yield TestClient(app)
    app.dependency_overrides.clear()
