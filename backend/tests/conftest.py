"""Shared fixtures: the API wired to an in-memory SQLite store."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event, text
from sqlalchemy.pool import StaticPool

from key_registry.main import create_app

# Stand-in for the externally managed table: the store assigns id and active
USERS_TABLE_DDL = (
    "CREATE TABLE users ("
    " id CHAR(32) PRIMARY KEY NOT NULL DEFAULT (lower(hex(randomblob(16)))),"
    " email VARCHAR NOT NULL,"
    " active BOOLEAN NOT NULL DEFAULT {active_default},"
    " private_key VARCHAR NOT NULL,"
    " aggregated_public_key VARCHAR NOT NULL,"
    " CONSTRAINT users_email_key UNIQUE (email))"
)


@pytest.fixture
def create_users_table():
    def create(engine, active_default=1):
        with engine.begin() as conn:
            conn.execute(text(USERS_TABLE_DDL.format(active_default=active_default)))
        return engine

    return create


@pytest.fixture
def engine(create_users_table):
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_users_table(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def client(engine):
    with TestClient(create_app(engine=engine)) as client:
        yield client


@pytest.fixture
def statements(engine):
    """Every SQL statement sent to the store while the test runs."""
    seen = []

    def record(conn, cursor, statement, parameters, context, executemany):
        seen.append(statement)

    event.listen(engine, "before_cursor_execute", record)
    yield seen
    event.remove(engine, "before_cursor_execute", record)


@pytest.fixture
def new_user():
    return {
        "email": "a@example.com",
        "private_key": "pk123",
        "aggregated_public_key": "apk456",
    }
