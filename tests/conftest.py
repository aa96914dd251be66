"""Pytest configuration and fixtures."""

import os

import pytest

from catalog.database import Base, SessionLocal, build_engine, get_db, init_db
from catalog.services.category_service import CategoryService

# Use test database - PostgreSQL when DATABASE_URL is set, SQLite locally
if os.getenv("DATABASE_URL"):
    SQLALCHEMY_DATABASE_URL = os.getenv("DATABASE_URL").replace("/catalog", "/catalog_test")
else:
    SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

engine = build_engine(SQLALCHEMY_DATABASE_URL)

# Point the application's session factory at the test database
SessionLocal.configure(bind=engine)


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    if "postgresql" in SQLALCHEMY_DATABASE_URL:
        from sqlalchemy_utils import create_database, database_exists

        if not database_exists(SQLALCHEMY_DATABASE_URL):
            create_database(SQLALCHEMY_DATABASE_URL)

    init_db(engine)
    yield


@pytest.fixture(scope="function", autouse=True)
def db():
    """Create a fresh database session for each test with cleanup."""
    sessions = get_db()
    session = next(sessions)

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    sessions.close()


@pytest.fixture
def other_db():
    """A second, independent session for concurrent-writer tests."""
    session = SessionLocal()
    yield session
    session.rollback()
    session.close()


@pytest.fixture
def service(db):
    """Category service bound to the test session."""
    return CategoryService(db)


@pytest.fixture
def shoes(service):
    """A persisted, active category with no products."""
    category = service.create(name="Shoes", is_active=True, is_deleted=False, is_features=False)
    return service.persist(category)
