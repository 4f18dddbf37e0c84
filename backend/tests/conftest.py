"""
Central pytest configuration for the barbershop scheduling tests.

This file provides common fixtures, test markers, and setup
for both unit and integration tests.
"""

import os

import pytest

# Test database configuration (set early so the lazy engine uses it)
TEST_DATABASE_URL = "sqlite:///:memory:"  # In-memory SQLite for fast tests
os.environ["DATABASE_URL"] = TEST_DATABASE_URL
os.environ["TESTING"] = "true"
os.environ["LOG_TO_FILE"] = "0"


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")
    config.addinivalue_line("markers", "api: mark test as API endpoint test")
    config.addinivalue_line("markers", "services: mark test as service layer test")
    config.addinivalue_line("markers", "appointment: mark test as appointment-related")
    config.addinivalue_line("markers", "statistics: mark test as statistics-related")
    config.addinivalue_line("markers", "repositories: mark test as repository test")
    config.addinivalue_line("markers", "database: mark test as database-related")


def pytest_collection_modifyitems(config, items):
    """Add markers based on test file location."""
    for item in items:
        path = str(item.fspath)
        if "unit" in path:
            item.add_marker(pytest.mark.unit)
        if "integration" in path:
            item.add_marker(pytest.mark.integration)
        if "repositor" in path:
            item.add_marker(pytest.mark.repositories)
            item.add_marker(pytest.mark.database)


# =====================================================
# DATABASE FIXTURES
# =====================================================


@pytest.fixture
def clean_database():
    """Recreate every table so each test starts from an empty store."""
    from app.db.session import create_tables, drop_tables

    drop_tables()
    create_tables()
    yield
    drop_tables()


@pytest.fixture
def db_session(clean_database):
    """SQLAlchemy session bound to the in-memory test database."""
    from app.db.session import SessionLocal

    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def appointment_repo(db_session):
    from app.repositories.appointment_repo import AppointmentRepository

    return AppointmentRepository(db_session)


# =====================================================
# FLASK FIXTURES
# =====================================================


@pytest.fixture
def app(clean_database):
    """Create a Flask application configured for testing."""
    from app.main import create_app

    flask_app = create_app()
    flask_app.config.update(TESTING=True)
    yield flask_app


@pytest.fixture
def client(app):
    """Flask test client."""
    return app.test_client()
