import pytest
import os

# select the test database before the app is imported
os.environ["APP_ENV"] = "test"

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from app.main import app
from app.db.database import Base, get_session, create_tables, SQLITE_TEST_DB

# test database
test_engine = create_engine(SQLITE_TEST_DB, connect_args={"check_same_thread": False})
TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

@pytest.fixture(autouse=True)
def clean_db():
    """Drop and recreate all tables around each test"""
    Base.metadata.drop_all(bind=test_engine)
    create_tables(test_engine)
    yield

    # clean up after the test
    Base.metadata.drop_all(bind=test_engine)

@pytest.fixture
def session(clean_db):
    """A raw session for service and crud tests"""
    db = TestSessionLocal()
    try:
        yield db
    finally:
        db.close()

@pytest.fixture
def client(clean_db):
    """Test client whose requests share one test session"""
    # shared test session
    test_session = TestSessionLocal()

    # override the session dependency
    def override_get_session():
        try:
            yield test_session
        finally:
            test_session.close()

    app.dependency_overrides[get_session] = override_get_session

    # hand out the client
    client = TestClient(app)
    yield client

    # clean up after the test
    test_session.close()
    app.dependency_overrides.clear()

@pytest.fixture
def post_data():
    return {
        "title": "Getting started with Java",
        "excerpt": "A short intro",
        "content": "Java is a class-based language.",
        "author": "Alice",
        "isPublished": False,
        "tags": ["Java", "Spring"]
    }
