"""Test configuration and fixtures."""

import json
import os

# Point the application engine at SQLite before any weather_report import
os.environ["DATABASE_URL"] = "sqlite://"

import pytest
import requests
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

from weather_report.config import WeatherDataConfig
from weather_report.database import Base, get_db
from weather_report.main import app
from weather_report.report_builder import ReportBuilder
from weather_report.routers.build import get_report_builder

# Test database URL (in-memory SQLite)
TEST_DATABASE_URL = "sqlite://"

PRECIP_BASE_URL = "http://precip.test:5001"
TEMP_BASE_URL = "http://temp.test:5000"


def make_response(url, body, status_code=200):
    """Build a real ``requests.Response`` with the given body."""
    response = requests.Response()
    response.status_code = status_code
    response.url = url
    response.encoding = "utf-8"
    if isinstance(body, bytes):
        response._content = body
    else:
        response._content = json.dumps(body).encode("utf-8")
    return response


class FakeSession:
    """Stand-in for ``requests.Session`` that serves canned provider bodies."""

    def __init__(self, upstream):
        self.upstream = upstream
        self.closed = False

    def get(self, url, timeout=None):
        self.upstream.requested_urls.append(url)
        source = "precipitation" if url.startswith(PRECIP_BASE_URL) else "temperature"
        error = self.upstream.errors.get(source)
        if error is not None:
            raise error
        body, status_code = self.upstream.bodies[source]
        return make_response(url, body, status_code)

    def close(self):
        self.closed = True

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()


class FakeUpstream:
    """Canned responses for both observation providers."""

    def __init__(self):
        self.bodies = {
            "precipitation": ([], 200),
            "temperature": ([], 200),
        }
        self.errors = {}
        self.requested_urls = []
        self.sessions = []

    def set_precipitation(self, body, status_code=200):
        self.bodies["precipitation"] = (body, status_code)

    def set_temperature(self, body, status_code=200):
        self.bodies["temperature"] = (body, status_code)

    def fail(self, source, error=None):
        self.errors[source] = error or requests.ConnectionError(f"{source} provider down")

    def session_factory(self):
        session = FakeSession(self)
        self.sessions.append(session)
        return session


@pytest.fixture
def weather_data_config():
    """Upstream configuration pointing at the fake providers."""
    return WeatherDataConfig(
        precip_data_protocol="http",
        precip_data_host="precip.test",
        precip_data_port=5001,
        temp_data_protocol="http",
        temp_data_host="temp.test",
        temp_data_port=5000,
        upstream_timeout=5.0,
    )


@pytest.fixture
def upstream():
    """Fake observation providers."""
    return FakeUpstream()


@pytest.fixture(scope="function")
def test_db():
    """Create a test database with tables."""
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    Base.metadata.create_all(bind=engine)

    TestingSessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=engine
    )

    db = TestingSessionLocal()

    yield db

    db.close()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def builder(test_db, weather_data_config, upstream):
    """Report builder wired to the test database and fake providers."""
    return ReportBuilder(
        db=test_db,
        config=weather_data_config,
        session_factory=upstream.session_factory,
    )


@pytest.fixture(scope="function")
def client(test_db, weather_data_config, upstream):
    """Create a test client with test database and fake providers."""
    def override_get_db():
        try:
            yield test_db
        finally:
            pass

    def override_get_report_builder():
        return ReportBuilder(
            db=test_db,
            config=weather_data_config,
            session_factory=upstream.session_factory,
        )

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_report_builder] = override_get_report_builder

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def sample_precipitation():
    """Precipitation provider body with mixed weather types."""
    return [
        {"weatherType": "snow", "amountInches": 2.25},
        {"weatherType": "rain", "amountInches": 1.04},
        {"weatherType": "snow", "amountInches": 0.05},
    ]


@pytest.fixture
def sample_temperature():
    """Temperature provider body for two days."""
    return [
        {"tempHighF": 70, "tempLowF": 50},
        {"tempHighF": 80, "tempLowF": 60},
    ]
