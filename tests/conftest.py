"""
Pytest configuration and shared fixtures.
"""

import pytest
from fastapi.testclient import TestClient

from jobly.app import create_app
from jobly.config import Settings
from jobly.database import Company, Job, dispose_engines, get_session, init_database

ADMIN_TOKEN = "test-admin-token"


@pytest.fixture
def database_url(tmp_path) -> str:
    """Initialized SQLite database in a temporary directory."""
    url = f"sqlite:///{tmp_path / 'jobly_test.db'}"
    init_database(url)
    yield url
    dispose_engines()


@pytest.fixture
def db_session(database_url):
    session = get_session(database_url)
    yield session
    session.close()


@pytest.fixture
def seeded_session(db_session):
    """Session over a database holding three companies and four jobs."""
    db_session.add_all([
        Company(handle="c1", name="C1", description="Desc1", num_employees=1, logo_url="http://c1.img"),
        Company(handle="c2", name="C2", description="Desc2", num_employees=2, logo_url="http://c2.img"),
        Company(handle="c3", name="C3", description="Desc3", num_employees=3, logo_url="http://c3.img"),
    ])
    db_session.commit()
    db_session.add_all([
        Job(title="Job1", salary=100, equity=0.1, company_handle="c1"),
        Job(title="Job2", salary=200, equity=0.2, company_handle="c1"),
        Job(title="Job3", salary=300, equity=0, company_handle="c1"),
        Job(title="Job4", salary=None, equity=None, company_handle="c2"),
    ])
    db_session.commit()
    return db_session


@pytest.fixture
def job_ids(seeded_session) -> dict:
    """Map of job title to id."""
    return {job.title: job.id for job in seeded_session.query(Job).all()}


@pytest.fixture
def settings(database_url) -> Settings:
    return Settings(database_url=database_url, admin_token=ADMIN_TOKEN)


@pytest.fixture
def client(settings, seeded_session) -> TestClient:
    return TestClient(create_app(settings))


@pytest.fixture
def admin_headers() -> dict:
    return {"Authorization": f"Bearer {ADMIN_TOKEN}"}


@pytest.fixture
def new_company() -> dict:
    return {
        "handle": "new",
        "name": "New",
        "description": "New Description",
        "numEmployees": 1,
        "logoUrl": "http://new.img",
    }


@pytest.fixture
def new_job() -> dict:
    return {
        "title": "New Job",
        "salary": 5000,
        "equity": 0.05,
        "companyHandle": "c1",
    }
