"""
Tests for the companies and jobs repositories.
"""

import pytest

from jobly.errors import BadRequestError, NotFoundError
from jobly.repositories import CompanyRepository, JobRepository
from jobly.repositories import jobs as jobs_repository
from jobly.sql import EquityFilter


class TestCompanyRepository:
    """Test company data access."""

    def test_create(self, seeded_session, new_company):
        repo = CompanyRepository(seeded_session)

        company = repo.create(new_company)

        assert company == new_company
        assert repo.get("new")["jobs"] == []

    def test_create_duplicate_handle(self, seeded_session, new_company):
        repo = CompanyRepository(seeded_session)
        repo.create(new_company)

        with pytest.raises(BadRequestError):
            repo.create(new_company)

    def test_create_duplicate_name(self, seeded_session, new_company):
        """Unique name violations surface as bad requests."""
        repo = CompanyRepository(seeded_session)

        with pytest.raises(BadRequestError):
            repo.create({**new_company, "name": "C1"})

    def test_find_all(self, seeded_session):
        companies = CompanyRepository(seeded_session).find_all()

        assert [c["handle"] for c in companies] == ["c1", "c2", "c3"]
        assert companies[0] == {
            "handle": "c1",
            "name": "C1",
            "description": "Desc1",
            "numEmployees": 1,
            "logoUrl": "http://c1.img",
        }

    def test_find_all_by_name(self, seeded_session):
        companies = CompanyRepository(seeded_session).find_all(name="c2")

        assert [c["handle"] for c in companies] == ["c2"]

    def test_find_all_by_employee_range(self, seeded_session):
        companies = CompanyRepository(seeded_session).find_all(min_employees=2, max_employees=3)

        assert [c["handle"] for c in companies] == ["c2", "c3"]

    def test_find_all_zero_min(self, seeded_session):
        companies = CompanyRepository(seeded_session).find_all(min_employees=0)

        assert len(companies) == 3

    def test_find_all_inverted_range(self, seeded_session):
        with pytest.raises(BadRequestError):
            CompanyRepository(seeded_session).find_all(min_employees=3, max_employees=1)

    def test_get_includes_jobs(self, seeded_session):
        company = CompanyRepository(seeded_session).get("c1")

        assert company["handle"] == "c1"
        assert [j["title"] for j in company["jobs"]] == ["Job1", "Job2", "Job3"]
        assert set(company["jobs"][0]) == {"id", "title", "salary", "equity"}

    def test_get_not_found(self, seeded_session):
        with pytest.raises(NotFoundError):
            CompanyRepository(seeded_session).get("nope")

    def test_update(self, seeded_session):
        repo = CompanyRepository(seeded_session)

        company = repo.update("c1", {"name": "New", "numEmployees": 10, "logoUrl": None})

        assert company == {
            "handle": "c1",
            "name": "New",
            "description": "Desc1",
            "numEmployees": 10,
            "logoUrl": None,
        }
        assert repo.get("c1")["name"] == "New"

    def test_update_not_found(self, seeded_session):
        with pytest.raises(NotFoundError):
            CompanyRepository(seeded_session).update("nope", {"name": "x"})

    def test_update_no_data(self, seeded_session):
        with pytest.raises(BadRequestError):
            CompanyRepository(seeded_session).update("c1", {})

    def test_remove(self, seeded_session):
        repo = CompanyRepository(seeded_session)

        repo.remove("c1")

        with pytest.raises(NotFoundError):
            repo.get("c1")
        assert [j["title"] for j in JobRepository(seeded_session).find_all()] == ["Job4"]

    def test_remove_not_found(self, seeded_session):
        with pytest.raises(NotFoundError):
            CompanyRepository(seeded_session).remove("nope")


class TestJobRepository:
    """Test job data access."""

    def test_create(self, seeded_session, new_job):
        job = JobRepository(seeded_session).create(new_job)

        assert isinstance(job["id"], int)
        assert job["title"] == "New Job"
        assert job["salary"] == 5000
        assert job["equity"] == pytest.approx(0.05)
        assert job["company_handle"] == "c1"

    def test_create_unknown_company(self, seeded_session, new_job):
        with pytest.raises(BadRequestError) as exc_info:
            JobRepository(seeded_session).create({**new_job, "companyHandle": "nope"})

        assert exc_info.value.message == "company: nope not found"

    def test_create_company_removed_before_insert(self, seeded_session, new_job, monkeypatch):
        """A company deleted after the existence check still yields a 400."""
        real_run_query = jobs_repository.run_query

        def run_query(session, sql, values=()):
            if sql.startswith("SELECT handle FROM companies"):
                return [{"handle": values[0]}]
            return real_run_query(session, sql, values)

        monkeypatch.setattr(jobs_repository, "run_query", run_query)
        repo = JobRepository(seeded_session)

        with pytest.raises(BadRequestError) as exc_info:
            repo.create({**new_job, "companyHandle": "gone"})

        assert exc_info.value.message == "company: gone not found"
        assert len(repo.find_all()) == 4

    def test_find_all(self, seeded_session):
        jobs = JobRepository(seeded_session).find_all()

        assert [j["title"] for j in jobs] == ["Job1", "Job2", "Job3", "Job4"]

    def test_find_all_filters(self, seeded_session):
        repo = JobRepository(seeded_session)

        assert [j["title"] for j in repo.find_all(title="job1")] == ["Job1"]
        assert [j["title"] for j in repo.find_all(min_salary=200)] == ["Job2", "Job3"]
        assert [j["title"] for j in repo.find_all(company="c2")] == ["Job4"]
        assert repo.find_all(company="C2") == []

    def test_find_all_has_equity(self, seeded_session):
        repo = JobRepository(seeded_session)

        assert [j["title"] for j in repo.find_all(has_equity="true")] == ["Job1", "Job2"]
        assert len(repo.find_all(has_equity="false")) == 4

    def test_find_all_has_equity_false_filters(self, seeded_session):
        repo = JobRepository(seeded_session, equity_false_filters=True)

        jobs = repo.find_all(has_equity=EquityFilter.FALSE)

        assert [j["title"] for j in jobs] == ["Job3", "Job4"]

    def test_get(self, seeded_session, job_ids):
        job = JobRepository(seeded_session).get(job_ids["Job1"])

        assert job["title"] == "Job1"
        assert job["company_handle"] == "c1"

    def test_get_not_found(self, seeded_session):
        with pytest.raises(NotFoundError) as exc_info:
            JobRepository(seeded_session).get(0)

        assert exc_info.value.message == "No job with an id: 0"

    def test_update(self, seeded_session, job_ids):
        repo = JobRepository(seeded_session)

        job = repo.update(job_ids["Job1"], {"title": "Renamed", "salary": 999})

        assert job["title"] == "Renamed"
        assert job["salary"] == 999
        assert job["equity"] == pytest.approx(0.1)
        assert repo.get(job_ids["Job1"])["title"] == "Renamed"

    def test_update_not_found(self, seeded_session):
        with pytest.raises(NotFoundError):
            JobRepository(seeded_session).update(0, {"title": "x"})

    def test_update_no_data(self, seeded_session, job_ids):
        with pytest.raises(BadRequestError):
            JobRepository(seeded_session).update(job_ids["Job1"], {})

    def test_update_null_title(self, seeded_session, job_ids):
        with pytest.raises(BadRequestError):
            JobRepository(seeded_session).update(job_ids["Job1"], {"title": None})

    def test_remove(self, seeded_session, job_ids):
        repo = JobRepository(seeded_session)

        repo.remove(job_ids["Job1"])

        with pytest.raises(NotFoundError):
            repo.get(job_ids["Job1"])

    def test_remove_not_found(self, seeded_session):
        with pytest.raises(NotFoundError):
            JobRepository(seeded_session).remove(0)
