"""Routes for jobs."""

from typing import Annotated, Literal, Optional

from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.orm import Session

from ..config import Settings
from ..repositories import JobRepository
from ..schema import MAX_BIGINT, JobNew, JobUpdate, to_payload
from .deps import ensure_admin, get_db, get_settings

router = APIRouter(prefix="/jobs", tags=["jobs"])

JobId = Annotated[int, Path(le=MAX_BIGINT)]


def get_repo(
    session: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> JobRepository:
    return JobRepository(session, equity_false_filters=settings.equity_false_filters)


@router.get("")
def list_jobs(
    title: Optional[str] = None,
    min_salary: Optional[int] = Query(None, alias="minSalary", ge=0, le=MAX_BIGINT),
    has_equity: Optional[Literal["true", "false"]] = Query(None, alias="hasEquity"),
    company: Optional[str] = None,
    repo: JobRepository = Depends(get_repo),
):
    """
    GET /jobs => {jobs: [{id, title, salary, equity, company_handle}, ...]}

    Filters:
    - title (case-insensitive, partial match)
    - minSalary
    - hasEquity: "true" keeps jobs with non-zero equity
    - company: exact company handle
    """
    return {"jobs": repo.find_all(title, min_salary, has_equity, company)}


@router.get("/{id}")
def get_job(id: JobId, repo: JobRepository = Depends(get_repo)):
    return {"job": repo.get(id)}


@router.post("", status_code=201, dependencies=[Depends(ensure_admin)])
def create_job(body: JobNew, repo: JobRepository = Depends(get_repo)):
    """job should be {title, salary, equity, companyHandle}"""
    return {"job": repo.create(to_payload(body))}


@router.patch("/{id}", dependencies=[Depends(ensure_admin)])
def update_job(id: JobId, body: JobUpdate, repo: JobRepository = Depends(get_repo)):
    """Fields can be: {title, salary, equity}"""
    return {"job": repo.update(id, to_payload(body, partial=True))}


@router.delete("/{id}", dependencies=[Depends(ensure_admin)])
def delete_job(id: JobId, repo: JobRepository = Depends(get_repo)):
    repo.remove(id)
    return {"deleted": id}
