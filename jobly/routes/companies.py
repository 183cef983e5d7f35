"""Routes for companies."""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..repositories import CompanyRepository
from ..schema import MAX_BIGINT, CompanyNew, CompanyUpdate, to_payload
from .deps import ensure_admin, get_db

router = APIRouter(prefix="/companies", tags=["companies"])


@router.get("")
def list_companies(
    name: Optional[str] = None,
    min_employees: Optional[int] = Query(None, alias="minEmployees", ge=0, le=MAX_BIGINT),
    max_employees: Optional[int] = Query(None, alias="maxEmployees", ge=0, le=MAX_BIGINT),
    session: Session = Depends(get_db),
):
    """
    GET /companies => {companies: [{handle, name, description, numEmployees, logoUrl}, ...]}

    Filters: name (case-insensitive, partial), minEmployees, maxEmployees.
    """
    companies = CompanyRepository(session).find_all(name, min_employees, max_employees)
    return {"companies": companies}


@router.get("/{handle}")
def get_company(handle: str, session: Session = Depends(get_db)):
    """GET /companies/{handle} => {company: {..., jobs: [{id, title, salary, equity}, ...]}}"""
    return {"company": CompanyRepository(session).get(handle)}


@router.post("", status_code=201, dependencies=[Depends(ensure_admin)])
def create_company(body: CompanyNew, session: Session = Depends(get_db)):
    company = CompanyRepository(session).create(to_payload(body))
    return {"company": company}


@router.patch("/{handle}", dependencies=[Depends(ensure_admin)])
def update_company(handle: str, body: CompanyUpdate, session: Session = Depends(get_db)):
    """Fields can be: {name, description, numEmployees, logoUrl}"""
    company = CompanyRepository(session).update(handle, to_payload(body, partial=True))
    return {"company": company}


@router.delete("/{handle}", dependencies=[Depends(ensure_admin)])
def delete_company(handle: str, session: Session = Depends(get_db)):
    CompanyRepository(session).remove(handle)
    return {"deleted": handle}
