"""
Companies Repository.

Responsibilities:
- CRUD operations for the companies table.
- One commit per write.

Non-Responsibilities:
- No request validation (done by the API layer).
"""

from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..database import run_query
from ..errors import BadRequestError, NotFoundError
from ..logger import get_logger
from ..sql import sql_for_company_filter, sql_for_partial_update

COMPANY_COLUMNS = 'handle, name, description, num_employees AS "numEmployees", logo_url AS "logoUrl"'

UPDATE_COLUMNS = {
    "numEmployees": "num_employees",
    "logoUrl": "logo_url",
}


class CompanyRepository:
    """Data access for companies."""

    def __init__(self, session: Session):
        self.session = session

    def create(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Create a company from data and return it.

        data should be {handle, name, description, numEmployees, logoUrl}

        Raises:
            BadRequestError: If the handle or name is already taken
        """
        handle = data["handle"]
        duplicate = run_query(
            self.session,
            "SELECT handle FROM companies WHERE handle = $1",
            [handle],
        )
        if duplicate:
            raise BadRequestError(f"Duplicate company: {handle}")

        try:
            rows = run_query(
                self.session,
                f"""INSERT INTO companies
                    (handle, name, description, num_employees, logo_url)
                    VALUES ($1, $2, $3, $4, $5)
                    RETURNING {COMPANY_COLUMNS}""",
                [
                    handle,
                    data["name"],
                    data["description"],
                    data.get("numEmployees"),
                    data.get("logoUrl"),
                ],
            )
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            raise BadRequestError(f"Duplicate company: {handle}") from e

        get_logger().info("Company created", handle=handle)
        return rows[0]

    def find_all(
        self,
        name: Optional[str] = None,
        min_employees: Optional[int] = None,
        max_employees: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """Find companies, optionally filtered by name and employee count, ordered by name."""
        where_cols, values = sql_for_company_filter(name, min_employees, max_employees)
        where = f"WHERE {where_cols}" if where_cols else ""
        return run_query(
            self.session,
            f"""SELECT {COMPANY_COLUMNS}
                FROM companies
                {where}
                ORDER BY name""",
            values,
        )

    def get(self, handle: str) -> Dict[str, Any]:
        """
        Return a company with its jobs.

        Raises:
            NotFoundError: If no company has this handle
        """
        rows = run_query(
            self.session,
            f"""SELECT {COMPANY_COLUMNS}
                FROM companies
                WHERE handle = $1""",
            [handle],
        )
        if not rows:
            raise NotFoundError(f"No company: {handle}")

        company = rows[0]
        company["jobs"] = run_query(
            self.session,
            """SELECT id, title, salary, equity
               FROM jobs
               WHERE company_handle = $1
               ORDER BY id""",
            [handle],
        )
        return company

    def update(self, handle: str, data: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Partially update a company; only the supplied fields change.

        Data can include: {name, description, numEmployees, logoUrl}

        Raises:
            BadRequestError: If data is empty or the new name is taken
            NotFoundError: If no company has this handle
        """
        set_cols, values = sql_for_partial_update(data, UPDATE_COLUMNS)
        handle_idx = f"${len(values) + 1}"
        try:
            rows = run_query(
                self.session,
                f"""UPDATE companies
                    SET {set_cols}
                    WHERE handle = {handle_idx}
                    RETURNING {COMPANY_COLUMNS}""",
                [*values, handle],
            )
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            raise BadRequestError(f"Cannot update company: {handle}") from e

        if not rows:
            raise NotFoundError(f"No company: {handle}")
        get_logger().info("Company updated", handle=handle, fields=list(data.keys()))
        return rows[0]

    def remove(self, handle: str) -> None:
        """Delete a company and its jobs. Raises NotFoundError if missing."""
        rows = run_query(
            self.session,
            "DELETE FROM companies WHERE handle = $1 RETURNING handle",
            [handle],
        )
        self.session.commit()
        if not rows:
            raise NotFoundError(f"No company: {handle}")
        get_logger().info("Company removed", handle=handle)
