"""
Jobs Repository.

Responsibilities:
- CRUD operations for the jobs table.
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
from ..sql import EquityFilter, sql_for_job_filter, sql_for_partial_update

JOB_COLUMNS = "id, title, salary, equity, company_handle"


class JobRepository:
    """Data access for jobs."""

    def __init__(self, session: Session, equity_false_filters: bool = False):
        self.session = session
        self.equity_false_filters = equity_false_filters

    def create(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Create a job from data and return it.

        data should be {title, salary, equity, companyHandle}

        Raises:
            BadRequestError: If the company does not exist
        """
        company_handle = data["companyHandle"]
        handle_check = run_query(
            self.session,
            "SELECT handle FROM companies WHERE handle = $1",
            [company_handle],
        )
        if not handle_check:
            raise BadRequestError(f"company: {company_handle} not found")

        try:
            rows = run_query(
                self.session,
                f"""INSERT INTO jobs (title, salary, equity, company_handle)
                    VALUES ($1, $2, $3, $4)
                    RETURNING {JOB_COLUMNS}""",
                [data["title"], data.get("salary"), data.get("equity"), company_handle],
            )
            self.session.commit()
        except IntegrityError as e:
            # company removed between the check and the insert
            self.session.rollback()
            raise BadRequestError(f"company: {company_handle} not found") from e

        job = rows[0]
        get_logger().info("Job created", id=job["id"], company_handle=company_handle)
        return job

    def find_all(
        self,
        title: Optional[str] = None,
        min_salary: Optional[int] = None,
        has_equity: Any = EquityFilter.ABSENT,
        company: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """Find jobs, optionally filtered by title, salary, equity and company, ordered by title."""
        where_cols, values = sql_for_job_filter(
            title,
            min_salary,
            has_equity,
            company,
            equity_false_filters=self.equity_false_filters,
        )
        where = f"WHERE {where_cols}" if where_cols else ""
        return run_query(
            self.session,
            f"""SELECT {JOB_COLUMNS}
                FROM jobs
                {where}
                ORDER BY title""",
            values,
        )

    def get(self, id: int) -> Dict[str, Any]:
        rows = run_query(
            self.session,
            f"""SELECT {JOB_COLUMNS}
                FROM jobs
                WHERE id = $1""",
            [id],
        )
        if not rows:
            raise NotFoundError(f"No job with an id: {id}")
        return rows[0]

    def update(self, id: int, data: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Partially update a job; only the supplied fields change.

        Data can include: {title, salary, equity}

        Raises:
            BadRequestError: If data is empty
            NotFoundError: If no job has this id
        """
        set_cols, values = sql_for_partial_update(data)
        id_idx = f"${len(values) + 1}"
        try:
            rows = run_query(
                self.session,
                f"""UPDATE jobs
                    SET {set_cols}
                    WHERE id = {id_idx}
                    RETURNING {JOB_COLUMNS}""",
                [*values, id],
            )
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            raise BadRequestError(f"Cannot update job: {id}") from e

        if not rows:
            raise NotFoundError(f"No job with an id: {id}")
        get_logger().info("Job updated", id=id, fields=list(data.keys()))
        return rows[0]

    def remove(self, id: int) -> None:
        rows = run_query(
            self.session,
            "DELETE FROM jobs WHERE id = $1 RETURNING id",
            [id],
        )
        self.session.commit()
        if not rows:
            raise NotFoundError(f"No job with an id: {id}")
        get_logger().info("Job removed", id=id)
