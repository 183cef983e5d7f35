"""
Database schema and connection management.

Tables are declared with SQLAlchemy; statements are plain SQL templates
using ``$n`` positional placeholders, executed through ``run_query``.
"""

import re
import threading
from pathlib import Path
from typing import Any, Dict, List, Sequence, Tuple, Union

from sqlalchemy import (
    CheckConstraint,
    Column,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    create_engine,
    event,
    text,
)
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from .logger import get_logger

Base = declarative_base()

_PLACEHOLDER = re.compile(r"\$(\d+)")
_engines: Dict[str, Engine] = {}
_engines_lock = threading.Lock()


class Company(Base):
    """Company table."""

    __tablename__ = "companies"
    __table_args__ = (CheckConstraint("num_employees >= 0", name="ck_companies_num_employees"),)

    handle = Column(String(25), primary_key=True)
    name = Column(Text, nullable=False, unique=True)
    num_employees = Column(Integer)
    description = Column(Text, nullable=False)
    logo_url = Column(Text)


class Job(Base):
    """Job posting table."""

    __tablename__ = "jobs"
    __table_args__ = (
        CheckConstraint("salary >= 0", name="ck_jobs_salary"),
        CheckConstraint("equity <= 1.0", name="ck_jobs_equity"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(Text, nullable=False)
    salary = Column(Integer)
    equity = Column(Numeric(asdecimal=False))
    company_handle = Column(
        String(25),
        ForeignKey("companies.handle", ondelete="CASCADE"),
        nullable=False,
    )


def database_url_for(target: Union[str, Path]) -> str:
    """Accept a SQLAlchemy URL or a path to a SQLite file."""
    if isinstance(target, Path):
        return f"sqlite:///{target}"
    return target


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def get_engine(target: Union[str, Path]) -> Engine:
    """
    Get the process-wide engine for a database.

    Args:
        target: SQLAlchemy URL or path to SQLite database file

    Returns:
        SQLAlchemy engine
    """
    url = database_url_for(target)
    with _engines_lock:
        engine = _engines.get(url)
        if engine is None:
            if make_url(url).get_backend_name() == "sqlite":
                engine = create_engine(url, connect_args={"check_same_thread": False})
                event.listen(engine, "connect", _enable_sqlite_foreign_keys)
            else:
                engine = create_engine(url, pool_pre_ping=True)
            _engines[url] = engine
    return engine


def dispose_engines() -> None:
    with _engines_lock:
        for engine in _engines.values():
            engine.dispose()
        _engines.clear()


def init_database(target: Union[str, Path]) -> None:
    """
    Initialize database and create tables.

    Args:
        target: SQLAlchemy URL or path to SQLite database file
    """
    url = make_url(database_url_for(target))
    if url.get_backend_name() == "sqlite" and url.database and url.database != ":memory:":
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)
    Base.metadata.create_all(get_engine(target))
    get_logger().info("Database initialized", database=url.render_as_string(hide_password=True))


def get_session(target: Union[str, Path]) -> Session:
    """
    Get database session.

    Args:
        target: SQLAlchemy URL or path to SQLite database file

    Returns:
        SQLAlchemy session
    """
    SessionLocal = sessionmaker(bind=get_engine(target))
    return SessionLocal()


def to_named_binds(sql: str, values: Sequence[Any]) -> Tuple[str, Dict[str, Any]]:
    """Rewrite ``$n`` placeholders as ``:pn`` binds with a matching params dict."""
    params = {f"p{idx}": value for idx, value in enumerate(values, start=1)}
    return _PLACEHOLDER.sub(lambda m: f":p{m.group(1)}", sql), params


def run_query(session: Session, sql: str, values: Sequence[Any] = ()) -> List[Dict[str, Any]]:
    """
    Execute a ``$n`` statement template and return its rows as dicts.

    Statements without a result set return an empty list.
    """
    statement, params = to_named_binds(sql, values)
    logger = get_logger()
    logger.debug("Executing query", sql=" ".join(statement.split()), params=params)
    logger.record_query()
    result = session.execute(text(statement), params)
    if not result.returns_rows:
        return []
    return [dict(row) for row in result.mappings().all()]
