import hmac
from typing import Iterator, Optional

from fastapi import Depends, Header, Request
from sqlalchemy.orm import Session

from ..config import Settings
from ..database import get_session
from ..errors import UnauthorizedError


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_db(settings: Settings = Depends(get_settings)) -> Iterator[Session]:
    """One session per request, closed after the response."""
    session = get_session(settings.database_url)
    try:
        yield session
    finally:
        session.close()


def ensure_admin(
    authorization: Optional[str] = Header(None),
    settings: Settings = Depends(get_settings),
) -> None:
    """Require ``Authorization: Bearer <admin token>``."""
    if not settings.admin_token:
        raise UnauthorizedError("Admin access is not configured")

    scheme, _, token = (authorization or "").partition(" ")
    if scheme.lower() != "bearer" or not hmac.compare_digest(
        token.strip().encode(), settings.admin_token.encode()
    ):
        raise UnauthorizedError()
