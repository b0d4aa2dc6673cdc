from typing import Optional

from fastapi import Cookie, Request

from .catalog import WordCatalog
from .config import settings
from .sessions import SessionStore


def get_session_id(
    session_id: Optional[str] = Cookie(None, alias=settings.SESSION_COOKIE_NAME)
) -> Optional[str]:
    return session_id


def get_catalog(request: Request) -> WordCatalog:
    return request.app.state.catalog


def get_store(request: Request) -> SessionStore:
    return request.app.state.sessions
