from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from blog.database import get_db
from blog.repositories import (
    AccountStore,
    ArticleStore,
    SQLAlchemyAccountStore,
    SQLAlchemyArticleStore,
)
from blog.sessions import Session, SessionStore


def get_article_store(db: AsyncSession = Depends(get_db)) -> ArticleStore:
    """Article store bound to the request's session (and so its transaction)."""
    return SQLAlchemyArticleStore(db)


def get_account_store(db: AsyncSession = Depends(get_db)) -> AccountStore:
    return SQLAlchemyAccountStore(db)


def get_session_store(request: Request) -> SessionStore:
    return request.app.state.session_store


def current_session(request: Request) -> Session | None:
    """
    The session the auth gate attached to this request, if any.

    Always set on gated paths; may be None on allow-listed ones such as
    ``/login``.
    """
    return getattr(request.state, "session", None)
