import logging

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from blog.config import settings
from blog.dependencies import get_account_store, get_session_store
from blog.exceptions import AuthenticationError
from blog.repositories import AccountStore
from blog.services import account_service
from blog.sessions import SessionStore
from blog.templating import templates

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])

LANDING_PATH = "/articles"


def _set_session_cookie(response, token: str) -> None:
    response.set_cookie(
        settings.SESSION_COOKIE_NAME,
        token,
        httponly=True,
        secure=settings.APP_ENV == "production",
        samesite="lax",
        max_age=settings.SESSION_TTL_SECONDS,
        path="/",
    )


@router.get("/login", response_class=HTMLResponse)
async def login_page(request: Request, error: str | None = None):
    return templates.TemplateResponse(request, "login.html", {"error": error is not None})


@router.post("/login")
async def login(
    request: Request,
    email: str = Form(""),
    password: str = Form(""),
    accounts: AccountStore = Depends(get_account_store),
    sessions: SessionStore = Depends(get_session_store),
):
    try:
        account = await account_service.authenticate(accounts, email, password)
    except AuthenticationError:
        # Same redirect for unknown email and wrong password.
        return RedirectResponse("/login?error", status_code=303)

    # A fresh login replaces whatever session this browser held before.
    sessions.invalidate(request.cookies.get(settings.SESSION_COOKIE_NAME))
    session = sessions.create(account.email, account.id)
    logger.info("Login succeeded: account_id=%s", account.id)
    response = RedirectResponse(LANDING_PATH, status_code=303)
    _set_session_cookie(response, session.token)
    return response


@router.post("/logout")
async def logout(request: Request, sessions: SessionStore = Depends(get_session_store)):
    sessions.invalidate(request.cookies.get(settings.SESSION_COOKIE_NAME))
    response = RedirectResponse("/login", status_code=303)
    response.delete_cookie(settings.SESSION_COOKIE_NAME, path="/")
    return response


@router.get("/signup", response_class=HTMLResponse)
async def signup_page(request: Request, error: str = ""):
    return templates.TemplateResponse(request, "signup.html", {"error": error})
