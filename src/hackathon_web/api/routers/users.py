"""
hackathon_web.api.routers.users

Account pages: register, login, logout.

Responsibilities:
- Render the account forms.
- Delegate credential checks to the credential store and session changes to `auth.login`.
- Report outcomes through flash messages followed by a redirect.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from starlette.status import HTTP_302_FOUND

from hackathon_web.api.deps import app_context, credential_store
from hackathon_web.auth.credentials import CredentialStore
from hackathon_web.auth.login import login, login_principal, logout
from hackathon_web.context import AppContext
from hackathon_web.errors import AuthenticationError, DuplicateUserError
from hackathon_web.observability.logging import get_logger
from hackathon_web.sessions.flash import flash

log = get_logger(__name__)

router = APIRouter(tags=["users"])

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+$"


def _redirect(url: str) -> RedirectResponse:
    # 302 so browsers follow a form POST with a GET.
    return RedirectResponse(url, status_code=HTTP_302_FOUND)


@router.api_route("/register", methods=["GET", "HEAD"], response_class=HTMLResponse)
async def register_form(
    request: Request, context: AppContext = Depends(app_context)
) -> HTMLResponse:
    return context.templates.TemplateResponse(request, "users/register.html")


@router.post("/register")
async def register(
    request: Request,
    username: str = Form(..., min_length=1, max_length=64),
    email: str = Form(..., min_length=3, max_length=256, pattern=EMAIL_PATTERN),
    password: str = Form(..., min_length=1, max_length=256),
    credentials: CredentialStore = Depends(credential_store),
) -> RedirectResponse:
    try:
        principal = await credentials.register(
            username=username.strip(),
            email=email.strip(),
            password=password,
        )
    except DuplicateUserError as e:
        flash(request, "error", e.message)
        return _redirect("/register")

    log.info("auth.registered", user_id=str(principal.id))
    login_principal(request, credentials, principal)
    flash(request, "success", "Welcome!")
    return _redirect("/")


@router.api_route("/login", methods=["GET", "HEAD"], response_class=HTMLResponse)
async def login_form(
    request: Request, context: AppContext = Depends(app_context)
) -> HTMLResponse:
    return context.templates.TemplateResponse(request, "users/login.html")


@router.post("/login")
async def login_submit(
    request: Request,
    username: str = Form(..., min_length=1, max_length=64),
    password: str = Form(..., min_length=1, max_length=256),
    credentials: CredentialStore = Depends(credential_store),
) -> RedirectResponse:
    try:
        await login(request, credentials, username=username.strip(), password=password)
    except AuthenticationError as e:
        flash(request, "error", e.message)
        return _redirect("/login")

    flash(request, "success", "Welcome back!")
    return _redirect("/")


@router.delete("/logout")
async def logout_submit(request: Request) -> RedirectResponse:
    # Reached through a POSTed form carrying `_method=DELETE`.
    logout(request)
    flash(request, "success", "Goodbye!")
    return _redirect("/")


# --- Module Notes -----------------------------------------------------------
# Form fields are parsed by FastAPI (`Form(...)`); a submission failing validation is
# rendered as a 400 error page via the `RequestValidationError` handler.
