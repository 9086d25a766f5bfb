"""
hackathon_web.auth.login

Session-backed login and logout.

Responsibilities:
- login: verify credentials, rotate the session id, remember the principal.
- logout: forget the principal; later requests are anonymous.
"""

from __future__ import annotations

from starlette.requests import Request

from hackathon_web.auth.credentials import CredentialStore
from hackathon_web.auth.models import Principal
from hackathon_web.errors import AuthenticationError
from hackathon_web.observability.logging import get_logger

log = get_logger(__name__)

SESSION_USER_KEY = "user"


async def login(
    request: Request,
    credentials: CredentialStore,
    *,
    username: str,
    password: str,
) -> Principal:
    """
    Raises `AuthenticationError` on bad credentials, leaving the session untouched.
    """

    try:
        principal = await credentials.authenticate(username, password)
    except AuthenticationError:
        log.info("auth.login_failed", username=username)
        raise
    login_principal(request, credentials, principal)
    log.info("auth.login", user_id=str(principal.id))
    return principal


def login_principal(request: Request, credentials: CredentialStore, principal: Principal) -> None:
    session = request.session
    # Fixation guard: a fresh id for the authenticated session; flash messages move along.
    session.regenerate()
    session[SESSION_USER_KEY] = credentials.serialize(principal)
    request.scope["user"] = principal


def logout(request: Request) -> None:
    principal = request.scope.get("user")
    request.session.pop(SESSION_USER_KEY, None)
    request.scope["user"] = None
    if principal is not None:
        log.info("auth.logout", user_id=str(principal.id))


# --- Module Notes -----------------------------------------------------------
# `request.session` is a `sessions.state.SessionState` installed by `pipeline.session`.
