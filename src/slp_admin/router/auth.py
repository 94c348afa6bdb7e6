"""Router – admin login."""

import logging

from fastapi import APIRouter, Form, Query
from fastapi.responses import JSONResponse, RedirectResponse

from slp_admin.config import LOGIN_PATH, REDIRECT_PARAM, SESSION_COOKIE_NAME, SESSION_VALUE
from slp_admin.schemas.auth import LoginError, LoginScreen
from slp_admin.services.auth_service import check_password, safe_redirect_target

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Auth"])


@router.get(LOGIN_PATH, response_model=LoginScreen)
def login_screen(redirected_from: str | None = Query(None, alias=REDIRECT_PARAM)) -> LoginScreen:
    """Describe the login form (only reachable without a session)."""
    return LoginScreen(redirected_from=redirected_from)


@router.post(LOGIN_PATH, responses={401: {"model": LoginError}})
def login(
    password: str = Form(...),
    redirected_from: str | None = Form(None, alias=REDIRECT_PARAM),
):
    """
    Check the admin password and open a session.

    On success the ``auth=true`` cookie is set (site-wide, no expiry) and
    the browser is sent to the page it originally asked for (or
    ``/admin``).  On failure nothing changes and a generic error is returned.
    """
    if not check_password(password):
        logger.warning("Rejected admin login attempt")
        return JSONResponse(status_code=401, content={"detail": "Invalid password!"})

    target = safe_redirect_target(redirected_from)
    response = RedirectResponse(target, status_code=303)
    response.set_cookie(SESSION_COOKIE_NAME, SESSION_VALUE, path="/")
    logger.info("🔑 Admin logged in, redirecting to %s", target)
    return response
