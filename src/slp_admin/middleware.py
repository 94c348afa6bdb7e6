"""Access gate middleware for the admin routes."""

import logging

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import RedirectResponse, Response

from slp_admin.config import SESSION_COOKIE_NAME
from slp_admin.services.auth_service import decide, has_session

logger = logging.getLogger(__name__)


class AccessGateMiddleware(BaseHTTPMiddleware):
    """Redirect anonymous visitors away from ``/admin`` and signed-in ones away from ``/login``."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        authenticated = has_session(request.cookies.get(SESSION_COOKIE_NAME))
        decision = decide(request.url.path, authenticated)
        if decision.allow:
            return await call_next(request)

        logger.debug("Gate redirect %s → %s", request.url.path, decision.redirect_to)
        return RedirectResponse(decision.redirect_to, status_code=307)
