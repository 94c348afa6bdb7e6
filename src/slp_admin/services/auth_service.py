"""Service layer – admin session marker and the route gate decision.

The gate is a pure function of the request path and whether the session
marker was presented, so it can be exercised without a running request
pipeline.  ``slp_admin.middleware`` wires it into Starlette.

Limitations (known, not addressed here):

* the session marker is the plain cookie ``auth=true``: a presence check
  with no signature, no expiry and no server-side record.  Anyone who sets
  the cookie by hand is let through, so the gate is not a security
  boundary;
* one shared admin password, no per-user accounts;
* no rate limiting on login attempts and no audit trail;
* the gate only protects this service's routes.  Whether Supabase enforces
  row-level security on the tables and bucket is a property of the
  Supabase project configuration and must be verified there.
"""

from __future__ import annotations

import hmac
import logging
from dataclasses import dataclass
from urllib.parse import urlencode

from slp_admin.config import LOGIN_PATH, PROTECTED_PREFIX, REDIRECT_PARAM, settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GateDecision:
    allow: bool
    redirect_to: str | None = None


# ──────────────────────────────────────────────
# Session marker
# ──────────────────────────────────────────────
def has_session(cookie: str | None) -> bool:
    """Any ``auth`` cookie counts; its value is not inspected."""
    return cookie is not None


def check_password(candidate: str) -> bool:
    return hmac.compare_digest(candidate.encode("utf-8"), settings.admin_password.encode("utf-8"))


# ──────────────────────────────────────────────
# Gate
# ──────────────────────────────────────────────
def is_protected(path: str) -> bool:
    return path == PROTECTED_PREFIX or path.startswith(PROTECTED_PREFIX + "/")


def decide(path: str, authenticated: bool) -> GateDecision:
    """
    Decide what to do with a request for *path*.

    * protected path, no session → redirect to the login page, remembering
      where the user was headed;
    * login page, session present → redirect to the admin root;
    * anything else               → allow.
    """
    if is_protected(path) and not authenticated:
        return GateDecision(
            allow=False,
            redirect_to=f"{LOGIN_PATH}?{urlencode({REDIRECT_PARAM: path})}",
        )
    if path == LOGIN_PATH and authenticated:
        return GateDecision(allow=False, redirect_to=PROTECTED_PREFIX)
    return GateDecision(allow=True)


def safe_redirect_target(target: str | None) -> str:
    """Return-target after login; only site-relative paths are honoured."""
    if not target or not target.startswith("/") or target.startswith("//") or "\\" in target:
        return PROTECTED_PREFIX
    return target
