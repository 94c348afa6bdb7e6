"""Tests for the route gate decision and the admin session marker."""

import pytest

from slp_admin.config import settings
from slp_admin.services.auth_service import (
    GateDecision,
    check_password,
    decide,
    has_session,
    safe_redirect_target,
)


# ──────────────────────────────────────────────
# decide
# ──────────────────────────────────────────────
@pytest.mark.parametrize(
    ("path", "authenticated", "expected"),
    [
        ("/admin/places", False, GateDecision(False, "/login?redirectedFrom=%2Fadmin%2Fplaces")),
        ("/admin", False, GateDecision(False, "/login?redirectedFrom=%2Fadmin")),
        ("/admin/places", True, GateDecision(True)),
        ("/login", True, GateDecision(False, "/admin")),
        ("/login", False, GateDecision(True)),
        ("/", False, GateDecision(True)),
        ("/health", False, GateDecision(True)),
        ("/administrator", False, GateDecision(True)),
    ],
)
def test_decide(path: str, authenticated: bool, expected: GateDecision) -> None:
    assert decide(path, authenticated) == expected


# ──────────────────────────────────────────────
# session marker
# ──────────────────────────────────────────────
@pytest.mark.parametrize(
    ("cookie", "expected"),
    [("true", True), ("", True), ("anything", True), (None, False)],
)
def test_has_session_is_a_presence_check(cookie: str | None, expected: bool) -> None:
    assert has_session(cookie) is expected


# ──────────────────────────────────────────────
# login helpers
# ──────────────────────────────────────────────
def test_check_password() -> None:
    assert check_password(settings.admin_password)
    assert not check_password(settings.admin_password + "x")
    assert not check_password("")


@pytest.mark.parametrize(
    ("target", "expected"),
    [
        ("/admin/events", "/admin/events"),
        (None, "/admin"),
        ("", "/admin"),
        ("https://evil.example/admin", "/admin"),
        ("//evil.example", "/admin"),
        ("/\\evil.example", "/admin"),
    ],
)
def test_safe_redirect_target(target: str | None, expected: str) -> None:
    assert safe_redirect_target(target) == expected
