"""
Tests for the view router: transition table, totality, render gate.
"""

from __future__ import annotations

import pytest

from models import UserRole
from router import (
    INITIAL_VIEW,
    LOGGED_OUT,
    PUBLIC_SCREENS,
    Action,
    RouteState,
    Screen,
    ViewRouter,
    gate,
    initial_view,
    nav_for_role,
    transition,
)

# every state the machine can actually be in
ALL_STATES = (
    [LOGGED_OUT]
    + [RouteState(s, False) for s in PUBLIC_SCREENS]
    + [RouteState(s, True) for s in Screen if s != Screen.UNAUTHENTICATED]
)
TARGETS = list(Screen) + ["NOPE", "dashboard", None, 42]


def test_every_role_has_an_initial_view() -> None:
    assert set(INITIAL_VIEW) == set(UserRole)


@pytest.mark.parametrize("role", list(UserRole))
def test_login_routes_by_role(role: UserRole) -> None:
    expected = Screen.MY_PORTAL if role == UserRole.MEMBER else Screen.DASHBOARD
    assert transition(LOGGED_OUT, Action.LOGIN, role=role) == RouteState(expected, True)


def test_unknown_role_falls_back_to_dashboard() -> None:
    assert initial_view("BISHOP") == Screen.DASHBOARD


@pytest.mark.parametrize("target", [s for s in Screen if s not in PUBLIC_SCREENS])
def test_unauthenticated_cannot_reach_protected(target: Screen) -> None:
    assert transition(LOGGED_OUT, Action.NAVIGATE, target=target) == LOGGED_OUT


@pytest.mark.parametrize("target", sorted(PUBLIC_SCREENS))
def test_public_views_reachable_either_way(target: Screen) -> None:
    assert transition(LOGGED_OUT, Action.NAVIGATE, target=target) == RouteState(target, False)
    state = RouteState(Screen.FINANCE, True)
    assert transition(state, Action.NAVIGATE, target=target) == RouteState(target, True)


def test_unknown_view_while_authenticated_goes_to_dashboard() -> None:
    state = RouteState(Screen.EVENTS, True)
    assert transition(state, Action.NAVIGATE, target="NOPE") == RouteState(Screen.DASHBOARD, True)
    assert transition(state, Action.NAVIGATE, target=Screen.UNAUTHENTICATED).screen == Screen.DASHBOARD


def test_navigate_accepts_names() -> None:
    state = RouteState(Screen.DASHBOARD, True)
    assert transition(state, Action.NAVIGATE, target="finance").screen == Screen.FINANCE


@pytest.mark.parametrize("state", ALL_STATES)
def test_logout_always_returns_to_unauthenticated(state: RouteState) -> None:
    assert transition(state, Action.LOGOUT) == LOGGED_OUT


def test_back_from_public_view() -> None:
    assert transition(RouteState(Screen.PRIVACY, True), Action.BACK) == RouteState(Screen.SETTINGS, True)
    assert transition(RouteState(Screen.SECURITY, False), Action.BACK) == LOGGED_OUT


def test_back_elsewhere_is_noop() -> None:
    state = RouteState(Screen.MEMBERS, True)
    assert transition(state, Action.BACK) == state


def test_transition_table_is_total() -> None:
    for state in ALL_STATES:
        for action in Action:
            for target in TARGETS:
                out = transition(state, action, target=target, role=UserRole.ADMIN)
                assert out in ALL_STATES


def test_gate_hides_protected_screens_without_session() -> None:
    assert gate(RouteState(Screen.FINANCE, True), authenticated=False) == Screen.UNAUTHENTICATED
    assert gate(RouteState(Screen.PRIVACY, False), authenticated=False) == Screen.PRIVACY
    assert gate(RouteState(Screen.FINANCE, True), authenticated=True) == Screen.FINANCE


def test_view_router_flow() -> None:
    r = ViewRouter()
    assert r.navigate(Screen.MEMBERS) == Screen.UNAUTHENTICATED
    assert r.navigate(Screen.COMPLIANCE) == Screen.COMPLIANCE
    assert r.back() == Screen.UNAUTHENTICATED
    assert r.on_login(UserRole.SECRETARY) == Screen.DASHBOARD
    assert r.navigate(Screen.MEMBERS) == Screen.MEMBERS
    assert r.on_logout() == Screen.UNAUTHENTICATED


def test_nav_for_role() -> None:
    assert Screen.FINANCE in nav_for_role(UserRole.TREASURER)
    assert Screen.MEMBERS not in nav_for_role(UserRole.TREASURER)
    assert nav_for_role(UserRole.MEMBER) == [Screen.MY_PORTAL]
