"""
router.py
Screen selection as a small finite-state machine.

The state is (screen, authenticated). `transition` is pure and total: every
(state, action, target) triple maps to a valid RouteState, which is what the
sidebar, login form and legal pages drive through ViewRouter.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from logger import get_logger
from models import UserRole

log = get_logger("router")


class Screen(str, Enum):
    UNAUTHENTICATED = "UNAUTHENTICATED"  # the login screen
    DASHBOARD = "DASHBOARD"
    MY_PORTAL = "MY_PORTAL"
    MEMBERS = "MEMBERS"
    GROUPS = "GROUPS"
    SERMONS = "SERMONS"
    FINANCE = "FINANCE"
    EVENTS = "EVENTS"
    COMMUNICATION = "COMMUNICATION"
    REPORTS = "REPORTS"
    ANALYTICS = "ANALYTICS"
    SETTINGS = "SETTINGS"
    PRIVACY = "PRIVACY"
    COMPLIANCE = "COMPLIANCE"
    SECURITY = "SECURITY"


PUBLIC_SCREENS = frozenset({Screen.PRIVACY, Screen.COMPLIANCE, Screen.SECURITY})
PROTECTED_SCREENS = frozenset(s for s in Screen if s not in PUBLIC_SCREENS and s != Screen.UNAUTHENTICATED)

FALLBACK_VIEW = Screen.DASHBOARD

# Every known role is listed; roles added later fall back to FALLBACK_VIEW.
INITIAL_VIEW: dict[UserRole, Screen] = {
    UserRole.ADMIN: Screen.DASHBOARD,
    UserRole.PASTOR: Screen.DASHBOARD,
    UserRole.TREASURER: Screen.DASHBOARD,
    UserRole.SECRETARY: Screen.DASHBOARD,
    UserRole.MEMBER: Screen.MY_PORTAL,
}

# Sidebar menu: which roles see which protected views. Navigation itself is not
# role-checked; screens get their authority from the callbacks they are handed.
NAV_ITEMS: dict[Screen, tuple[UserRole, ...]] = {
    Screen.DASHBOARD: (UserRole.ADMIN, UserRole.PASTOR, UserRole.TREASURER),
    Screen.MY_PORTAL: (UserRole.MEMBER,),
    Screen.MEMBERS: (UserRole.ADMIN, UserRole.PASTOR, UserRole.SECRETARY),
    Screen.FINANCE: (UserRole.ADMIN, UserRole.TREASURER),
    Screen.ANALYTICS: (UserRole.ADMIN, UserRole.PASTOR),
    Screen.GROUPS: (UserRole.ADMIN, UserRole.PASTOR, UserRole.SECRETARY),
    Screen.EVENTS: (UserRole.ADMIN, UserRole.PASTOR, UserRole.SECRETARY),
    Screen.COMMUNICATION: (UserRole.ADMIN, UserRole.PASTOR, UserRole.SECRETARY),
    Screen.SERMONS: (UserRole.ADMIN, UserRole.PASTOR),
    Screen.REPORTS: (UserRole.ADMIN, UserRole.TREASURER),
}


class Action(str, Enum):
    NAVIGATE = "NAVIGATE"
    LOGIN = "LOGIN"
    LOGOUT = "LOGOUT"
    BACK = "BACK"


@dataclass(frozen=True)
class RouteState:
    screen: Screen = Screen.UNAUTHENTICATED
    authenticated: bool = False


LOGGED_OUT = RouteState()


def initial_view(role) -> Screen:
    try:
        return INITIAL_VIEW.get(UserRole(role), FALLBACK_VIEW)
    except ValueError:
        return FALLBACK_VIEW


def parse_screen(target) -> Screen | None:
    """Screen for a name or Screen; None when the name is not mapped."""
    if isinstance(target, Screen):
        return target
    try:
        return Screen(str(target).upper())
    except ValueError:
        return None


def nav_for_role(role: UserRole) -> list[Screen]:
    return [screen for screen, roles in NAV_ITEMS.items() if role in roles]


def transition(state: RouteState, action: Action, target=None, role=None) -> RouteState:
    if action == Action.LOGOUT:
        return LOGGED_OUT

    if action == Action.LOGIN:
        return RouteState(initial_view(role), authenticated=True)

    if action == Action.BACK:
        if state.screen not in PUBLIC_SCREENS:
            return state
        if state.authenticated:
            return RouteState(Screen.SETTINGS, authenticated=True)
        return LOGGED_OUT

    if action == Action.NAVIGATE:
        screen = parse_screen(target)
        if screen in PUBLIC_SCREENS:
            return RouteState(screen, state.authenticated)
        if not state.authenticated:
            return LOGGED_OUT
        if screen not in PROTECTED_SCREENS:
            return RouteState(FALLBACK_VIEW, authenticated=True)
        return RouteState(screen, authenticated=True)

    log.warning("unhandled router action %r", action)
    return state


def gate(state: RouteState, authenticated: bool) -> Screen:
    """Screen that may actually be rendered given the live session state."""
    if state.screen in PUBLIC_SCREENS:
        return state.screen
    if not authenticated or not state.authenticated:
        return Screen.UNAUTHENTICATED
    return state.screen


class ViewRouter:
    def __init__(self, state: RouteState = LOGGED_OUT):
        self.state = state

    @property
    def screen(self) -> Screen:
        return self.state.screen

    def dispatch(self, action: Action, target=None, role=None) -> Screen:
        before = self.state
        self.state = transition(before, action, target=target, role=role)
        if self.state != before:
            log.debug("route %s -> %s (%s)", before.screen.value, self.state.screen.value, action.value)
        return self.state.screen

    def navigate(self, target) -> Screen:
        return self.dispatch(Action.NAVIGATE, target=target)

    def on_login(self, role: UserRole) -> Screen:
        return self.dispatch(Action.LOGIN, role=role)

    def on_logout(self) -> Screen:
        return self.dispatch(Action.LOGOUT)

    def back(self) -> Screen:
        return self.dispatch(Action.BACK)
