"""
shell.py
Composes toasts, session, domain store and router for one running console.

Screens never see the store itself. Each one receives a ScreenProps holding
read-only snapshots and only the callbacks it is allowed to invoke; that wiring
is the authorization boundary between the UI and the core.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Mapping

import seed
from logger import get_logger
from models import Member, Session, UserRole
from router import PUBLIC_SCREENS, Screen, ViewRouter, gate
from session_store import SessionStore
from store import DomainStore
from toasts import ToastQueue

log = get_logger("shell")

Renderer = Callable[["ScreenProps"], Any]


@dataclass(frozen=True)
class ScreenProps:
    screen: Screen
    session: Session | None
    data: Mapping[str, Any] = field(default_factory=dict)
    actions: Mapping[str, Callable[..., Any]] = field(default_factory=dict)


class AppShell:
    def __init__(
        self,
        toasts: ToastQueue | None = None,
        store: DomainStore | None = None,
        router: ViewRouter | None = None,
    ):
        self.toasts = toasts if toasts is not None else ToastQueue()
        self.session = SessionStore(self.toasts)
        self.store = store if store is not None else DomainStore(self.toasts)
        self.router = router if router is not None else ViewRouter()

    @classmethod
    def with_sample_data(cls, toasts: ToastQueue | None = None) -> "AppShell":
        toasts = toasts if toasts is not None else ToastQueue()
        store = DomainStore(
            toasts,
            members=seed.sample_members(),
            transactions=seed.sample_transactions(),
            events=seed.sample_events(),
            notifications=seed.sample_notifications(),
        )
        return cls(toasts=toasts, store=store)

    # ---------- Session lifecycle ----------

    def start(self) -> Screen:
        """Restore the durable session (if any) and route to its initial view."""
        session = self.session.restore()
        if session is None:
            return self.router.on_logout()
        return self.router.on_login(session.role)

    def login(self, candidate: Session) -> Screen:
        session = self.session.login(candidate)
        return self.router.on_login(session.role)

    def reenter(self) -> Screen:
        """Route as a fresh login would for the current session."""
        if not self.session.is_authenticated:
            return self.router.on_logout()
        return self.router.on_login(self.session.role)

    def logout(self) -> Screen:
        self.session.logout()
        return self.router.on_logout()

    def switch_role(self, role: UserRole) -> Session | None:
        return self.session.switch_role(role)

    def switch_branch(self, branch: str) -> Session | None:
        return self.session.switch_branch(branch)

    # ---------- Navigation ----------

    @property
    def screen(self) -> Screen:
        """Screen the shell will actually render right now."""
        return gate(self.router.state, self.session.is_authenticated)

    def navigate(self, target) -> Screen:
        self.router.navigate(target)
        return self.screen

    def back(self) -> Screen:
        self.router.back()
        return self.screen

    # ---------- Screen wiring ----------

    def portal_member(self) -> Member | None:
        """The logged-in member's record; falls back to the first member like the portal did."""
        session = self.session.current
        if session is None:
            return None
        member = self.store.find_member(session.member_id)
        if member is None and self.store.members:
            log.warning("portal member %s not found, showing first member", session.member_id)
            member = self.store.members[0]
        return member

    def update_own_profile(self, member: Member) -> bool:
        session = self.session.current
        if session is None or member.id != session.member_id:
            self.toasts.push("You can only edit your own profile", "error")
            return False
        return self.store.update_member(member)

    def send_broadcast(self, message: str, group: str = "All Members") -> None:
        log.info("broadcast to %s: %s", group, message)
        self.toasts.push("Broadcast sent")

    def props_for(self, screen: Screen) -> ScreenProps:
        s = self.store
        data: dict[str, Any] = {}
        actions: dict[str, Callable[..., Any]] = {}

        if screen == Screen.UNAUTHENTICATED:
            actions = {"login": self.login, "navigate": self.navigate}
        elif screen in PUBLIC_SCREENS:
            actions = {"back": self.back}
        elif screen == Screen.MY_PORTAL:
            member = self.portal_member()
            data = {
                "member": member,
                "transactions": tuple(s.transactions_for_member(member.id)) if member else (),
                "events": s.events,
            }
            actions = {"update_profile": self.update_own_profile, "navigate": self.navigate}
        elif screen == Screen.MEMBERS:
            data = {"members": s.members, "transactions": s.transactions, "events": s.events}
            actions = {
                "add_member": s.add_member,
                "update_member": s.update_member,
                "delete_member": s.delete_member,
            }
        elif screen == Screen.GROUPS:
            data = {"members": s.members}
        elif screen == Screen.SERMONS:
            data = {"events": s.events}
        elif screen == Screen.FINANCE:
            data = {"transactions": s.transactions, "members": s.members}
            actions = {"add_transaction": s.add_transaction}
        elif screen == Screen.EVENTS:
            data = {"events": s.events, "members": s.members}
            actions = {
                "add_event": s.add_event,
                "delete_event": s.delete_event,
                "set_attendance": s.set_attendance,
            }
        elif screen == Screen.COMMUNICATION:
            data = {"members": s.members}
            actions = {"send_broadcast": self.send_broadcast}
        elif screen == Screen.REPORTS:
            data = {"transactions": s.transactions, "members": s.members, "events": s.events}
        elif screen == Screen.ANALYTICS:
            data = {"members": s.members}
        elif screen == Screen.SETTINGS:
            actions = {"navigate": self.navigate}
        else:
            data = {"members": s.members, "transactions": s.transactions, "events": s.events}
            actions = {"navigate": self.navigate}

        return ScreenProps(
            screen=screen,
            session=self.session.current,
            data=MappingProxyType(data),
            actions=MappingProxyType(actions),
        )

    def notification_props(self) -> ScreenProps:
        """Header bell panel, shown on every authenticated screen."""
        s = self.store
        return ScreenProps(
            screen=self.screen,
            session=self.session.current,
            data=MappingProxyType({"notifications": s.notifications, "unread": s.unread_count}),
            actions=MappingProxyType({
                "mark_read": s.mark_notification_read,
                "mark_all_read": s.mark_all_notifications_read,
                "delete": s.delete_notification,
            }),
        )

    def render(self, registry: Mapping[Screen, Renderer]) -> Any:
        """
        Call the renderer of the gated screen only. Protected renderers are never
        invoked without a session; screens missing from the registry use DASHBOARD.
        """
        screen = self.screen
        renderer = registry.get(screen)
        if renderer is None and screen not in PUBLIC_SCREENS and screen != Screen.UNAUTHENTICATED:
            screen = Screen.DASHBOARD
            renderer = registry.get(screen)
        if renderer is None:
            log.error("no renderer registered for %s", screen.value)
            return None
        return renderer(self.props_for(screen))
