"""
session_store.py
The authenticated identity for this run, mirrored into one durable SQLite record.

Every mutation writes the record before returning, so a restart right after a
successful call restores the updated session.
"""

from __future__ import annotations

import json
import sqlite3
from dataclasses import replace

import config
import db
from logger import get_logger
from models import Session, SessionRecordError, UserRole
from toasts import ToastQueue

log = get_logger("session")


class SessionStore:
    def __init__(self, toasts: ToastQueue):
        db.init_db()
        self.toasts = toasts
        self._current: Session | None = None

    @property
    def current(self) -> Session | None:
        return self._current

    @property
    def is_authenticated(self) -> bool:
        return self._current is not None

    @property
    def role(self) -> UserRole | None:
        return self._current.role if self._current else None

    @property
    def branch(self) -> str | None:
        return self._current.branch if self._current else None

    def restore(self) -> Session | None:
        """Load the durable record; anything absent or malformed counts as logged out."""
        try:
            raw = db.get_setting(db.SESSION_KEY)
        except sqlite3.Error:
            log.exception("could not read the session record")
            return None
        if raw is None:
            return None
        try:
            session = Session.from_dict(json.loads(raw))
        except (json.JSONDecodeError, SessionRecordError) as exc:
            log.warning("ignoring malformed session record: %s", exc)
            return None
        self._current = session
        log.info("restored session for %s (%s)", session.name, session.role.value)
        return session

    def login(self, candidate: Session) -> Session:
        session = candidate if candidate.branch else replace(candidate, branch=config.default_branch())
        if session.role == UserRole.MEMBER and not session.member_id:
            log.warning("member session %s has no member_id", session.id)
        self._persist(session)
        log.info("login: %s as %s @ %s", session.name, session.role.value, session.branch)
        self.toasts.push(f"Logged in successfully as {session.name}")
        return session

    def logout(self) -> None:
        self._current = None
        db.delete_setting(db.SESSION_KEY)
        log.info("logout")
        self.toasts.push("Logged out successfully", "info")

    def switch_branch(self, branch: str) -> Session | None:
        if self._current is None:
            return None
        session = replace(self._current, branch=branch)
        self._persist(session)
        self.toasts.push(f"Switched to {branch}")
        return session

    def switch_role(self, role: UserRole) -> Session | None:
        if self._current is None:
            return None
        session = replace(self._current, role=UserRole(role))
        self._persist(session)
        self.toasts.push(f"Role switched to {session.role.value}", "info")
        return session

    def _persist(self, session: Session) -> None:
        db.set_setting(db.SESSION_KEY, json.dumps(session.to_dict()))
        self._current = session
