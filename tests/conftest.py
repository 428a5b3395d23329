"""Shared fixtures: a throwaway SQLite file per test and a controllable clock."""

from __future__ import annotations

import os

import pytest

# Keep bcrypt cheap in tests
os.environ.setdefault("IMANI_BCRYPT_ROUNDS", "4")

import db  # noqa: E402
from models import Member, MemberStatus, Session, Transaction, UserRole  # noqa: E402
from toasts import ToastQueue  # noqa: E402


class FakeClock:
    def __init__(self, start_ms: int = 1_000_000):
        self.now_ms = start_ms

    def __call__(self) -> float:
        return self.now_ms / 1000.0

    def advance_ms(self, ms: int) -> None:
        self.now_ms += ms


@pytest.fixture(autouse=True)
def temp_db(tmp_path, monkeypatch):
    path = tmp_path / "imani-test.db"
    monkeypatch.setenv("IMANI_DB_FILE", str(path))
    db.init_db()
    return path


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def toasts(clock) -> ToastQueue:
    return ToastQueue(ttl_ms=4000, clock=clock)


def make_member(member_id: str = "3", **overrides) -> Member:
    fields = dict(
        id=member_id,
        first_name="Ruth",
        last_name="Akinyi",
        phone="0733000111",
        email="ruth@example.com",
        location="Westlands",
        group="Women of Grace",
        status=MemberStatus.ACTIVE,
        join_date="2024-02-01",
        age=31,
        gender="Female",
    )
    fields.update(overrides)
    return Member(**fields)


def make_transaction(tx_id: str = "trx9", member_id: str = "3", **overrides) -> Transaction:
    fields = dict(
        id=tx_id,
        member_id=member_id,
        member_name="Ruth Akinyi",
        amount=2500.0,
        type="Offering",
        payment_method="Cash",
        date="2024-06-02",
        reference="REF123",
        category="Income",
    )
    fields.update(overrides)
    return Transaction(**fields)


def make_session(role: UserRole = UserRole.ADMIN, **overrides) -> Session:
    fields = dict(id="u1", name="Pastor John", role=role, branch="", avatar="a.png")
    if role == UserRole.MEMBER:
        fields["member_id"] = "1"
    fields.update(overrides)
    return Session(**fields)
