"""
seed.py
Starting collections for a fresh console and the demo login accounts.
"""

from __future__ import annotations

import auth
import db
from logger import get_logger
from models import (
    ChurchEvent,
    MaritalStatus,
    Member,
    MembershipType,
    MemberStatus,
    Notification,
    Transaction,
    UserRole,
)

log = get_logger("seed")

# (id, email, password, name, role, avatar, member_id)
DEMO_ACCOUNTS = [
    ("u1", "admin@imani.org", "admin", "Pastor John", UserRole.ADMIN, "https://i.pravatar.cc/100?img=12", None),
    ("u2", "pastor@imani.org", "pastor", "Pastor Mary", UserRole.PASTOR, "https://i.pravatar.cc/100?img=32", None),
    ("u3", "member@imani.org", "member", "David Ochieng", UserRole.MEMBER, "https://i.pravatar.cc/100?img=15", "1"),
    ("u4", "treasurer@imani.org", "treasurer", "Grace Njeri", UserRole.TREASURER, "https://i.pravatar.cc/100?img=45", None),
    ("u5", "secretary@imani.org", "secretary", "Peter Kamau", UserRole.SECRETARY, "https://i.pravatar.cc/100?img=53", None),
]


def sample_members() -> list[Member]:
    return [
        Member(
            id="1", first_name="David", last_name="Ochieng", phone="0712345678",
            email="david@example.com", location="Nairobi West", group="Youth Fellowship",
            status=MemberStatus.ACTIVE, join_date="2023-01-15",
            marital_status=MaritalStatus.SINGLE, membership_type=MembershipType.FULL,
            age=24, gender="Male",
        ),
        Member(
            id="2", first_name="Mary", last_name="Wambui", phone="0722111222",
            email="mary@example.com", location="Kileleshwa", group="Women of Grace",
            status=MemberStatus.ACTIVE, join_date="2022-11-20",
            marital_status=MaritalStatus.MARRIED, membership_type=MembershipType.FULL,
            age=38, gender="Female",
        ),
    ]


def sample_transactions() -> list[Transaction]:
    return [
        Transaction(
            id="trx1", member_id="1", member_name="David Ochieng", amount=5000.0,
            type="Tithe", payment_method="M-Pesa", date="2024-05-19",
            reference="QSG812L90P", category="Income",
        ),
    ]


def sample_events() -> list[ChurchEvent]:
    return [
        ChurchEvent(
            id="ev1", title="Sunday Worship Service", description="Main service of worship.",
            date="2024-05-26", time="09:00 AM", location="Main Sanctuary",
            attendance=frozenset({"1", "2"}),
        ),
    ]


def sample_notifications() -> list[Notification]:
    return [
        Notification(
            id="n1", title="M-Pesa Transaction",
            message="New Tithe received from Mary Wambui: KES 12,000.",
            time="2 mins ago", type="MPESA", read=False,
        ),
    ]


def ensure_demo_accounts() -> None:
    """
    Insert the demo login accounts if the users table is empty
    (safe to run multiple times).
    """
    if db.count_users():
        return
    for user_id, email, password, name, role, avatar, member_id in DEMO_ACCOUNTS:
        auth.register_user(user_id, email, password, name, role, avatar, member_id)
    log.info("seeded %d demo accounts", len(DEMO_ACCOUNTS))
