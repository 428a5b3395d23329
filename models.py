"""
models.py
Domain dataclasses and enums (session identity, members, giving, events, notices).
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any


class UserRole(str, Enum):
    ADMIN = "ADMIN"
    PASTOR = "PASTOR"
    TREASURER = "TREASURER"
    SECRETARY = "SECRETARY"
    MEMBER = "MEMBER"


class MemberStatus(str, Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"
    VISITOR = "Visitor"
    YOUTH = "Youth"


class MaritalStatus(str, Enum):
    SINGLE = "Single"
    MARRIED = "Married"
    WIDOWED = "Widowed"
    DIVORCED = "Divorced"


class MembershipType(str, Enum):
    FULL = "Full Member"
    PROBATION = "Probation"
    ASSOCIATE = "Associate"


TRANSACTION_TYPES = ("Tithe", "Offering", "Project", "Harambee", "Benevolence", "Expense")
PAYMENT_METHODS = ("M-Pesa", "Cash", "Bank Transfer")
TRANSACTION_CATEGORIES = ("Income", "Expense")
NOTIFICATION_TYPES = ("MPESA", "SYSTEM", "EVENT", "MEMBER")
TOAST_TYPES = ("success", "error", "info")

UNKNOWN_MEMBER = "Unknown Member"


class SessionRecordError(ValueError):
    """Raised when a stored session record cannot be turned back into a Session."""


@dataclass(frozen=True)
class Session:
    id: str
    name: str
    role: UserRole
    branch: str = ""
    avatar: str = ""
    member_id: str | None = None  # required when role is MEMBER

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["role"] = self.role.value
        return data

    @classmethod
    def from_dict(cls, data: Any) -> "Session":
        if not isinstance(data, dict):
            raise SessionRecordError(f"expected an object, got {type(data).__name__}")
        try:
            role = UserRole(data["role"])
            sid = str(data["id"])
            name = str(data["name"])
        except (KeyError, ValueError) as exc:
            raise SessionRecordError(f"invalid session record: {exc}") from exc
        member_id = data.get("member_id")
        return cls(
            id=sid,
            name=name,
            role=role,
            branch=str(data.get("branch") or ""),
            avatar=str(data.get("avatar") or ""),
            member_id=str(member_id) if member_id is not None else None,
        )


@dataclass(frozen=True)
class Member:
    id: str
    first_name: str
    last_name: str
    phone: str
    email: str
    location: str
    group: str
    status: MemberStatus
    join_date: str
    marital_status: MaritalStatus | None = None
    membership_type: MembershipType | None = None
    age: int | None = None
    gender: str | None = None  # 'Male' / 'Female' / 'Other'

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass(frozen=True)
class Transaction:
    id: str
    member_id: str  # weak reference, may dangle after the member is deleted
    member_name: str  # snapshot taken when recorded, never re-synced
    amount: float
    type: str
    payment_method: str
    date: str
    reference: str
    category: str  # 'Income' or 'Expense'


@dataclass(frozen=True)
class ChurchEvent:
    id: str
    title: str
    description: str
    date: str
    time: str
    location: str
    attendance: frozenset[str] = field(default_factory=frozenset)


@dataclass(frozen=True)
class Notification:
    id: str
    title: str
    message: str
    time: str
    type: str
    read: bool = False


@dataclass(frozen=True)
class Toast:
    id: str
    message: str
    type: str = "success"
