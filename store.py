"""
store.py
In-memory owner of the members, transactions, events and notifications
collections.

Rules:
- every successful mutation pushes exactly one toast
- update/delete of an absent id is absorbed: collection unchanged, no toast, returns False
- deleting a member leaves transactions and attendance entries pointing at it
  (resolve them with member_display_name)
- ids are assigned by callers and not revalidated; duplicates are logged, see duplicate_ids
"""

from __future__ import annotations

from collections import Counter
from dataclasses import replace
from typing import Iterable

from logger import get_logger
from models import UNKNOWN_MEMBER, ChurchEvent, Member, Notification, Transaction
from toasts import ToastQueue

log = get_logger("store")


class DomainStore:
    def __init__(
        self,
        toasts: ToastQueue,
        members: Iterable[Member] = (),
        transactions: Iterable[Transaction] = (),
        events: Iterable[ChurchEvent] = (),
        notifications: Iterable[Notification] = (),
    ):
        self.toasts = toasts
        self._members: list[Member] = list(members)
        self._transactions: list[Transaction] = list(transactions)
        self._events: list[ChurchEvent] = list(events)
        self._notifications: list[Notification] = list(notifications)

    # ---------- Snapshots ----------

    @property
    def members(self) -> tuple[Member, ...]:
        return tuple(self._members)

    @property
    def transactions(self) -> tuple[Transaction, ...]:
        return tuple(self._transactions)

    @property
    def events(self) -> tuple[ChurchEvent, ...]:
        return tuple(self._events)

    @property
    def notifications(self) -> tuple[Notification, ...]:
        return tuple(self._notifications)

    # ---------- Members ----------

    def add_member(self, member: Member) -> Member:
        self._warn_if_taken(self._members, member.id, "member")
        self._members.append(member)
        self.toasts.push("Member added successfully")
        return member

    def update_member(self, member: Member) -> bool:
        """Replace the member with the same id. Absent ids are ignored."""
        idx = _index_of(self._members, member.id)
        if idx is None:
            log.info("update_member: no member with id %s", member.id)
            return False
        self._members[idx] = member
        self.toasts.push("Profile updated successfully")
        return True

    def delete_member(self, member_id: str) -> bool:
        idx = _index_of(self._members, member_id)
        if idx is None:
            log.info("delete_member: no member with id %s", member_id)
            return False
        del self._members[idx]
        self.toasts.push("Member record deleted", "error")
        return True

    def find_member(self, member_id: str | None) -> Member | None:
        idx = _index_of(self._members, member_id)
        return None if idx is None else self._members[idx]

    def member_display_name(self, member_id: str | None) -> str:
        member = self.find_member(member_id)
        return member.full_name if member else UNKNOWN_MEMBER

    # ---------- Transactions ----------

    def add_transaction(self, transaction: Transaction) -> Transaction:
        self._warn_if_taken(self._transactions, transaction.id, "transaction")
        self._transactions.insert(0, transaction)
        self.toasts.push("Transaction recorded")
        return transaction

    def transactions_for_member(self, member_id: str) -> list[Transaction]:
        return [t for t in self._transactions if t.member_id == member_id]

    # ---------- Events ----------

    def add_event(self, event: ChurchEvent) -> ChurchEvent:
        self._warn_if_taken(self._events, event.id, "event")
        self._events.append(event)
        self.toasts.push("Event scheduled")
        return event

    def delete_event(self, event_id: str) -> bool:
        idx = _index_of(self._events, event_id)
        if idx is None:
            log.info("delete_event: no event with id %s", event_id)
            return False
        del self._events[idx]
        self.toasts.push("Event removed", "info")
        return True

    def set_attendance(self, event_id: str, member_ids: Iterable[str]) -> bool:
        """Roll-call: the given ids become the event's whole attendance set."""
        idx = _index_of(self._events, event_id)
        if idx is None:
            log.info("set_attendance: no event with id %s", event_id)
            return False
        event = replace(self._events[idx], attendance=frozenset(member_ids))
        self._events[idx] = event
        self.toasts.push(f"Attendance saved for {event.title} ({len(event.attendance)} present)")
        return True

    def find_event(self, event_id: str) -> ChurchEvent | None:
        idx = _index_of(self._events, event_id)
        return None if idx is None else self._events[idx]

    def events_attended(self, member_id: str) -> list[ChurchEvent]:
        return [e for e in self._events if member_id in e.attendance]

    # ---------- Notifications ----------

    @property
    def unread_count(self) -> int:
        return sum(1 for n in self._notifications if not n.read)

    def mark_notification_read(self, notification_id: str) -> bool:
        idx = _index_of(self._notifications, notification_id)
        if idx is None:
            return False
        self._notifications[idx] = replace(self._notifications[idx], read=True)
        self.toasts.push("Notification marked as read", "info")
        return True

    def mark_all_notifications_read(self) -> int:
        """Returns how many notifications changed; nothing unread means no toast."""
        changed = self.unread_count
        if not changed:
            return 0
        self._notifications = [replace(n, read=True) for n in self._notifications]
        self.toasts.push("All notifications marked as read", "info")
        return changed

    def delete_notification(self, notification_id: str) -> bool:
        idx = _index_of(self._notifications, notification_id)
        if idx is None:
            return False
        del self._notifications[idx]
        self.toasts.push("Notification deleted", "info")
        return True

    # ---------- Diagnostics ----------

    def duplicate_ids(self, collection: str) -> list[str]:
        """Ids appearing more than once in 'members', 'transactions', 'events' or 'notifications'."""
        items = {
            "members": self._members,
            "transactions": self._transactions,
            "events": self._events,
            "notifications": self._notifications,
        }.get(collection, [])
        counts = Counter(item.id for item in items)
        return sorted(i for i, c in counts.items() if c > 1)

    def _warn_if_taken(self, items: list, item_id: str, kind: str) -> None:
        if _index_of(items, item_id) is not None:
            log.warning("duplicate %s id %s accepted", kind, item_id)


def _index_of(items: list, item_id: str | None) -> int | None:
    for i, item in enumerate(items):
        if item.id == item_id:
            return i
    return None
