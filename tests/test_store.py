"""
Tests for the domain store: CRUD rules, toasts per mutation, dangling references.
"""

from __future__ import annotations

from dataclasses import replace

import pytest

from conftest import make_member, make_transaction
from models import UNKNOWN_MEMBER, ChurchEvent, MemberStatus, Notification
from store import DomainStore


@pytest.fixture
def store(toasts) -> DomainStore:
    return DomainStore(
        toasts,
        events=[
            ChurchEvent(id="ev1", title="Sunday Worship", description="", date="2024-05-26",
                        time="09:00 AM", location="Main Sanctuary", attendance=frozenset({"1"})),
        ],
        notifications=[
            Notification(id="n1", title="M-Pesa", message="Tithe", time="now", type="MPESA"),
            Notification(id="n2", title="System", message="Backup", time="now", type="SYSTEM"),
        ],
    )


def test_add_then_lookup_returns_same_member(store, toasts) -> None:
    m = make_member("3")
    store.add_member(m)
    assert store.find_member("3") == m
    assert toasts.active()[-1].message == "Member added successfully"


def test_update_replaces_fields_and_toasts_success(store, toasts) -> None:
    m = make_member("3")
    store.add_member(m)
    assert store.update_member(replace(m, status=MemberStatus.INACTIVE))

    updated = store.find_member("3")
    assert updated.status == MemberStatus.INACTIVE
    assert replace(updated, status=MemberStatus.ACTIVE) == m
    assert toasts.active()[-1].type == "success"
    assert len(toasts.active()) == 2


def test_update_missing_member_is_silent(store, toasts) -> None:
    assert store.update_member(make_member("404")) is False
    assert store.members == ()
    assert toasts.active() == []


def test_delete_member_keeps_transactions(store) -> None:
    store.add_member(make_member("3"))
    store.add_transaction(make_transaction("trx9", member_id="3"))
    assert store.delete_member("3")

    assert store.find_member("3") is None
    [tx] = store.transactions
    assert tx.member_id == "3"
    assert tx.member_name == "Ruth Akinyi"
    assert store.member_display_name("3") == UNKNOWN_MEMBER


def test_delete_member_keeps_attendance_entries(store) -> None:
    store.add_member(make_member("1"))
    store.delete_member("1")
    assert store.find_event("ev1").attendance == frozenset({"1"})


def test_delete_member_toasts_error_type(store, toasts) -> None:
    store.add_member(make_member("3"))
    store.delete_member("3")
    assert toasts.active()[-1].type == "error"


def test_delete_missing_member_is_silent(store, toasts) -> None:
    assert store.delete_member("nope") is False
    assert toasts.active() == []


def test_rename_does_not_resync_transaction_snapshot(store) -> None:
    m = make_member("3")
    store.add_member(m)
    store.add_transaction(make_transaction("trx9", member_id="3"))
    store.update_member(replace(m, first_name="Rose"))
    assert store.transactions[0].member_name == "Ruth Akinyi"
    assert store.member_display_name("3") == "Rose Akinyi"


def test_transactions_prepended_most_recent_first(store, toasts) -> None:
    store.add_transaction(make_transaction("a"))
    store.add_transaction(make_transaction("b"))
    store.add_transaction(make_transaction("c"))
    assert [t.id for t in store.transactions] == ["c", "b", "a"]
    assert all(t.message == "Transaction recorded" for t in toasts.active())


def test_snapshots_are_read_only(store) -> None:
    store.add_member(make_member("3"))
    snap = store.members
    assert isinstance(snap, tuple)
    store.add_member(make_member("4"))
    assert len(snap) == 1


def test_set_attendance_replaces_whole_set(store) -> None:
    assert store.set_attendance("ev1", ["m1"])
    assert store.set_attendance("ev1", ["m2"])
    assert store.find_event("ev1").attendance == frozenset({"m2"})


def test_set_attendance_missing_event(store, toasts) -> None:
    assert store.set_attendance("nope", ["m1"]) is False
    assert toasts.active() == []


def test_add_and_delete_event_toast_once_each(store, toasts) -> None:
    ev = ChurchEvent(id="ev2", title="Harambee", description="Fundraiser", date="2024-07-01",
                     time="02:00 PM", location="Hall")
    store.add_event(ev)
    assert store.find_event("ev2") == ev
    assert store.delete_event("ev2")
    assert store.find_event("ev2") is None
    assert [t.message for t in toasts.active()] == ["Event scheduled", "Event removed"]
    assert store.delete_event("ev2") is False
    assert len(toasts.active()) == 2


def test_events_attended_and_member_transactions(store) -> None:
    store.add_transaction(make_transaction("a", member_id="1"))
    store.add_transaction(make_transaction("b", member_id="2"))
    assert [e.id for e in store.events_attended("1")] == ["ev1"]
    assert [t.id for t in store.transactions_for_member("1")] == ["a"]


def test_notifications(store, toasts) -> None:
    assert store.unread_count == 2
    assert store.mark_notification_read("n1")
    assert store.unread_count == 1
    assert store.mark_all_notifications_read() == 1
    assert store.mark_all_notifications_read() == 0
    assert store.delete_notification("n2")
    assert [n.id for n in store.notifications] == ["n1"]
    assert store.delete_notification("n2") is False
    assert store.mark_notification_read("zzz") is False
    assert len(toasts.active()) == 3


def test_duplicate_ids_are_flagged(store) -> None:
    store.add_member(make_member("3"))
    store.add_member(make_member("3", first_name="Other"))
    assert store.duplicate_ids("members") == ["3"]
    assert store.duplicate_ids("transactions") == []
    assert store.duplicate_ids("unknown") == []
