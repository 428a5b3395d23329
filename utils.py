"""
utils.py
Dates, ids, dataframes and exports for the reporting screens.
"""

from __future__ import annotations

import uuid
from dataclasses import asdict
from datetime import date
from typing import Iterable

import pandas as pd

from models import UNKNOWN_MEMBER, ChurchEvent, Member, Transaction

MEMBER_COLUMNS = [
    "id", "first_name", "last_name", "phone", "email", "location", "group", "status",
    "join_date", "marital_status", "membership_type", "age", "gender",
]
TRANSACTION_COLUMNS = [
    "id", "member_id", "member_name", "amount", "type", "payment_method", "date",
    "reference", "category",
]
AGE_BINS = [0, 18, 30, 45, 60, 200]
AGE_LABELS = ["Under 18", "18-29", "30-44", "45-59", "60+"]


def today_iso() -> str:
    return date.today().isoformat()


def parse_iso(d: str) -> date:
    return date.fromisoformat(d)


def new_id(prefix: str = "") -> str:
    """Fresh opaque id for entities created from a form."""
    return f"{prefix}{uuid.uuid4().hex[:8]}"


def _enum_value(v):
    return getattr(v, "value", v)


def members_frame(members: Iterable[Member]) -> pd.DataFrame:
    rows = [{k: _enum_value(v) for k, v in asdict(m).items()} for m in members]
    if not rows:
        return pd.DataFrame(columns=MEMBER_COLUMNS)
    return pd.DataFrame(rows, columns=MEMBER_COLUMNS)


def transactions_frame(transactions: Iterable[Transaction]) -> pd.DataFrame:
    rows = [asdict(t) for t in transactions]
    if not rows:
        return pd.DataFrame(columns=TRANSACTION_COLUMNS)
    return pd.DataFrame(rows, columns=TRANSACTION_COLUMNS)


def to_csv_bytes(df: pd.DataFrame) -> bytes:
    return df.to_csv(index=False).encode("utf-8")


def revenue_summary_by_month(transactions: Iterable[Transaction]) -> pd.DataFrame:
    """Income, expense and net per YYYY-MM, most recent month first."""
    df = transactions_frame(transactions)
    if df.empty:
        return pd.DataFrame(columns=["month", "income", "expense", "net"])
    df["month"] = df["date"].str.slice(0, 7)
    pivot = df.pivot_table(index="month", columns="category", values="amount", aggfunc="sum", fill_value=0.0)
    out = pd.DataFrame({
        "month": pivot.index,
        "income": pivot["Income"].values if "Income" in pivot else 0.0,
        "expense": pivot["Expense"].values if "Expense" in pivot else 0.0,
    })
    out["net"] = out["income"] - out["expense"]
    return out.sort_values("month", ascending=False).reset_index(drop=True)


def giving_by_type(transactions: Iterable[Transaction]) -> pd.DataFrame:
    df = transactions_frame(transactions)
    df = df[df["category"] == "Income"]
    if df.empty:
        return pd.DataFrame(columns=["type", "total"])
    out = df.groupby("type", as_index=False)["amount"].sum().rename(columns={"amount": "total"})
    return out.sort_values("total", ascending=False).reset_index(drop=True)


def member_giving_total(transactions: Iterable[Transaction], member_id: str) -> float:
    return float(sum(t.amount for t in transactions if t.member_id == member_id and t.category == "Income"))


def attendance_summary(events: Iterable[ChurchEvent], members: Iterable[Member]) -> pd.DataFrame:
    """
    Per-event head count. Attendance ids whose member was deleted still count
    toward 'present' and are reported separately as 'unknown'.
    """
    known = {m.id for m in members}
    rows = []
    for e in events:
        unknown = sum(1 for mid in e.attendance if mid not in known)
        rows.append({
            "id": e.id,
            "title": e.title,
            "date": e.date,
            "present": len(e.attendance),
            "unknown": unknown,
            "rate": (len(e.attendance) - unknown) / len(known) if known else 0.0,
        })
    return pd.DataFrame(rows, columns=["id", "title", "date", "present", "unknown", "rate"])


def attendee_names(event: ChurchEvent, members: Iterable[Member]) -> list[str]:
    by_id = {m.id: m.full_name for m in members}
    return sorted(by_id.get(mid, UNKNOWN_MEMBER) for mid in event.attendance)


def demographics(members: Iterable[Member]) -> dict[str, pd.DataFrame]:
    """Counts by gender, age band, marital status and membership type."""
    df = members_frame(members)

    def _counts(col: str) -> pd.DataFrame:
        s = df[col].fillna("Unspecified")
        return s.value_counts().rename_axis(col).reset_index(name="count")

    ages = pd.cut(pd.to_numeric(df["age"], errors="coerce"), bins=AGE_BINS, labels=AGE_LABELS, right=False)
    age_df = ages.value_counts().reindex(AGE_LABELS, fill_value=0).rename_axis("age_band").reset_index(name="count")
    return {
        "gender": _counts("gender"),
        "age_band": age_df,
        "marital_status": _counts("marital_status"),
        "membership_type": _counts("membership_type"),
    }


def group_counts(members: Iterable[Member]) -> pd.DataFrame:
    df = members_frame(members)
    if df.empty:
        return pd.DataFrame(columns=["group", "members"])
    out = df.groupby("group", as_index=False)["id"].count().rename(columns={"id": "members"})
    return out.sort_values("members", ascending=False).reset_index(drop=True)


def option_index(options: list, current) -> int:
    """Position of the current value in a select box's options, first option when absent."""
    try:
        return options.index(current)
    except ValueError:
        return 0
