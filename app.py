"""
app.py
Streamlit congregation console (Imani Central Parish).
Run: streamlit run app.py
"""

from __future__ import annotations

from dataclasses import replace

import streamlit as st

import auth
import config
import db
import seed
import utils
from logger import setup_logger
from models import (
    PAYMENT_METHODS,
    TRANSACTION_TYPES,
    ChurchEvent,
    MaritalStatus,
    Member,
    MembershipType,
    MemberStatus,
    Transaction,
    UserRole,
)
from router import Screen, nav_for_role
from shell import AppShell, ScreenProps

st.set_page_config(page_title="Imani Church Console", layout="wide")

TOAST_WIDGET = {"success": st.success, "error": st.error, "info": st.info}

NAV_LABELS = {
    Screen.DASHBOARD: "📊 Dashboard",
    Screen.MY_PORTAL: "🙏 My Portal",
    Screen.MEMBERS: "👥 Membership",
    Screen.FINANCE: "💳 Finance",
    Screen.ANALYTICS: "📈 Analytics",
    Screen.GROUPS: "🧩 Groups",
    Screen.EVENTS: "📅 Events",
    Screen.COMMUNICATION: "✉️ Communication",
    Screen.SERMONS: "📖 Sermons",
    Screen.REPORTS: "🧾 Reports",
    Screen.SETTINGS: "⚙️ Settings",
}


def init_once():
    setup_logger()
    db.init_db()
    seed.ensure_demo_accounts()


def get_shell() -> AppShell:
    if "shell" not in st.session_state:
        shell = AppShell.with_sample_data()
        shell.start()
        st.session_state.shell = shell
    return st.session_state.shell


def show_toasts(shell: AppShell):
    for toast in shell.toasts.active():
        c1, c2 = st.columns([12, 1])
        with c1:
            TOAST_WIDGET.get(toast.type, st.info)(toast.message)
        with c2:
            if st.button("✕", key=f"toast_{toast.id}"):
                shell.toasts.dismiss(toast.id)
                st.rerun()


# ---------- Public screens ----------

def login_screen(props: ScreenProps):
    st.title("🔐 Imani Console Login")

    col1, col2 = st.columns([1, 1])
    with col1:
        email = st.text_input("Email", value="admin@imani.org")
        password = st.text_input("Password", type="password")
        if st.button("Login", type="primary"):
            candidate = auth.authenticate(email, password)
            if candidate:
                props.actions["login"](candidate)
                st.rerun()
            else:
                st.error("Invalid email or password.")

    with col2:
        st.info(
            "Demo accounts:\n\n"
            "- **admin@imani.org** / admin\n"
            "- **pastor@imani.org** / pastor\n"
            "- **treasurer@imani.org** / treasurer\n"
            "- **member@imani.org** / member"
        )
        c1, c2, c3 = st.columns(3)
        for col, screen in zip((c1, c2, c3), (Screen.PRIVACY, Screen.COMPLIANCE, Screen.SECURITY)):
            if col.button(screen.value.title()):
                props.actions["navigate"](screen)
                st.rerun()


def legal_page(props: ScreenProps):
    titles = {
        Screen.PRIVACY: ("🛡️ Privacy Policy", "Member data is used only for congregation administration."),
        Screen.COMPLIANCE: ("📜 Compliance", "Records follow the Kenya Data Protection Act, 2019."),
        Screen.SECURITY: ("🔒 Security Overview", "Sessions are stored locally and cleared on logout."),
    }
    title, body = titles[props.screen]
    st.header(title)
    st.write(body)
    if st.button("← Back"):
        props.actions["back"]()
        st.rerun()


# ---------- Protected screens ----------

def dashboard_page(props: ScreenProps):
    st.header("📊 Dashboard")
    members, transactions, events = props.data["members"], props.data["transactions"], props.data["events"]

    income = sum(t.amount for t in transactions if t.category == "Income")
    active = sum(1 for m in members if m.status == MemberStatus.ACTIVE)

    c1, c2, c3 = st.columns(3)
    c1.metric("Active members", active)
    c2.metric("Total income (KES)", f"{income:,.2f}")
    c3.metric("Scheduled events", len(events))

    st.divider()
    st.subheader("Recent transactions")
    st.dataframe(utils.transactions_frame(transactions[:10]), use_container_width=True, hide_index=True)

    c1, c2 = st.columns(2)
    if c1.button("Add member"):
        props.actions["navigate"](Screen.MEMBERS)
        st.rerun()
    if c2.button("Send SMS"):
        props.actions["navigate"](Screen.COMMUNICATION)
        st.rerun()


def my_portal_page(props: ScreenProps):
    member = props.data["member"]
    if member is None:
        st.info("No member profile is linked to this account.")
        return
    st.header(f"🙏 Welcome, {member.first_name}")

    transactions = props.data["transactions"]
    st.metric("My giving (KES)", f"{utils.member_giving_total(transactions, member.id):,.2f}")
    st.subheader("My giving history")
    st.dataframe(utils.transactions_frame(transactions), use_container_width=True, hide_index=True)

    attended = [e.title for e in props.data["events"] if member.id in e.attendance]
    st.caption(f"Events attended: {len(attended)}")

    st.subheader("Update my contact details")
    phone = st.text_input("Phone", value=member.phone)
    email = st.text_input("Email", value=member.email)
    location = st.text_input("Location", value=member.location)
    if st.button("Save profile", type="primary"):
        props.actions["update_profile"](replace(member, phone=phone.strip(), email=email.strip(), location=location.strip()))
        st.rerun()


def member_form(props: ScreenProps, existing: Member | None = None):
    st.subheader(f"✏️ Edit Member (ID: {existing.id})" if existing else "➕ Add Member")

    col1, col2, col3 = st.columns(3)
    with col1:
        first_name = st.text_input("First name", value=existing.first_name if existing else "")
        last_name = st.text_input("Last name", value=existing.last_name if existing else "")
        phone = st.text_input("Phone", value=existing.phone if existing else "")
        email = st.text_input("Email", value=existing.email if existing else "")
    with col2:
        location = st.text_input("Location", value=existing.location if existing else "")
        group = st.text_input("Group / Fellowship", value=existing.group if existing else "")
        statuses = list(MemberStatus)
        status = st.selectbox("Status", statuses, index=utils.option_index(statuses, existing.status if existing else None),
                              format_func=lambda s: s.value)
        join_date = st.date_input(
            "Join date", value=utils.parse_iso(existing.join_date) if existing else utils.parse_iso(utils.today_iso())
        ).isoformat()
    with col3:
        maritals, memberships, genders = list(MaritalStatus), list(MembershipType), ["Male", "Female", "Other"]
        marital = st.selectbox(
            "Marital status", maritals, format_func=lambda s: s.value,
            index=utils.option_index(maritals, existing.marital_status if existing else None),
        )
        membership = st.selectbox(
            "Membership type", memberships, format_func=lambda s: s.value,
            index=utils.option_index(memberships, existing.membership_type if existing else None),
        )
        age = st.number_input("Age", min_value=0, max_value=120, value=(existing.age or 0) if existing else 0)
        gender = st.selectbox(
            "Gender", genders, index=utils.option_index(genders, existing.gender if existing else None)
        )

    if not first_name.strip() or not phone.strip():
        st.caption("First name and phone are required.")
        return

    if st.button("Save", type="primary"):
        member = Member(
            id=existing.id if existing else utils.new_id("m"),
            first_name=first_name.strip(), last_name=last_name.strip(), phone=phone.strip(),
            email=email.strip(), location=location.strip(), group=group.strip(), status=status,
            join_date=join_date, marital_status=marital, membership_type=membership,
            age=int(age) or None, gender=gender,
        )
        if existing:
            props.actions["update_member"](member)
            st.session_state.edit_member_id = None
        else:
            props.actions["add_member"](member)
        st.rerun()


def members_page(props: ScreenProps):
    st.header("👥 Membership")
    members = props.data["members"]

    with st.sidebar:
        st.subheader("Search & Filters")
        search = st.text_input("Search (name/phone)")
        status_filter = st.selectbox("Status", ["All"] + [s.value for s in MemberStatus])

    df = utils.members_frame(members)
    if search.strip():
        needle = search.strip().lower()
        mask = (df["first_name"] + " " + df["last_name"]).str.lower().str.contains(needle, regex=False) | df["phone"].str.contains(needle, regex=False)
        df = df[mask]
    if status_filter != "All":
        df = df[df["status"] == status_filter]
    st.dataframe(df, use_container_width=True, hide_index=True)

    st.divider()
    selected_id = st.selectbox("Member ID", options=["(none)"] + df["id"].tolist())
    if selected_id != "(none)":
        c1, c2 = st.columns(2)
        with c1:
            if st.button("Edit"):
                st.session_state.edit_member_id = selected_id
                st.rerun()
        with c2:
            delete_confirm = st.checkbox("Confirm delete", value=False, key="del_confirm")
            if st.button("Delete", type="secondary", disabled=not delete_confirm):
                props.actions["delete_member"](selected_id)
                st.rerun()

    st.divider()
    editing = st.session_state.get("edit_member_id")
    existing = next((m for m in members if m.id == editing), None) if editing else None
    member_form(props, existing=existing)


def groups_page(props: ScreenProps):
    st.header("🧩 Groups")
    st.dataframe(utils.group_counts(props.data["members"]), use_container_width=True, hide_index=True)


def sermons_page(props: ScreenProps):
    st.header("📖 Sermons")
    for e in props.data["events"]:
        st.write(f"**{e.title}** · {e.date} {e.time} · {e.location}")


def finance_page(props: ScreenProps):
    st.header("💳 Finance")
    members = props.data["members"]
    transactions = props.data["transactions"]

    st.subheader("Record transaction")
    options = {f"{m.full_name} - ID {m.id}": m for m in members}
    c1, c2, c3, c4 = st.columns(4)
    with c1:
        label = st.selectbox("Member", list(options.keys()) or ["(no members)"])
        amount = st.text_input("Amount (KES)", value="1000")
    with c2:
        tx_type = st.selectbox("Type", TRANSACTION_TYPES)
        method = st.selectbox("Method", PAYMENT_METHODS)
    with c3:
        tx_date = st.date_input("Date", value=utils.parse_iso(utils.today_iso())).isoformat()
    with c4:
        reference = st.text_input("Reference", value="")

    if st.button("Record", type="primary"):
        member = options.get(label)
        try:
            amt = float(amount)
        except ValueError:
            st.error("Amount must be numeric.")
            return
        if member is None or amt <= 0:
            st.error("Choose a member and an amount > 0.")
            return
        props.actions["add_transaction"](Transaction(
            id=utils.new_id("trx"), member_id=member.id, member_name=member.full_name,
            amount=amt, type=tx_type, payment_method=method, date=tx_date,
            reference=reference.strip() or utils.new_id().upper(),
            category="Expense" if tx_type == "Expense" else "Income",
        ))
        st.rerun()

    st.divider()
    st.subheader("Ledger")
    st.dataframe(utils.transactions_frame(transactions), use_container_width=True, hide_index=True)
    st.subheader("Giving by type")
    st.dataframe(utils.giving_by_type(transactions), use_container_width=True, hide_index=True)


def events_page(props: ScreenProps):
    st.header("📅 Events")
    events, members = props.data["events"], props.data["members"]

    st.dataframe(utils.attendance_summary(events, members), use_container_width=True, hide_index=True)

    with st.expander("➕ Schedule event"):
        title = st.text_input("Title")
        description = st.text_area("Description")
        ev_date = st.date_input("Event date").isoformat()
        ev_time = st.text_input("Time", value="09:00 AM")
        location = st.text_input("Venue", value="Main Sanctuary")
        if st.button("Schedule", disabled=not title.strip()):
            props.actions["add_event"](ChurchEvent(
                id=utils.new_id("ev"), title=title.strip(), description=description.strip(),
                date=ev_date, time=ev_time, location=location.strip(),
            ))
            st.rerun()

    if not events:
        return
    event_labels = {f"{e.title} ({e.date})": e for e in events}
    event = event_labels[st.selectbox("Event", list(event_labels.keys()))]

    st.subheader("Roll-call")
    names = {m.id: m.full_name for m in members}
    present = st.multiselect(
        "Present", options=list(names.keys()), default=[mid for mid in event.attendance if mid in names],
        format_func=lambda mid: names[mid],
    )
    c1, c2 = st.columns(2)
    if c1.button("Save attendance", type="primary"):
        props.actions["set_attendance"](event.id, present)
        st.rerun()
    if c2.button("Delete event"):
        props.actions["delete_event"](event.id)
        st.rerun()


def communication_page(props: ScreenProps):
    st.header("✉️ Communication")
    groups = ["All Members"] + sorted({m.group for m in props.data["members"] if m.group})
    group = st.selectbox("Audience", groups)
    message = st.text_area("Message")
    if st.button("Send broadcast", type="primary", disabled=not message.strip()):
        props.actions["send_broadcast"](message.strip(), group)
        st.rerun()


def reports_page(props: ScreenProps):
    st.header("🧾 Reports")
    members, transactions = props.data["members"], props.data["transactions"]

    st.download_button("Download members.csv", data=utils.to_csv_bytes(utils.members_frame(members)),
                       file_name="members.csv", mime="text/csv")
    st.download_button("Download transactions.csv", data=utils.to_csv_bytes(utils.transactions_frame(transactions)),
                       file_name="transactions.csv", mime="text/csv")

    st.divider()
    st.subheader("Revenue summary by month")
    st.dataframe(utils.revenue_summary_by_month(transactions), use_container_width=True, hide_index=True)
    st.subheader("Attendance")
    st.dataframe(utils.attendance_summary(props.data["events"], members), use_container_width=True, hide_index=True)


def analytics_page(props: ScreenProps):
    st.header("📈 Analytics")
    for name, df in utils.demographics(props.data["members"]).items():
        st.subheader(name.replace("_", " ").title())
        st.bar_chart(df.set_index(df.columns[0]))


def settings_page(props: ScreenProps):
    st.header("⚙️ Settings")
    st.caption(f"{config.church_name()} · {config.church_region()}")
    c1, c2, c3 = st.columns(3)
    for col, screen in zip((c1, c2, c3), (Screen.PRIVACY, Screen.COMPLIANCE, Screen.SECURITY)):
        if col.button(screen.value.title()):
            props.actions["navigate"](screen)
            st.rerun()


SCREENS = {
    Screen.UNAUTHENTICATED: login_screen,
    Screen.PRIVACY: legal_page,
    Screen.COMPLIANCE: legal_page,
    Screen.SECURITY: legal_page,
    Screen.DASHBOARD: dashboard_page,
    Screen.MY_PORTAL: my_portal_page,
    Screen.MEMBERS: members_page,
    Screen.GROUPS: groups_page,
    Screen.SERMONS: sermons_page,
    Screen.FINANCE: finance_page,
    Screen.EVENTS: events_page,
    Screen.COMMUNICATION: communication_page,
    Screen.REPORTS: reports_page,
    Screen.ANALYTICS: analytics_page,
    Screen.SETTINGS: settings_page,
}


def notifications_panel(shell: AppShell):
    props = shell.notification_props()
    with st.sidebar.expander(f"🔔 Notifications ({props.data['unread']})"):
        if props.data["unread"] and st.button("Mark all as read"):
            props.actions["mark_all_read"]()
            st.rerun()
        for n in props.data["notifications"]:
            st.markdown(f"{'' if n.read else '🟣 '}**{n.title}** · {n.time}\n\n{n.message}")
            c1, c2 = st.columns(2)
            if not n.read and c1.button("Read", key=f"read_{n.id}"):
                props.actions["mark_read"](n.id)
                st.rerun()
            if c2.button("Delete", key=f"del_{n.id}"):
                props.actions["delete"](n.id)
                st.rerun()


def sidebar(shell: AppShell):
    session = shell.session.current
    st.sidebar.title("⛪ Imani Console")
    st.sidebar.caption(f"{config.church_region()} • {session.branch} • {config.church_name()}")
    st.sidebar.caption(f"Logged in as: {session.name} ({session.role.value})")

    for screen in nav_for_role(session.role) + [Screen.SETTINGS]:
        if st.sidebar.button(NAV_LABELS[screen], key=f"nav_{screen.value}", use_container_width=True):
            shell.navigate(screen)
            st.rerun()

    branches = list(config.branches())
    branch = st.sidebar.selectbox(
        "Branch", branches, index=branches.index(session.branch) if session.branch in branches else 0
    )
    if branch != session.branch:
        shell.switch_branch(branch)
        st.rerun()

    roles = list(UserRole)
    role = st.sidebar.selectbox("Switch role (demo)", roles, index=roles.index(session.role),
                                format_func=lambda r: r.value)
    if role != session.role:
        shell.switch_role(role)
        st.rerun()

    notifications_panel(shell)

    if st.sidebar.button("Logout"):
        shell.logout()
        st.rerun()


# --------- App entry ---------

def run():
    init_once()
    shell = get_shell()

    if shell.session.is_authenticated:
        sidebar(shell)
    show_toasts(shell)
    shell.render(SCREENS)


if __name__ == "__main__":
    run()
