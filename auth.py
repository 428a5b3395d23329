"""
auth.py
Login provider: bcrypt-verified demo accounts that hand a candidate Session to
the session store. The console core trusts whatever this module returns.
"""

from __future__ import annotations

import bcrypt

import config
import db
from logger import get_logger
from models import Session, UserRole

log = get_logger("auth")


def _to_bcrypt_secret(password: str) -> bytes:
    """
    bcrypt only uses the first 72 BYTES of the password.
    We truncate to 72 bytes to avoid ValueError and to make behavior explicit.
    """
    pw = password.encode("utf-8")
    if len(pw) > 72:
        pw = pw[:72]
    return pw


def hash_password(password: str) -> str:
    """
    Returns a bcrypt hash as a UTF-8 string (stored in SQLite).
    """
    secret = _to_bcrypt_secret(password)
    salt = bcrypt.gensalt(rounds=config.bcrypt_rounds())
    hashed = bcrypt.hashpw(secret, salt)
    return hashed.decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    secret = _to_bcrypt_secret(password)
    stored = password_hash.encode("utf-8")
    return bcrypt.checkpw(secret, stored)


def get_user_by_email(email: str):
    return db.fetch_one("SELECT * FROM users WHERE email = ?", (email.strip().lower(),))


def register_user(
    user_id: str,
    email: str,
    password: str,
    name: str,
    role: UserRole,
    avatar: str = "",
    member_id: str | None = None,
) -> None:
    db.insert_user(
        user_id,
        email.strip().lower(),
        hash_password(password),
        name,
        UserRole(role).value,
        avatar,
        member_id,
    )


def authenticate(email: str, password: str) -> Session | None:
    """Candidate session for valid credentials, None otherwise (branch left for the store)."""
    user = get_user_by_email(email)
    if not user or not verify_password(password, user["password_hash"]):
        log.info("failed login for %s", email)
        return None
    return Session(
        id=user["id"],
        name=user["name"],
        role=UserRole(user["role"]),
        avatar=user["avatar"],
        member_id=user["member_id"],
    )
