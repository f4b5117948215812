"""Authentication service layer."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from flask_jwt_extended import (
    create_access_token,
    create_refresh_token,
    decode_token,
)
from sqlalchemy import func

from moodjournal.core.auth.models import JWTBlocklist, SessionToken
from moodjournal.core.auth.password import hash_password, verify_password
from moodjournal.core.auth.schemas import RegisterRequest
from moodjournal.core.users.models import User
from moodjournal.extensions import db

logger = logging.getLogger(__name__)


def authenticate_user(email: str, password: str) -> Optional[User]:
    """Return the user if credentials are valid."""
    user = User.query.filter(func.lower(User.email) == email.strip().lower()).first()
    if not user or not user.is_active:
        return None
    if not verify_password(password, user.password_hash):
        return None
    return user


def issue_tokens(user: User) -> dict[str, str]:
    """Create access and refresh tokens for a user."""
    identity = str(user.id)
    access_token = create_access_token(identity=identity)
    refresh_token = create_refresh_token(identity=identity)

    # Persist refresh jti for revocation checks
    decoded_refresh = decode_token(refresh_token)
    expires = decoded_refresh.get("exp")
    db.session.add(
        SessionToken(
            user_id=user.id,
            jti=decoded_refresh.get("jti"),
            expires_at=datetime.utcfromtimestamp(expires) if expires else None,
        )
    )
    db.session.commit()

    return {"access_token": access_token, "refresh_token": refresh_token}


def revoke_refresh_token(jti: str, user_id: Optional[int] = None) -> None:
    """Revoke a refresh token by JTI."""
    token = SessionToken.query.filter_by(jti=jti).first()
    if token:
        token.revoked = True
    if not JWTBlocklist.query.filter_by(jti=jti).first():
        db.session.add(JWTBlocklist(jti=jti, created_by=user_id))
    db.session.commit()
    logger.info("Revoked refresh token for user %s", user_id)


def is_token_revoked(jti: Optional[str]) -> bool:
    if not jti:
        return False
    return db.session.query(JWTBlocklist.id).filter_by(jti=jti).first() is not None


def register_user(payload: RegisterRequest, auto_issue_tokens: bool = False) -> dict:
    """Create a user account; optionally log it in straight away."""
    normalized_email = payload.email.strip().lower()
    existing = User.query.filter(func.lower(User.email) == normalized_email).first()
    if existing:
        raise ValueError("email_already_exists")

    user = User(
        email=normalized_email,
        full_name=(payload.full_name or "").strip() or None,
        password_hash=hash_password(payload.password),
    )
    db.session.add(user)
    db.session.commit()
    logger.info("Registered user %s", user.id)

    tokens = issue_tokens(user) if auto_issue_tokens else {}
    return {"user": user, **tokens}
