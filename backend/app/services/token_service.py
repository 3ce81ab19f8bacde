import logging
import secrets
from typing import Optional, Tuple

from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.security import create_token, decode_token
from app.models.access_token import AccessToken
from app.models.user import User


logger = logging.getLogger(__name__)


def issue_token(db: Session, user: User, name: str = "auth_token") -> str:
    """Store a new session row for ``user`` and return the bearer JWT that points at it."""
    token_id = secrets.token_hex(32)
    db.add(AccessToken(user_id=user.id, name=name, token=token_id))
    db.commit()
    return create_token(str(user.id), token_id, settings.access_token_expire_minutes)


def resolve_token(db: Session, raw_token: str) -> Optional[Tuple[User, AccessToken]]:
    payload = decode_token(raw_token)
    if not payload or payload.get("type") != "access":
        return None
    token_id = payload.get("jti")
    subject = payload.get("sub")
    if not token_id or not subject or not str(subject).isdigit():
        return None

    row = (
        db.query(AccessToken, User)
        .join(User, User.id == AccessToken.user_id)
        .filter(AccessToken.token == token_id, User.id == int(subject))
        .first()
    )
    if not row:
        return None
    access_token, user = row
    return user, access_token


def revoke_all(db: Session, user: User) -> int:
    """Delete every session of ``user``; returns how many were revoked."""
    revoked = (
        db.query(AccessToken)
        .filter(AccessToken.user_id == user.id)
        .delete(synchronize_session=False)
    )
    db.commit()
    logger.info("Revoked %s token(s) for user_id=%s", revoked, user.id)
    return revoked
