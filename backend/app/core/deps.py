import logging
from typing import Optional

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.errors import AuthError
from app.models.user import User
from app.services.token_service import resolve_token


logger = logging.getLogger(__name__)


def get_current_user(
    db: Session = Depends(get_db),
    authorization: Optional[str] = Header(None),
) -> User:
    """Authenticated user for protected routes; anything else is a 401 before the handler runs."""
    if not authorization:
        logger.debug("Rejected request without Authorization header")
        raise AuthError()
    scheme, _, token = authorization.partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        logger.debug("Rejected malformed Authorization header")
        raise AuthError()

    resolved = resolve_token(db, token)
    if not resolved:
        logger.debug("Rejected unknown or revoked token")
        raise AuthError()
    user, _ = resolved
    return user
