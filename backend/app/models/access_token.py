from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, UniqueConstraint

from app.models.user import Base


class AccessToken(Base):
    """One login session. The JWT handed to the client carries ``token`` as its jti."""

    __tablename__ = "personal_access_tokens"
    __table_args__ = (UniqueConstraint("token", name="uq_personal_access_tokens_token"),)

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(255), nullable=False, default="auth_token")
    token = Column(String(64), nullable=False, index=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
