"""ORM model for persisted refresh tokens: one live token per user."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String

from storefront.models.base import Base


class RefreshToken(Base):
    """
    Server-side record of a user's current refresh token.

    user_id is the primary key, so a new login overwrites the previous token.
    A token not present here is invalid regardless of its signature.
    """

    __tablename__ = "refresh_tokens"

    user_id = Column(
        Integer,
        ForeignKey("users.account_id", ondelete="CASCADE"),
        primary_key=True,
    )
    token = Column(String(512), nullable=False, index=True)
    expires_at = Column(DateTime(timezone=True), nullable=True, index=True)
