"""Refresh-token cleanup: delete stored tokens whose expiry has passed."""

import logging
from datetime import UTC, datetime

from sqlalchemy import delete
from sqlalchemy.orm import Session

from storefront.models import RefreshToken

logger = logging.getLogger(__name__)


def purge_expired_refresh_tokens(session: Session, now: datetime | None = None) -> int:
    """
    Delete refresh_tokens rows with expires_at in the past. Returns rows deleted.

    Rows without expires_at are left alone. Idempotent: safe to run repeatedly.
    """
    cutoff = now or datetime.now(UTC)
    result = session.execute(
        delete(RefreshToken).where(
            RefreshToken.expires_at.is_not(None),
            RefreshToken.expires_at < cutoff,
        )
    )
    session.commit()
    deleted_count = result.rowcount or 0
    if deleted_count > 0:
        logger.info(
            "Refresh token purge: cutoff=%s, tokens_deleted=%s",
            cutoff.isoformat(),
            deleted_count,
        )
    return deleted_count
