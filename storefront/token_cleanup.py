"""
CLI entrypoint for the refresh-token cleanup job. Run from cron, e.g.:

  python -m storefront.token_cleanup

Or daily: 0 3 * * * cd /path/to/storefront && .venv/bin/python -m storefront.token_cleanup
"""

import logging
import sys

from storefront.core.config import get_settings
from storefront.core.database import SessionLocal
from storefront.core.logging_config import setup_logging
from storefront.services.token_cleanup import purge_expired_refresh_tokens

logger = logging.getLogger(__name__)


def main() -> int:
    """Delete refresh tokens whose expiry has passed."""
    setup_logging(get_settings().LOG_LEVEL)
    db = SessionLocal()
    try:
        deleted = purge_expired_refresh_tokens(db)
        logger.info("Token cleanup completed: tokens_deleted=%s", deleted)
        return 0
    except Exception as e:
        logger.exception("Token cleanup failed: %s", e)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
