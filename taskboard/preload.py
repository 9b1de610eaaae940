"""
CLI entrypoint for loading bootstrap data (seeded roles, permissions, admin user):

  python -m taskboard.preload

Safe to re-run; the app also runs it at startup when PRELOAD_ENABLED is true.
"""

import logging
import sys

from taskboard.core.config import get_settings
from taskboard.core.database import SessionLocal, init_db
from taskboard.services.preload import run_preload

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def main() -> int:
    """Create tables if needed, then the seeded roles/permissions and admin user."""
    settings = get_settings()
    init_db()
    db = SessionLocal()
    try:
        admin = run_preload(db, settings)
        logger.info("Preload completed: admin_created=%s", admin is not None)
        return 0
    except Exception as e:
        logger.exception("Preload failed: %s", e)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
