"""Create all tables. Run on app startup."""
import logging

from bloodbank.db.base import Base
from bloodbank.db.session import engine
from bloodbank import models  # noqa: F401 - register models

logger = logging.getLogger(__name__)


def init_db(bind=None):
    target = bind if bind is not None else engine
    Base.metadata.create_all(bind=target)
    logger.info(f"Database schema ready ({len(Base.metadata.tables)} tables)")
