import logging

from app.db.base import Base
from app.db.session import engine as default_engine

logger = logging.getLogger(__name__)


def init_db(bind=None) -> None:
    """Create any missing tables. Schema changes on existing databases go through alembic."""
    bind = bind or default_engine
    Base.metadata.create_all(bind=bind)
    logger.info("Database ready (%d tables)", len(Base.metadata.tables))
