"""
Application state management for FastAPI.

Holds shared state across the application:
- Settings
- Database engine
- Session factory
"""

import logging
from datetime import datetime
from typing import Optional

from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from bet_tracker.config.settings import Settings, get_settings
from bet_tracker.database.models import get_engine, get_session_factory, init_db

logger = logging.getLogger(__name__)


class AppState:
    """
    Centralized application state.

    Initializes and manages the lifecycle of the database components.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings
        self.engine: Optional[Engine] = None
        self.session_factory: Optional[sessionmaker] = None
        self._initialized = False
        self._started_at: Optional[datetime] = None

    def initialize(self) -> None:
        """Load settings, connect to the database and create missing tables."""
        if self._initialized:
            return

        if self.settings is None:
            self.settings = get_settings()
        logger.info("Settings loaded")

        self.engine = get_engine(self.settings.database_url)
        init_db(self.engine)
        self.session_factory = get_session_factory(self.engine)
        logger.info("Database initialized")

        self._initialized = True
        self._started_at = datetime.now()

    def shutdown(self) -> None:
        """Release pooled connections."""
        if self.engine is not None:
            self.engine.dispose()
            logger.info("Database engine disposed")
        self._initialized = False

    def new_session(self) -> Session:
        if self.session_factory is None:
            raise RuntimeError("Application state is not initialized")
        return self.session_factory()

    def database_ok(self) -> bool:
        """Run a trivial query to confirm the database answers."""
        if self.engine is None:
            return False
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"Database check failed: {e}")
            return False

    def get_health_status(self) -> dict:
        """Get health status of all components."""
        return {
            "initialized": self._initialized,
            "settings": self.settings is not None,
            "database": self.database_ok(),
            "demo_mode": bool(self.settings and self.settings.demo_mode),
            "started_at": self._started_at.isoformat() if self._started_at else None,
        }
