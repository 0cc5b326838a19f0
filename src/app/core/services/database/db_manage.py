"""Schema management for the application database."""

from loguru import logger
from sqlmodel import SQLModel

from src.app.core.services.database.db_session import DbSessionService


class DbManageService:
    def __init__(self, database_service: DbSessionService):
        self._database_service = database_service

    def create_all(self) -> None:
        """Create all database tables."""
        from src.app.entities.core.user import UserTable  # noqa: F401

        SQLModel.metadata.create_all(self._database_service.engine)
        logger.info("Database initialized with tables.")

    def drop_all(self) -> None:
        """Drop all database tables."""
        from src.app.entities.core.user import UserTable  # noqa: F401

        SQLModel.metadata.drop_all(self._database_service.engine)
        logger.warning("Database tables dropped.")
