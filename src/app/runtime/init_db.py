"""Database initialization script."""

from src.app.core.services import DbManageService, DbSessionService


def init_db() -> None:
    """Create all database tables."""
    database_service = DbSessionService()
    try:
        DbManageService(database_service).create_all()
    finally:
        database_service.dispose()


if __name__ == "__main__":
    init_db()
