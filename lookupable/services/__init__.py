from .database_service import DatabaseService

__all__ = [
    "DatabaseService",
]
