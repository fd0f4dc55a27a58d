from .base import Base, TimestampMixin
from .session import Database, database, get_db

__all__ = ["Base", "TimestampMixin", "Database", "database", "get_db"]
