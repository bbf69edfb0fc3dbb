from booking_api.db.base import Base
from booking_api.db.session import Database, get_db

__all__ = ["Base", "Database", "get_db"]
