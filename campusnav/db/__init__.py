"""
Database module - engine, session and table definitions.
"""
from campusnav.db.database import get_db_session, init_schema, test_database_connection

__all__ = [
    "get_db_session",
    "init_schema",
    "test_database_connection",
]
