"""
Table definitions.

Declared with SQLAlchemy Core so the same schema can be created on
PostgreSQL and on SQLite. Queries elsewhere use text() SQL against
these tables.

- users: credential store (email is unique)
- buildings: read-only seed data
- courses: one row per course in a user's schedule
- meetings: time slots of a course; days stored as "Mon,Wed,Fri"
"""

from sqlalchemy import (
    Column, Float, ForeignKey, Integer, MetaData, String, Table, Text, DateTime, func
)

metadata = MetaData()

users = Table(
    "users", metadata,
    Column("id", Integer, primary_key=True),
    Column("email", String(255), nullable=False, unique=True),
    Column("password_hash", String(255), nullable=False),
    Column("created_at", DateTime, server_default=func.current_timestamp()),
)

buildings = Table(
    "buildings", metadata,
    Column("id", Integer, primary_key=True),
    Column("code", String(20)),
    Column("name", String(200), nullable=False),
    Column("address", String(255)),
    Column("lat", Float),
    Column("long", Float),
    Column("description", Text),
)

courses = Table(
    "courses", metadata,
    Column("id", Integer, primary_key=True),
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True),
    Column("title", String(255), nullable=False),
    Column("building_id", Integer, ForeignKey("buildings.id", ondelete="SET NULL")),
)

meetings = Table(
    "meetings", metadata,
    Column("id", Integer, primary_key=True),
    Column("course_id", Integer, ForeignKey("courses.id", ondelete="CASCADE"), nullable=False, index=True),
    Column("days", String(64), nullable=False, default=""),
    Column("start_time", String(5), nullable=False),
    Column("end_time", String(5), nullable=False),
    Column("room", String(64)),
)
