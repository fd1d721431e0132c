"""
CampusNav
Campus navigation backend and client with personal class schedules.

Architecture:
- PostgreSQL: Users, buildings, courses and meetings
- FastAPI: Thin REST API over the relational store
- Client: Schedule editor with a locally persisted draft
"""

__version__ = "1.0.0"
__author__ = "CampusNav Team"
