"""Database Declarative Base — shared by the ORM models of the relational backend.

Design Decisions:
    - aiosqlite by default, asyncpg when DATABASE_URL points at PostgreSQL
"""
