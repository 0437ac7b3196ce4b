"""Database Infrastructure: SQLAlchemy Base shared by the ORM models and Alembic.

Invariants:
    - Single async engine per process (owned by infrastructure/database.py)

Design Decisions:
    - asyncpg driver for PostgreSQL, aiosqlite in tests: same ORM code on both
"""
