"""Database Infrastructure — declarative Base and dialect-aware SQL constructs.

Invariants:
    - Single async engine per process (initialized via init_db)
    - JSON aggregation compiles for both PostgreSQL and SQLite
"""
