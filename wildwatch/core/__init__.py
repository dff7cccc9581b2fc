"""Core Layer — pure request logic, no IO, no async, no DB sessions.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Query construction returns SQLAlchemy expressions; execution happens in services/
"""
