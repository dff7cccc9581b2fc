"""Services Layer — one data-access module per resource.

Invariants:
    - Every statement is parameterized (SQLAlchemy Core expressions)
    - Lookups return None / False for missing rows; routes decide the HTTP status
    - Multi-statement writes run inside a single session.begin() block
"""
