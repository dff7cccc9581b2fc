"""Pydantic Schemas — request validation at the API boundary.

Invariants:
    - Bodies are validated before any handler logic runs
    - Response bodies are plain dicts shaped by services/ mappers
"""
