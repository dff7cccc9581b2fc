"""Wildwatch API package — camera-trap devices, events, projects and field records.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
