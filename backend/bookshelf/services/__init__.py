"""Services Layer — the book resource handler.

Invariants:
    - Services depend on repository protocols, never on SQLAlchemy directly

Design Decisions:
    - One service per resource for locality
"""
