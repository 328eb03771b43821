"""API Layer — FastAPI routes and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return JSON; every error body is {"message": str}

Design Decisions:
    - Thin routes delegate to services (ADR: impureim sandwich)
"""
