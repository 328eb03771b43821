"""Infrastructure Layer — database access and cross-cutting concerns.

Invariants:
    - Driver exceptions never leave this layer untranslated

Design Decisions:
    - Repository + session manager split: queries in one place, lifecycle in another
"""
