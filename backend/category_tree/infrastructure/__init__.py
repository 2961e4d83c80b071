"""Infrastructure Layer — database sessions, scoped transactions, structured logging.

Invariants:
    - Infrastructure never imports core/ domain logic (errors excepted)
    - Every SQLAlchemy failure is mapped to a typed error from core/errors.py

Design Decisions:
    - Resilient wrappers over the raw engine/session (single responsibility)
"""
