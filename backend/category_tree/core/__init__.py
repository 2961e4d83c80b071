"""Core Layer — pure tree logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - All functions are pure and deterministic

Design Decisions:
    - Functional core separated from imperative shell: ancestry computation,
      reparent planning and tree assembly are unit-testable without a store
"""
