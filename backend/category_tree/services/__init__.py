"""Services Layer — repository, cascade, reparent coordination, and the category service.

Invariants:
    - Services own transaction boundaries (atomic()); the repository never commits
    - Pure decisions delegated to core/, services only do IO around them

Design Decisions:
    - One file per component for locality (repository, cascader, coordinator, service)
"""
