"""Core Layer — pure domain logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Boundary contracts (repository_protocols) are the only async definitions here

Design Decisions:
    - Functional core separated from imperative shell: staleness, validation and
      pool selection are testable without fakes
"""
