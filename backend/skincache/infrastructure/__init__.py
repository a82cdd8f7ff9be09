"""Infrastructure Layer — store, upstream HTTP clients and cross-cutting concerns.

Invariants:
    - Infrastructure implements core/repository_protocols; it never imports services/
    - All external failures mapped to SkinRequestError / StorageError

Design Decisions:
    - Resilient wrappers over raw httpx clients: retry lives here, never in the engine
"""
