"""Services Layer — orchestration of store, identity service and image skin service.

Invariants:
    - Services talk to IO only through core/repository_protocols
    - Collaborator failures are converted to SkinErrorKind at the point of use

Design Decisions:
    - One engine class, one pool manager: the pool is the only shared mutable state
"""
