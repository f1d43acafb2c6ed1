"""Infrastructure Layer — database connection ownership and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from api/ or services/
    - Driver exceptions are translated to core/errors.py types here

Design Decisions:
    - One owner for the connection pool (ADR: explicit lifecycle, no import-time engine)
"""
