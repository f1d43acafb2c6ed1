"""Pydantic Schemas — typed records for API payloads and responses.

Invariants:
    - Schemas are built only from payloads that already passed core/book_validation.py
    - Unknown keys are dropped on construction (allow-list projection)

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence (ADR: DDD boundary)
"""
