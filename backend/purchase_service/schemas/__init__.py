"""Pydantic Schemas: request/response shapes for the HTTP API.

Invariants:
    - Schemas check types at the boundary; business rules live in core/validate_purchase.py
    - Decimal fields serialize as JSON strings (exact cents, no float drift)

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
