"""Pydantic Schemas — request/response shapes for the HTTP API.

Invariants:
    - Schemas check JSON shape only; domain rules stay in core/domain_types.py

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
