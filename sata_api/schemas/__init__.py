"""Pydantic Schemas: request/response validation for API endpoints.

Invariants:
    - Schemas validate at the system boundary (request bodies, responses)
    - Wire format is camelCase; Python attributes are snake_case
    - Domain enums from core/ used for tag fields
"""
