"""Pydantic Schemas: request/response validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (user input, API responses)
    - Wire names are camelCase (categoryId, emailVerified); Python names stay snake_case
    - Money leaves the API as a JSON number, enters as Decimal

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
    - Responses built explicitly from ORM rows (from_model), no lazy attribute access
"""
