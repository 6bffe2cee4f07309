"""API Layer: FastAPI routes, session guard, dependencies and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return camelCase JSON; errors are {"error", "code"}

Design Decisions:
    - Thin routes delegate to services; services never see Request/Response
"""
