"""Services Layer: per-request units of work over an AsyncSession.

Invariants:
    - Each service takes its AsyncSession (and collaborators) in __init__
    - Services raise LedgerError subclasses; the API layer maps them to responses
    - Every multi-step write commits once
"""
