"""Boundary Protocols: contracts between services and infrastructure.

Invariants:
    - Services depend on these Protocols, never on concrete SMTP/bcrypt classes
    - Implementations provided at startup via app.state and FastAPI dependencies

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
"""

from typing import Protocol


class Notifier(Protocol):
    """Delivers the one-time verification link. Returns False when not delivered."""
    async def send_verification(self, to: str, name: str | None, link: str) -> bool: ...


class PasswordHashing(Protocol):
    async def hash(self, password: str) -> str: ...
    async def verify(self, password: str, password_hash: str) -> bool: ...
