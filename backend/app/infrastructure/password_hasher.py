"""Password Hashing: salted bcrypt hashes computed off the event loop.

Invariants:
    - Cost factor fixed per process (12 by default)
    - hash() output embeds salt and cost; verify() needs nothing else
    - verify() returns False for malformed stored hashes instead of raising

Design Decisions:
    - bcrypt used directly (no passlib wrapper)
    - asyncio.to_thread: bcrypt is CPU-bound
"""

import asyncio

import bcrypt

# bcrypt only reads the first 72 bytes; newer releases raise on longer input
_MAX_BCRYPT_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:_MAX_BCRYPT_BYTES]


class PasswordHasher:
    def __init__(self, rounds: int = 12):
        self.rounds = rounds

    def hash_sync(self, password: str) -> str:
        return bcrypt.hashpw(_encode(password), bcrypt.gensalt(rounds=self.rounds)).decode("utf-8")

    @staticmethod
    def verify_sync(password: str, password_hash: str) -> bool:
        try:
            return bcrypt.checkpw(_encode(password), password_hash.encode("utf-8"))
        except ValueError:
            return False

    async def hash(self, password: str) -> str:
        return await asyncio.to_thread(self.hash_sync, password)

    async def verify(self, password: str, password_hash: str) -> bool:
        return await asyncio.to_thread(self.verify_sync, password, password_hash)
