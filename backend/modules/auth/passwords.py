"""
Password hashing.

bcrypt with a fixed cost factor. Hashing is CPU-bound, so the async
variants push the work onto a worker thread and keep the event loop free
for other requests.
"""

import asyncio

import bcrypt

DEFAULT_ROUNDS = 10


class PasswordHasher:
    """Salted one-way password hashing and verification."""

    def __init__(self, rounds: int = DEFAULT_ROUNDS):
        self._rounds = rounds

    @property
    def rounds(self) -> int:
        return self._rounds

    def hash(self, plaintext: str) -> str:
        """Hash a plaintext password with a fresh salt."""
        salt = bcrypt.gensalt(rounds=self._rounds)
        return bcrypt.hashpw(plaintext.encode("utf-8"), salt).decode("utf-8")

    def verify(self, plaintext: str, digest: str | None) -> bool:
        """
        Check a plaintext password against a stored digest.

        bcrypt.checkpw compares in constant time. A missing or malformed
        digest never matches.
        """
        if not plaintext or not digest:
            return False
        try:
            return bcrypt.checkpw(plaintext.encode("utf-8"), digest.encode("utf-8"))
        except ValueError:
            return False

    async def hash_async(self, plaintext: str) -> str:
        return await asyncio.to_thread(self.hash, plaintext)

    async def verify_async(self, plaintext: str, digest: str | None) -> bool:
        return await asyncio.to_thread(self.verify, plaintext, digest)
