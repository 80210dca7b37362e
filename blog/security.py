"""Password hashing (argon2id)."""

from __future__ import annotations

from argon2 import PasswordHasher as _Argon2Hasher, exceptions as argon_exc

from blog.config import settings


class PasswordHasher:
    """
    One-way salted hashing for account passwords.

    Every call to :meth:`hash` draws a fresh salt, so hashing the same
    plaintext twice yields different digests; :meth:`matches` re-hashes the
    candidate with the salt and parameters embedded in the digest and
    compares in constant time.
    """

    def __init__(
        self,
        time_cost: int = 3,
        memory_cost: int = 65536,
        parallelism: int = 4,
    ) -> None:
        self._ph = _Argon2Hasher(
            time_cost=time_cost,
            memory_cost=memory_cost,
            parallelism=parallelism,
        )

    @classmethod
    def from_settings(cls) -> "PasswordHasher":
        return cls(
            time_cost=settings.PASSWORD_HASH_TIME_COST,
            memory_cost=settings.PASSWORD_HASH_MEMORY_COST,
            parallelism=settings.PASSWORD_HASH_PARALLELISM,
        )

    def hash(self, plaintext: str) -> str:
        return self._ph.hash(plaintext)

    def matches(self, plaintext: str, digest: str | None) -> bool:
        """Return True only if *plaintext* produced *digest*. Never raises."""
        if not digest:
            return False
        try:
            return self._ph.verify(digest, plaintext)
        except (argon_exc.VerificationError, argon_exc.InvalidHashError):
            return False


# Module-level instance shared by the account service and the login route.
password_hasher = PasswordHasher.from_settings()
