"""Abstract interface (port) for password hashing."""

from abc import ABC, abstractmethod


class PasswordHasher(ABC):

    @abstractmethod
    def hash(self, password: str) -> str:
        ...

    @abstractmethod
    def verify(self, password: str, hashed: str) -> bool:
        """Constant-time check; never raises for malformed hashes."""
        ...
