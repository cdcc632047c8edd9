"""bcrypt-backed implementation of the PasswordHasher port."""

import bcrypt

from identity_srv.application.interfaces import PasswordHasher


class BcryptPasswordHasher(PasswordHasher):
    """Hashes passwords with bcrypt; the cost factor is configurable."""

    def __init__(self, rounds: int = 12):
        self._rounds = rounds

    def hash(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self._rounds)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

    def verify(self, password: str, hashed: str) -> bool:
        if not hashed:
            return False
        try:
            return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
        except (ValueError, UnicodeDecodeError, UnicodeEncodeError):
            # Malformed hash or unencodable input
            return False
