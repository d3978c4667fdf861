"""One-way password hashing backed by bcrypt."""

import bcrypt

# bcrypt only looks at the first 72 bytes of its input
MAX_PASSWORD_BYTES = 72


class PasswordHasher:
    def __init__(self, rounds=10):
        self.rounds = rounds
        # Compared against when a login names an unknown account, so that
        # path costs the same as a wrong password.
        self._dummy_hash = self.hash("not-a-real-password")

    def hash(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

    def verify(self, password: str, hashed: str) -> bool:
        """Constant-time comparison of ``password`` against a stored hash.

        Malformed hashes and over-long passwords never match.
        """
        if not password or not hashed:
            return False
        try:
            return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
        except ValueError:
            return False

    def verify_dummy(self, password: str) -> bool:
        self.verify(password, self._dummy_hash)
        return False
