"""Account registration, login and identity resolution.

The service orchestrates the password hasher, the user store and whichever
identity proof provider the deployment runs with. Everything it needs is
handed to the constructor at startup.
"""

import logging
from dataclasses import dataclass

from taskboard.errors import AuthError, ConflictError
from taskboard.models.user_model import User
from taskboard.utils.identity import IdentityProof
from taskboard.utils.validation import (
    normalize_email,
    require_fields,
    validate_name,
    validate_password,
)

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "invalid email or password"


@dataclass
class AuthResult:
    user: dict
    proof: IdentityProof


class AuthService:
    def __init__(self, users, hasher, proofs, password_min_length=6):
        self.users = users
        self.hasher = hasher
        self.proofs = proofs
        self.password_min_length = password_min_length

    def signup(self, email, password, name) -> AuthResult:
        """Register a new account and sign it in.

        Raises:
            ValidationError: a field is missing or malformed.
            ConflictError: the email is already registered, in any letter case.
        """
        require_fields(email=email, password=password, name=name)
        email = normalize_email(email)
        validate_password(password, self.password_min_length)
        name = validate_name(name)

        if self.users.find_by_email(email):
            raise ConflictError("email already exists")

        user = self.users.insert(User(email=email, name=name, password_hash=self.hasher.hash(password)))
        logger.info("Registered user %s", user.id)
        return AuthResult(user=user.to_public(), proof=self.proofs.issue(user.id))

    def login(self, email, password) -> AuthResult:
        """Check credentials and issue a fresh identity proof.

        Unknown emails and wrong passwords fail with the same AuthError.
        """
        require_fields(email=email, password=password)
        if not isinstance(email, str) or not isinstance(password, str):
            raise AuthError(INVALID_CREDENTIALS)

        user = self.users.find_by_email(email.strip())
        if user is None:
            self.hasher.verify_dummy(password)
            logger.info("Failed login for unknown email")
            raise AuthError(INVALID_CREDENTIALS)
        if not self.hasher.verify(password, user.password_hash):
            logger.info("Failed login for user %s", user.id)
            raise AuthError(INVALID_CREDENTIALS)

        return AuthResult(user=user.to_public(), proof=self.proofs.issue(user.id))

    def logout(self, proof_value):
        self.proofs.revoke(proof_value)

    def authenticate(self, proof_value) -> str:
        """Resolve a raw proof to the user id it was issued for."""
        user_id = self.proofs.verify(proof_value)
        if not user_id:
            raise AuthError("Not authenticated")
        return user_id

    def get_profile(self, proof_value) -> dict:
        user_id = self.authenticate(proof_value)
        user = self.users.find_by_id(user_id)
        if user is None:
            # A still-valid proof for an account that is gone
            logger.warning("Identity proof refers to missing user %s", user_id)
            raise AuthError("Not authenticated")
        return user.to_public()
