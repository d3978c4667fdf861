"""Identity proofs: how a request shows which user it acts for.

Two interchangeable providers exist and a deployment picks exactly one
through ``AUTH_MODE``:

* ``TokenProofProvider`` issues signed JWTs (via flask-jwt-extended) carried
  in an ``Authorization: Bearer`` header. Tokens are self-contained, so they
  cannot be revoked before they expire.
* ``SessionProofProvider`` keeps a server-side session row and hands the
  browser an opaque id in an httpOnly cookie. Revoking deletes the row.

A proof from one provider means nothing to the other.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

import jwt
from flask_jwt_extended import create_access_token, decode_token
from flask_jwt_extended.exceptions import JWTExtendedException

from taskboard.stores.session_store import SessionStore
from taskboard.utils.db import serialize_value, utcnow

logger = logging.getLogger(__name__)


@dataclass
class IdentityProof:
    value: str
    user_id: str
    expires_at: datetime


class IdentityProofProvider(ABC):
    mode = None

    @abstractmethod
    def issue(self, user_id: str) -> IdentityProof:
        """Create a fresh proof bound to ``user_id``."""

    @abstractmethod
    def verify(self, value: Optional[str]) -> Optional[str]:
        """Return the user id a proof stands for, or None if it is not valid."""

    @abstractmethod
    def revoke(self, value: Optional[str]) -> None:
        """Invalidate a proof. Idempotent."""

    @abstractmethod
    def extract(self, request) -> Optional[str]:
        """Pull the raw proof out of an incoming request."""

    def ensure_indexes(self) -> None:
        pass

    def attach(self, response, proof: IdentityProof) -> None:
        pass

    def detach(self, response) -> None:
        pass

    def body(self, proof: IdentityProof) -> dict:
        """Fields describing ``proof`` that are safe to put in a response body."""
        return {}


class TokenProofProvider(IdentityProofProvider):
    mode = "token"

    def __init__(self, expires: timedelta, identity_claim: str = "sub"):
        self.expires = expires
        self.identity_claim = identity_claim

    def issue(self, user_id):
        token = create_access_token(identity=user_id, expires_delta=self.expires)
        return IdentityProof(value=token, user_id=user_id, expires_at=utcnow() + self.expires)

    def verify(self, value):
        if not value:
            return None
        try:
            claims = decode_token(value)
        except (jwt.PyJWTError, JWTExtendedException) as exc:
            logger.debug("Rejected access token: %s", exc)
            return None
        if claims.get("type", "access") != "access":
            return None
        return claims.get(self.identity_claim) or None

    def revoke(self, value):
        # Stateless: the client is responsible for discarding the token
        logger.debug("Logout in token mode; token stays valid until it expires")

    def extract(self, request):
        header = request.headers.get("Authorization", "")
        scheme, _, token = header.partition(" ")
        if scheme.lower() != "bearer" or not token.strip():
            return None
        return token.strip()

    def body(self, proof):
        return {"token": proof.value, "expiresAt": serialize_value(proof.expires_at)}


class SessionProofProvider(IdentityProofProvider):
    mode = "session"

    def __init__(self, store, lifetime: timedelta, cookie_name="todo.sid", secure=True, samesite="Lax"):
        self.store = store
        self.lifetime = lifetime
        self.cookie_name = cookie_name
        self.secure = secure
        self.samesite = samesite

    def issue(self, user_id):
        session_id, expires_at = self.store.create(user_id, self.lifetime)
        return IdentityProof(value=session_id, user_id=user_id, expires_at=expires_at)

    def ensure_indexes(self):
        self.store.ensure_indexes()

    def verify(self, value):
        if not value:
            return None
        return self.store.get_user_id(value)

    def revoke(self, value):
        if value:
            self.store.delete(value)

    def extract(self, request):
        return request.cookies.get(self.cookie_name) or None

    def attach(self, response, proof):
        response.set_cookie(
            self.cookie_name,
            proof.value,
            max_age=int(self.lifetime.total_seconds()),
            path="/",
            secure=self.secure,
            httponly=True,
            samesite=self.samesite,
        )

    def detach(self, response):
        response.delete_cookie(
            self.cookie_name,
            path="/",
            secure=self.secure,
            httponly=True,
            samesite=self.samesite,
        )


def build_provider(config, db):
    """Pick the provider named by ``AUTH_MODE``."""
    mode = config["AUTH_MODE"]
    if mode == TokenProofProvider.mode:
        return TokenProofProvider(
            expires=config["JWT_ACCESS_TOKEN_EXPIRES"],
            identity_claim=config.get("JWT_IDENTITY_CLAIM", "sub"),
        )
    if mode == SessionProofProvider.mode:
        return SessionProofProvider(
            SessionStore(db),
            lifetime=config["SESSION_LIFETIME"],
            cookie_name=config["SESSION_COOKIE_NAME"],
            secure=config["AUTH_COOKIE_SECURE"],
            samesite=config["AUTH_COOKIE_SAMESITE"],
        )
    raise ValueError(f"Unknown AUTH_MODE {mode!r}; expected 'token' or 'session'")
