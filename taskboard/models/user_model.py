from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from taskboard.utils.db import serialize_doc, utcnow

PUBLIC_FIELDS = {
    "id": "_id",
    "email": "email",
    "name": "name",
    "createdAt": "created_at",
    "updatedAt": "updated_at",
}


@dataclass
class User:
    email: str
    name: str
    password_hash: str = field(repr=False)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)
    id: Optional[str] = None

    @classmethod
    def from_doc(cls, doc):
        return cls(
            id=str(doc["_id"]),
            email=doc["email"],
            name=doc["name"],
            password_hash=doc["password_hash"],
            created_at=doc["created_at"],
            updated_at=doc["updated_at"],
        )

    def to_doc(self):
        return {
            "email": self.email,
            "name": self.name,
            "password_hash": self.password_hash,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    def to_public(self):
        # The hash never leaves the service
        return serialize_doc({"_id": self.id, **self.to_doc()}, PUBLIC_FIELDS)
