from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from taskboard.utils.db import serialize_value, utcnow

STATUSES = ("pending", "completed", "deleted")
PRIORITIES = ("low", "medium", "high")

STATUS_DELETED = "deleted"


@dataclass
class Task:
    title: str
    user_id: str
    description: Optional[str] = None
    status: str = "pending"  # pending | completed | deleted
    priority: str = "medium"  # low | medium | high
    due_date: Optional[datetime] = None
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)
    id: Optional[str] = None

    @classmethod
    def from_doc(cls, doc):
        return cls(
            id=str(doc["_id"]),
            user_id=doc["user_id"],
            title=doc["title"],
            description=doc.get("description"),
            status=doc.get("status", "pending"),
            priority=doc.get("priority", "medium"),
            due_date=doc.get("due_date"),
            created_at=doc["created_at"],
            updated_at=doc["updated_at"],
        )

    def to_doc(self):
        return {
            "user_id": self.user_id,
            "title": self.title,
            "description": self.description,
            "status": self.status,
            "priority": self.priority,
            "due_date": self.due_date,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    def to_public(self):
        return {
            "id": self.id,
            "userId": self.user_id,
            "title": self.title,
            "description": self.description,
            "status": self.status,
            "priority": self.priority,
            "dueDate": serialize_value(self.due_date),
            "createdAt": serialize_value(self.created_at),
            "updatedAt": serialize_value(self.updated_at),
        }
