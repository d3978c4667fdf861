import secrets

from pymongo import ASCENDING

from taskboard.utils.db import utcnow


class SessionStore:
    """Server-held login sessions in the ``sessions`` collection.

    The document id is the opaque value handed to the browser as a cookie.
    A TTL index lets MongoDB reap expired rows; lookups also check the expiry
    so a row the reaper has not reached yet is still rejected.
    """

    def __init__(self, db):
        self.collection = db["sessions"]

    def ensure_indexes(self):
        self.collection.create_index([("expires_at", ASCENDING)], expireAfterSeconds=0)

    def create(self, user_id, lifetime):
        now = utcnow()
        session_id = secrets.token_urlsafe(32)
        self.collection.insert_one(
            {
                "_id": session_id,
                "user_id": user_id,
                "created_at": now,
                "expires_at": now + lifetime,
            }
        )
        return session_id, now + lifetime

    def get_user_id(self, session_id):
        doc = self.collection.find_one({"_id": session_id, "expires_at": {"$gt": utcnow()}})
        return doc["user_id"] if doc else None

    def delete(self, session_id):
        self.collection.delete_one({"_id": session_id})
