from pymongo import ASCENDING
from pymongo.errors import DuplicateKeyError

from taskboard.errors import ConflictError
from taskboard.models.user_model import User
from taskboard.utils.db import to_object_id


class UserStore:
    """Account records in the ``users`` collection.

    Emails are stored lower-cased, so the unique index on ``email`` is
    case-insensitive uniqueness.
    """

    def __init__(self, db):
        self.collection = db["users"]

    def ensure_indexes(self):
        self.collection.create_index([("email", ASCENDING)], unique=True)

    def find_by_email(self, email):
        doc = self.collection.find_one({"email": email.lower()})
        return User.from_doc(doc) if doc else None

    def find_by_id(self, user_id):
        oid = to_object_id(user_id)
        if oid is None:
            return None
        doc = self.collection.find_one({"_id": oid})
        return User.from_doc(doc) if doc else None

    def insert(self, user):
        doc = user.to_doc()
        try:
            res = self.collection.insert_one(doc)
        except DuplicateKeyError:
            raise ConflictError("email already exists")
        return User.from_doc(self.collection.find_one({"_id": res.inserted_id}))
