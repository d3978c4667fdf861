from pymongo import ASCENDING, DESCENDING, ReturnDocument

from taskboard.models.task_model import Task
from taskboard.utils.db import to_object_id, utcnow

# Newest first; _id breaks ties between tasks created in the same millisecond
NEWEST_FIRST = [("created_at", DESCENDING), ("_id", DESCENDING)]


class TaskStore:
    def __init__(self, db):
        self.collection = db["tasks"]

    def ensure_indexes(self):
        self.collection.create_index([("user_id", ASCENDING), ("created_at", DESCENDING)])

    def insert(self, task):
        res = self.collection.insert_one(task.to_doc())
        return Task.from_doc(self.collection.find_one({"_id": res.inserted_id}))

    def find_by_id(self, task_id):
        oid = to_object_id(task_id)
        if oid is None:
            return None
        doc = self.collection.find_one({"_id": oid})
        return Task.from_doc(doc) if doc else None

    def list_for_owner(self, user_id, status=None, exclude_status=None):
        query = {"user_id": user_id}
        if status is not None:
            query["status"] = status
        elif exclude_status is not None:
            query["status"] = {"$ne": exclude_status}
        return [Task.from_doc(doc) for doc in self.collection.find(query).sort(NEWEST_FIRST)]

    def update(self, task_id, updates):
        """Apply ``updates`` and return the stored task afterwards.

        Concurrent writers are last-write-wins per field.
        """
        updates = dict(updates, updated_at=utcnow())
        doc = self.collection.find_one_and_update(
            {"_id": to_object_id(task_id)},
            {"$set": updates},
            return_document=ReturnDocument.AFTER,
        )
        return Task.from_doc(doc) if doc else None
