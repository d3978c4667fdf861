from datetime import datetime, timezone

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import MongoClient


def init_app(app, client=None):
    """Attach a MongoClient to ``app``.

    A client passed in (e.g. a mongomock client in tests) is used as is;
    otherwise one is built from ``MONGO_URI``. The client owns a connection
    pool and is shared by every request of this app.
    """
    if client is None:
        client = MongoClient(
            app.config["MONGO_URI"],
            serverSelectionTimeoutMS=app.config["MONGO_TIMEOUT_MS"],
        )
    app.extensions["mongo"] = client
    return client[app.config["MONGO_DB_NAME"]]


def utcnow():
    # Naive UTC at millisecond precision, the form MongoDB stores and returns
    now = datetime.utcnow()
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


def to_object_id(value):
    """Return ``value`` as an ObjectId, or None when it is not a valid one."""
    if isinstance(value, ObjectId):
        return value
    try:
        return ObjectId(str(value))
    except (InvalidId, TypeError):
        return None


def serialize_value(value):
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc).isoformat()
    return value


def serialize_doc(doc, fields):
    """Project a Mongo document onto public field names.

    ``fields`` maps the outward (camelCase) name to the stored key.
    """
    return {public: serialize_value(doc.get(stored)) for public, stored in fields.items()}
