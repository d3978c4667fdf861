"""CRUD over tasks, scoped to the owning user.

Every task-scoped operation goes through ``_owned_task``, which applies the
checks in a fixed order: caller identified, task exists, task owned by the
caller. Deletes are soft: the task's status becomes ``deleted`` and it drops
out of the default listing.
"""

import logging

from taskboard.errors import AuthError, ForbiddenError, NotFoundError, ValidationError
from taskboard.models.task_model import STATUS_DELETED, Task
from taskboard.utils.validation import (
    parse_due_date,
    validate_description,
    validate_priority,
    validate_status,
    validate_title,
)

logger = logging.getLogger(__name__)

LIST_ALL = "all"

# Outward field name -> (stored key, validator)
UPDATABLE_FIELDS = {
    "title": ("title", validate_title),
    "description": ("description", validate_description),
    "status": ("status", validate_status),
    "priority": ("priority", validate_priority),
    "dueDate": ("due_date", parse_due_date),
}


def require_identity(user_id):
    if not user_id:
        raise AuthError("Not authenticated")


def ensure_owner(task, user_id):
    """Ownership predicate shared by every task-scoped operation."""
    if task is None:
        raise NotFoundError("Task not found")
    if task.user_id != user_id:
        raise ForbiddenError("Not authorized to access this task")
    return task


class TaskService:
    def __init__(self, tasks):
        self.tasks = tasks

    def _owned_task(self, user_id, task_id):
        require_identity(user_id)
        return ensure_owner(self.tasks.find_by_id(task_id), user_id)

    def create(self, user_id, title, description=None, priority=None, due_date=None):
        require_identity(user_id)
        task = Task(
            user_id=user_id,
            title=validate_title(title),
            description=validate_description(description),
            priority=validate_priority("medium" if priority is None else priority),
            due_date=parse_due_date(due_date),
        )
        task = self.tasks.insert(task)
        logger.info("User %s created task %s", user_id, task.id)
        return task.to_public()

    def list(self, user_id, status=None):
        """Owner's tasks, newest first.

        ``status`` of None or "all" lists every task that is not deleted.
        """
        require_identity(user_id)
        if status is None or status == "" or status == LIST_ALL:
            found = self.tasks.list_for_owner(user_id, exclude_status=STATUS_DELETED)
        else:
            found = self.tasks.list_for_owner(user_id, status=validate_status(status))
        return [task.to_public() for task in found]

    def get(self, user_id, task_id):
        return self._owned_task(user_id, task_id).to_public()

    def update(self, user_id, task_id, fields):
        task = self._owned_task(user_id, task_id)

        updates = {}
        for name, (key, validate) in UPDATABLE_FIELDS.items():
            if name in fields:
                updates[key] = validate(fields[name])
        if not updates:
            raise ValidationError("No valid fields to update")

        updated = self.tasks.update(task.id, updates)
        if updated is None:
            # Gone between the ownership check and the write
            raise NotFoundError("Task not found")
        logger.info("User %s updated task %s (%s)", user_id, task.id, ", ".join(sorted(updates)))
        return updated.to_public()

    def delete(self, user_id, task_id):
        task = self._owned_task(user_id, task_id)
        if self.tasks.update(task.id, {"status": STATUS_DELETED}) is None:
            raise NotFoundError("Task not found")
        logger.info("User %s deleted task %s", user_id, task.id)
        return {"message": "Task deleted successfully", "id": task.id}
