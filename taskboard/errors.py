class TaskboardError(Exception):
    """Base exception for service-layer failures.

    Each subclass carries the HTTP status the boundary answers with; the
    message is what the client sees in the ``error`` field.
    """

    status_code = 500
    default_message = "Something went wrong"

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(TaskboardError):
    status_code = 400
    default_message = "Invalid input"


class ConflictError(TaskboardError):
    # Duplicate signups are reported as a plain bad request
    status_code = 400
    default_message = "email already exists"


class AuthError(TaskboardError):
    status_code = 401
    default_message = "Not authenticated"


class ForbiddenError(TaskboardError):
    status_code = 403
    default_message = "Not authorized to access this task"


class NotFoundError(TaskboardError):
    status_code = 404
    default_message = "Task not found"


class InternalError(TaskboardError):
    status_code = 500
    default_message = "Internal Server Error"
