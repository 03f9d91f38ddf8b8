"""Domain errors raised by the stores and services.

Every error carries a client-safe ``message`` and the HTTP status the
gateway answers with. Handlers in ``task_api.main`` turn them into
``{"message": ...}`` responses.
"""


class TaskApiError(Exception):
    status_code = 500
    message = "Server Internal Error"

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class ValidationError(TaskApiError):
    status_code = 422
    message = "Validation failed"


class DuplicateUsername(TaskApiError):
    status_code = 409
    message = "Username already exists"


class TaskNotFound(TaskApiError):
    status_code = 404
    message = "Task not found"


class AuthInvalid(TaskApiError):
    status_code = 401
    message = "Could not validate credentials"


class Forbidden(TaskApiError):
    status_code = 403
    message = "Not allowed to access this task"


class StoreUnavailable(TaskApiError):
    status_code = 500
    message = "Server Internal Error"
