"""Task vertical exceptions.

Expected failures are raised as exceptions from the store and handlers and
turned into JSON envelopes by the exception handlers registered in
``api.main``.
"""


class TaskError(Exception):
    """Base class for task vertical errors."""

    status_code = 500


class TaskValidationError(TaskError):
    """One or more field rules failed."""

    status_code = 400

    def __init__(self, errors: list[str], message: str = "Validation failed"):
        super().__init__(message)
        self.message = message
        self.errors = list(errors)


class TaskNotFoundError(TaskError):
    """No task with the requested id."""

    status_code = 404

    def __init__(self, task_id: object):
        self.task_id = task_id
        self.message = f"Task with ID {task_id} not found"
        super().__init__(self.message)
