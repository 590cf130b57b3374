"""Exception hierarchy for Pomotask CLI."""


class PomotaskError(Exception):
    """Base class for all application errors."""


class PersistenceError(PomotaskError):
    """Raised when the task store cannot complete an operation.

    Fatal to the interactive session: the event loop restores the terminal
    and lets it propagate.
    """


class TaskNotFoundError(PersistenceError):
    """Raised when a task id does not exist in the store."""

    def __init__(self, task_id: int):
        super().__init__(f"Task not found: {task_id}")
        self.task_id = task_id
