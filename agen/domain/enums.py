from enum import IntEnum

from agen.domain.errors import TaskValidationError


class Priority(IntEnum):
    """Priorytet zadania; wartość bajtu zapisywana w rekordzie."""
    LOW = 0
    MEDIUM = 1
    HIGH = 2

    @property
    def token(self) -> str:
        return self.name.lower()

    def __str__(self):
        return self.token

    @classmethod
    def is_token(cls, token: str) -> bool:
        return token in _PRIORITY_TOKENS

    @classmethod
    def parse(cls, token: str) -> "Priority":
        """Zamienia "low" / "medium" / "high" na Priority."""
        try:
            return _PRIORITY_TOKENS[token]
        except KeyError:
            raise TaskValidationError("priority", "not a valid priority string") from None


class TaskStatus(IntEnum):
    """Status zadania; wartości 3-5, rozłączne z priorytetem."""
    TODO = 3
    DOING = 4
    DONE = 5

    @property
    def label(self) -> str:
        return _STATUS_LABELS[self]

    @property
    def token(self) -> str:
        return self.name.lower()

    def __str__(self):
        return self.token

    @classmethod
    def is_token(cls, token: str) -> bool:
        return token in _STATUS_TOKENS

    @classmethod
    def parse(cls, token: str) -> "TaskStatus":
        """Zamienia "todo" / "doing" / "done" na TaskStatus."""
        try:
            return _STATUS_TOKENS[token]
        except KeyError:
            raise TaskValidationError("status", "not a valid status string") from None


_PRIORITY_TOKENS = {"low": Priority.LOW, "medium": Priority.MEDIUM, "high": Priority.HIGH}
_STATUS_TOKENS = {"todo": TaskStatus.TODO, "doing": TaskStatus.DOING, "done": TaskStatus.DONE}
_STATUS_LABELS = {TaskStatus.TODO: "To do", TaskStatus.DOING: "Doing", TaskStatus.DONE: "Done"}
