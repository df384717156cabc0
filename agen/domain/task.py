from dataclasses import dataclass, field
from typing import NewType
from uuid import uuid4

from agen.domain.enums import Priority, TaskStatus
from agen.domain.errors import InvalidIdentifierError, TaskValidationError

TaskId = NewType("TaskId", str)

TITLE_MIN_LENGTH = 1
TITLE_MAX_LENGTH = 255
DESC_MAX_LENGTH = 65535
TASK_ID_MAX_LENGTH = 36


def new_task_id() -> TaskId:
    return TaskId(str(uuid4()))


@dataclass(frozen=True)
class Task:
    """
    Model domenowy pojedynczego zadania. Pola są zamrożone (frozen=True):
    bezpośrednie przypisanie rzuca FrozenInstanceError, a jedyną drogą zmiany
    są walidujące settery; przy błędzie obiekt zostaje nietknięty. task_id
    nie ma settera. Długości tytułu i opisu liczone są
    w bajtach UTF-8, bo tak są zapisywane na dysku.
    """
    title: str
    description: str = ""
    is_periodic: bool = False
    priority: Priority = Priority.MEDIUM
    status: TaskStatus = TaskStatus.TODO
    task_id: TaskId = field(default_factory=new_task_id)

    def __post_init__(self) -> None:
        # kolejność walidacji: tytuł, opis, priorytet, status
        _check_title(self.title)
        _check_description(self.description)
        object.__setattr__(self, "priority", _coerce_priority(self.priority))
        object.__setattr__(self, "status", _coerce_status(self.status))
        object.__setattr__(self, "is_periodic", bool(self.is_periodic))
        if not 0 < len(self.task_id) <= TASK_ID_MAX_LENGTH:
            raise InvalidIdentifierError(self.task_id)

    @classmethod
    def new(
        cls,
        title: str,
        description: str,
        periodic: bool,
        priority: Priority | int,
        status: TaskStatus | int,
        task_id: TaskId | None = None,
    ) -> "Task":
        """
        Tworzy zadanie z jawnie podanymi polami.

        :raises TaskValidationError: przy pierwszym niepoprawnym polu.
        """
        return cls(
            title=title,
            description=description,
            is_periodic=periodic,
            priority=priority,
            status=status,
            task_id=new_task_id() if task_id is None else task_id,
        )

    @classmethod
    def new_default(cls, title: str, task_id: TaskId | None = None) -> "Task":
        """Zadanie z samym tytułem: priorytet Medium, status Todo, pusty opis."""
        return cls(title=title, task_id=new_task_id() if task_id is None else task_id)

    def set_description(self, description: str) -> None:
        _check_description(description)
        object.__setattr__(self, "description", description)

    def set_periodicity(self, periodic: bool) -> None:
        object.__setattr__(self, "is_periodic", bool(periodic))

    def set_priority(self, priority: Priority | int) -> None:
        object.__setattr__(self, "priority", _coerce_priority(priority))

    def set_status(self, status: TaskStatus | int) -> None:
        object.__setattr__(self, "status", _coerce_status(status))

    def display(self) -> str:
        """Jednolinijkowe podsumowanie: `[To do] tytuł <medium> uuid`."""
        return f"[{self.status.label}] {self.title} <{self.priority.token}> {self.task_id}"


def _check_title(title: str) -> None:
    size = len(title.encode("utf-8"))
    if size < TITLE_MIN_LENGTH:
        raise TaskValidationError("title", f"title too short (min {TITLE_MIN_LENGTH})")
    if size > TITLE_MAX_LENGTH:
        raise TaskValidationError("title", f"title too long (max {TITLE_MAX_LENGTH})")


def _check_description(description: str) -> None:
    if len(description.encode("utf-8")) > DESC_MAX_LENGTH:
        raise TaskValidationError("description", f"description too long (max {DESC_MAX_LENGTH})")


def _coerce_priority(value) -> Priority:
    try:
        return Priority(value)
    except (ValueError, TypeError):
        raise TaskValidationError("priority", "priority must be Low, Medium or High") from None


def _coerce_status(value) -> TaskStatus:
    try:
        return TaskStatus(value)
    except (ValueError, TypeError):
        raise TaskValidationError("status", "status must be Todo, Doing or Done") from None
