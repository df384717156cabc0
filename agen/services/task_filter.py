from dataclasses import dataclass
from typing import Iterable

from agen.domain.enums import Priority, TaskStatus
from agen.domain.task import Task


### COMMENTS
# ==========================================================
# Filtrowanie listy zadań (services/task_filter.py).
# ==========================================================
# - Tokeny to dowolne napisy; "todo"/"doing"/"done" trafiają do filtra statusu,
#   "low"/"medium"/"high" do filtra priorytetu, reszta jest ignorowana.
# - W obrębie jednej kategorii: suma (OR). Między kategoriami: iloczyn (AND).
# - Brak rozpoznanych tokenów = wszystkie zadania bez zmian.


def parse_status_filters(tokens: Iterable[str]) -> list[TaskStatus]:
    """Zwraca statusy rozpoznane w tokenach, bez duplikatów."""
    found: list[TaskStatus] = []
    for token in tokens:
        if TaskStatus.is_token(token):
            status = TaskStatus.parse(token)
            if status not in found:
                found.append(status)
    return found


def parse_priority_filters(tokens: Iterable[str]) -> list[Priority]:
    """Zwraca priorytety rozpoznane w tokenach, bez duplikatów."""
    found: list[Priority] = []
    for token in tokens:
        if Priority.is_token(token):
            priority = Priority.parse(token)
            if priority not in found:
                found.append(priority)
    return found


@dataclass(frozen=True)
class TaskFilter:
    statuses: tuple[TaskStatus, ...] = ()
    priorities: tuple[Priority, ...] = ()

    @classmethod
    def from_tokens(cls, tokens: Iterable[str]) -> "TaskFilter":
        tokens = list(tokens)
        return cls(
            statuses=tuple(parse_status_filters(tokens)),
            priorities=tuple(parse_priority_filters(tokens)),
        )

    @property
    def is_empty(self) -> bool:
        return not self.statuses and not self.priorities

    def matches(self, task: Task) -> bool:
        if self.statuses and task.status not in self.statuses:
            return False
        if self.priorities and task.priority not in self.priorities:
            return False
        return True

    def apply(self, tasks: Iterable[Task]) -> list[Task]:
        """Zwraca zadania spełniające filtr, w kolejności wejścia."""
        if self.is_empty:
            return list(tasks)
        return [t for t in tasks if self.matches(t)]


def filter_tasks(tasks: Iterable[Task], tokens: Iterable[str]) -> list[Task]:
    return TaskFilter.from_tokens(tokens).apply(tasks)
