from agen.ports.task_repository import TaskRepository
from agen.ports.id_provider import IdProvider
from agen.domain.task import Task, TaskId
from agen.domain.enums import Priority, TaskStatus
from agen.services.task_filter import filter_tasks
from typing import Iterable
import logging

logger = logging.getLogger(__name__)


### COMMENTS
# ==========================================================
# Warstwa serwisowa (services/task_service.py): przypadki użycia.
# ==========================================================
# Rola:
# - Orkiestracja nad portem `TaskRepository`: create / list / mark / remove / show.
# - Zamiana tokenów z CLI ("high", "done") na wartości domenowe.
#
# Zasady:
# - Walidację pól robi encja `Task`; serwis jej nie dubluje.
# - Każda zmiana po prefiksie: repozytorium rozwiązuje ID raz (w `get`),
#   potem mutacja i zapis. Niejednoznaczny prefiks nie
#   zmienia niczego.
# - Operacje na wielu ID zatrzymują się na pierwszym błędzie; zmiany
#   wcześniejszych ID zostają zapisane (brak transakcji).


class TaskService:
    """
    Serwis przypadków użycia dla zadań.

    :param repo: Implementacja portu TaskRepository.
    :param ids: Generator identyfikatorów (port IdProvider).
    """
    def __init__(self, repo: TaskRepository, ids: IdProvider) -> None:
        self.repo = repo
        self.ids = ids

    def create_task(
        self,
        title: str,
        description: str = "",
        periodic: bool = False,
        priority: str = "medium",
        status: str = "todo",
    ) -> Task:
        """
            Tworzy nowe zadanie i zapisuje je w repozytorium.

            :param priority: Token "low" / "medium" / "high".
            :param status: Token "todo" / "doing" / "done".
            :raises TaskValidationError: Gdy któreś pole jest niepoprawne.
            :return: Utworzony obiekt `Task`.
        """
        task = Task.new(
            title,
            description,
            periodic,
            Priority.parse(priority),
            TaskStatus.parse(status),
            task_id=TaskId(self.ids.new_id()),
        )
        self.repo.save(task)
        logger.debug("created task %s", task.task_id)
        return task

    def list_tasks(self, filters: Iterable[str] = ()) -> list[Task]:
        """
            Zwraca zadania z repozytorium przefiltrowane tokenami statusu/priorytetu.

            :raises RecordFormatError: Gdy którykolwiek rekord jest uszkodzony.
        """
        tasks = self.repo.list_all()
        result = filter_tasks(tasks, filters)
        logger.debug("listed %d of %d tasks", len(result), len(tasks))
        return result

    def get_task(self, task_id: str) -> Task:
        return self.repo.get(task_id)

    def mark_status(self, status: str, task_ids: Iterable[str]) -> list[Task]:
        """
            Sets the status of every task denoted by a full id or a unique id prefix.

            - Parses the token first, so an invalid mark changes nothing.
            - Each prefix is resolved once, by the repository, before anything is saved.

            :raises TaskValidationError: If `status` is not "todo", "doing" or "done".
            :raises AmbiguousPrefixError: If a prefix matches more than one task.
            :raises TaskNotFoundError: If a prefix matches nothing.
            :return: The updated tasks.
        """
        value = TaskStatus.parse(status)
        return [self._update(task_id, lambda t: t.set_status(value)) for task_id in task_ids]

    def mark_priority(self, priority: str, task_ids: Iterable[str]) -> list[Task]:
        """
            Sets the priority of every task denoted by a full id or a unique id prefix.

            :raises TaskValidationError: If `priority` is not "low", "medium" or "high".
            :raises AmbiguousPrefixError: If a prefix matches more than one task.
            :raises TaskNotFoundError: If a prefix matches nothing.
            :return: The updated tasks.
        """
        value = Priority.parse(priority)
        return [self._update(task_id, lambda t: t.set_priority(value)) for task_id in task_ids]

    def remove_tasks(self, task_ids: Iterable[str]) -> list[TaskId]:
        """
            Usuwa zadania wskazane identyfikatorami lub unikalnymi prefiksami.

            :raises TaskNotFoundError / AmbiguousPrefixError: Przy pierwszym złym ID.
            :return: Pełne identyfikatory usuniętych zadań.
        """
        removed = []
        for task_id in task_ids:
            full_id = self.repo.remove(task_id)
            logger.debug("removed task %s", full_id)
            removed.append(full_id)
        return removed

    def _update(self, task_id: str, change) -> Task:
        task = self.repo.get(task_id)
        change(task)
        self.repo.save(task)
        logger.debug("updated task %s", task.task_id)
        return task
