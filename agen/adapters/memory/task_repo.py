from agen.domain.task import Task, TaskId
from agen.domain.errors import TaskNotFoundError
from agen.domain.resolver import IdentifierResolver, matching_ids, validate_identifier
from dataclasses import replace
from typing import Iterable

### COMMENTS
# ==========================================================
# Adapter pamięciowy dla repozytorium zadań (adapters/memory/task_repo.py).
# ==========================================================
# - Służy do testów serwisu i prototypowania (brak trwałości między uruchomieniami).
# - Dane w słowniku `_data: dict[TaskId, Task]`; słownik zachowuje kolejność
#   wstawiania, co odpowiada "natywnej kolejności" katalogu.
# - Przechowywane są kopie zadań: mutacja obiektu po `save` nie zmienia
#   repozytorium, dopóki nie zostanie zapisany ponownie (jak przy plikach).
# - Rozwiązywanie prefiksów przez ten sam IdentifierResolver co adapter plikowy.


class InMemoryTaskRepository:
    """
        Inicjalizuje repozytorium z opcjonalną kolekcją startowych zadań.
        :param initial: Iterable z obiektami Task do wstępnego załadowania.
        Przy duplikatach task_id ostatni wygrywa (to tylko seed, nie API).
    """
    def __init__(self, initial: Iterable[Task] | None = None) -> None:
        self._data: dict[TaskId, Task] = {}
        for t in (initial or []):
            self._data[t.task_id] = replace(t)
        self.resolver = IdentifierResolver(self)

    def save(self, task: Task) -> None:
        """
            Zapisuje kopię zadania pod jego `task_id` (nadpisuje poprzednią).

            :param task: Obiekt domenowy Task do zapisania.
            :return: None
        """
        self._data[task.task_id] = replace(task)

    def get(self, task_id: str) -> Task:
        """
            Zwraca kopię zadania o podanym identyfikatorze lub unikalnym prefiksie.

            :raises TaskNotFoundError: Gdy nic nie pasuje.
            :raises AmbiguousPrefixError: Gdy pasuje kilka zadań.
        """
        return replace(self._data[self.resolver.resolve(task_id)])

    def list_ids(self) -> list[str]:
        return [str(k) for k in self._data]

    def list_all(self) -> list[Task]:
        return [replace(t) for t in self._data.values()]

    def exists(self, prefix: str) -> bool:
        validate_identifier(prefix)
        return len(matching_ids(self.list_ids(), prefix)) > 0

    def remove(self, task_id: str) -> TaskId:
        """
            Usuwa zadanie wskazane identyfikatorem lub unikalnym prefiksem.

            :raises TaskNotFoundError: Gdy nic nie pasuje.
            :raises AmbiguousPrefixError: Gdy pasuje kilka zadań, nic nie jest usuwane.
            :return: Pełny identyfikator usuniętego zadania.
        """
        full_id = self.resolver.resolve(task_id)
        if full_id not in self._data:
            raise TaskNotFoundError(task_id)
        del self._data[full_id]
        return full_id
