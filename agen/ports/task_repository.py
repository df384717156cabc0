from typing import Protocol
from agen.domain.task import Task, TaskId


### COMMENTS
# ==========================================================
# Kontrakt repozytorium zadań (ports/task_repository.py).
# ==========================================================
# - Niezależny od technologii (katalog z plikami binarnymi, pamięć).
# - Operacje przyjmujące identyfikator akceptują też jego prefiks;
#   rozwiązanie prefiksu jest zawsze "twarde" (brak / niejednoznaczność = błąd).
# - Repozytorium nie zawiera logiki biznesowej; walidacja siedzi w encji.
# - Listowanie zwraca kolejność natywną dla nośnika (bez sortowania).


class TaskRepository(Protocol):
    """Interfejs repozytorium do zapisu i odczytu obiektów `Task`."""

    def save(self, task: Task) -> None:
        """Zapisuje zadanie, nadpisując poprzednią wersję o tym samym `task_id`.

        Uwagi:
            Operacja jest idempotentna: dwa zapisy tego samego zadania
            dają jeden rekord.
        """

    def get(self, task_id: str) -> Task:
        """Zwraca zadanie o podanym identyfikatorze lub jego unikalnym prefiksie.

        Wyjątki domenowe:
            InvalidIdentifierError: Pusty lub zbyt długi identyfikator.
            TaskNotFoundError: Nic nie pasuje.
            AmbiguousPrefixError: Pasuje więcej niż jedno zadanie.
            RecordFormatError: Rekord uszkodzony.
        """

    def list_all(self) -> list[Task]:
        """Zwraca wszystkie zadania.

        Uwagi:
            Jeden uszkodzony rekord przerywa całe listowanie (RecordFormatError).
        """

    def list_ids(self) -> list[str]:
        """Zwraca identyfikatory zapisanych zadań (bez dekodowania rekordów)."""

    def exists(self, prefix: str) -> bool:
        """`True`, jeśli co najmniej jedno zadanie ma identyfikator zaczynający się od `prefix`."""

    def remove(self, task_id: str) -> TaskId:
        """Usuwa zadanie wskazane identyfikatorem lub unikalnym prefiksem.

        Zwraca:
            TaskId: Pełny identyfikator usuniętego zadania.

        Wyjątki domenowe:
            TaskNotFoundError, AmbiguousPrefixError: nic nie zostaje usunięte.
        """
