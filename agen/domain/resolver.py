from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Protocol

from agen.domain.errors import AmbiguousPrefixError, InvalidIdentifierError, TaskNotFoundError
from agen.domain.task import TASK_ID_MAX_LENGTH, TaskId


### COMMENTS
# ==========================================================
# Rozwiązywanie identyfikatorów (pełny UUID albo jego prefiks).
# ==========================================================
# - Zadanie można wskazać pełnym, 36-znakowym UUID lub dowolnym
#   niepustym prefiksem.
# - `lookup` zwraca jeden z trzech stanów: ABSENT / UNIQUE / AMBIGUOUS,
#   więc sprawdzenie istnienia i unikalności to jedno wywołanie.
# - `resolve` to wersja "twarda": brak -> TaskNotFoundError,
#   kilka trafień -> AmbiguousPrefixError. Wołane przed każdą zmianą.


class TaskIdSource(Protocol):
    """Cokolwiek, co potrafi wypisać identyfikatory zapisanych zadań."""
    def list_ids(self) -> list[str]:
        pass


class ResolutionState(str, Enum):
    ABSENT = "absent"
    UNIQUE = "unique"
    AMBIGUOUS = "ambiguous"

    def __str__(self):
        return self.value


@dataclass(frozen=True)
class Resolution:
    state: ResolutionState
    count: int
    task_id: TaskId | None = None


def validate_identifier(value: str) -> str:
    if not value or len(value) > TASK_ID_MAX_LENGTH:
        raise InvalidIdentifierError(value)
    return value


def matching_ids(ids: Iterable[str], prefix: str) -> list[str]:
    """Zwraca nazwy zaczynające się od `prefix`, w kolejności wejścia."""
    return [name for name in ids if name.startswith(prefix)]


class IdentifierResolver:
    """
    Resolver prefiksów nad dowolnym źródłem identyfikatorów (repozytorium).

    :param source: Obiekt z metodą `list_ids()`.
    """
    def __init__(self, source: TaskIdSource) -> None:
        self.source = source

    def count_with_prefix(self, prefix: str) -> int:
        validate_identifier(prefix)
        return len(matching_ids(self.source.list_ids(), prefix))

    def exists_and_is_unique(self, prefix: str) -> bool:
        return self.count_with_prefix(prefix) == 1

    def lookup(self, prefix: str) -> Resolution:
        """
        Jedno skanowanie katalogu, trzy możliwe wyniki.

        :raises InvalidIdentifierError: Gdy prefiks jest pusty lub dłuższy niż 36 znaków.
        """
        validate_identifier(prefix)
        found = matching_ids(self.source.list_ids(), prefix)
        if not found:
            return Resolution(ResolutionState.ABSENT, 0)
        if len(found) > 1:
            return Resolution(ResolutionState.AMBIGUOUS, len(found))
        return Resolution(ResolutionState.UNIQUE, 1, TaskId(found[0]))

    def resolve(self, prefix: str) -> TaskId:
        """
        Zwraca pełny identyfikator pasujący do prefiksu.

        :raises TaskNotFoundError: Gdy nic nie pasuje.
        :raises AmbiguousPrefixError: Gdy pasuje więcej niż jedno zadanie.
        """
        result = self.lookup(prefix)
        if result.state is ResolutionState.ABSENT:
            raise TaskNotFoundError(prefix)
        if result.state is ResolutionState.AMBIGUOUS:
            raise AmbiguousPrefixError(prefix, result.count)
        return result.task_id
