from agen.ports.task_repository import TaskRepository
from agen.domain.task import Task, TaskId
from agen.domain.errors import InvalidIdentifierError, InvalidStorePathError, TaskNotFoundError
from agen.domain.resolver import IdentifierResolver, matching_ids, validate_identifier
from agen.adapters.binary.record_codec import decode_task, encode_task
from pathlib import Path
import os


### COMMENTS
# ==========================================================
# Repozytorium "katalog jako tabela" (adapters/binary/task_repo.py).
# ==========================================================
# - Jeden plik = jedno zadanie; nazwa pliku = task_id (UUID, 36 znaków).
#   Wariant z tytułem jako kluczem NIE jest wspierany: dwa zadania
#   o tym samym tytule to dwa różne pliki.
# - Zawartość pliku = rekord z record_codec (bez nagłówka).
# - Zapis nadpisuje plik w miejscu (truncate + write). Brak blokad i brak
#   atomowego rename: zakładamy jednego piszącego.
# - Ścieżka katalogu przekazywana jest w konstruktorze; kilka repozytoriów
#   może istnieć obok siebie (np. w testach).
# - Błędy systemu plików (OSError) propagują się bez mapowania.


class DirectoryTaskRepository(TaskRepository):
    def __init__(self, path: str | Path) -> None:
        """Inicjalizuje repozytorium nad istniejącym katalogiem.
        Nie tworzy katalogu, to zadanie warstwy konfiguracji."""
        if path is None or str(path) == "":
            raise InvalidStorePathError("", "invalid load path")
        self.path = Path(path)
        self.resolver = IdentifierResolver(self)

    def _file_for(self, task_id: str) -> Path:
        if os.sep in task_id or task_id in (".", ".."):
            raise InvalidIdentifierError(task_id)
        return self.path / task_id

    def _read(self, task_id: TaskId) -> Task:
        try:
            data = self._file_for(task_id).read_bytes()
        except FileNotFoundError:
            raise TaskNotFoundError(task_id) from None
        return decode_task(data)

    def save(self, task: Task) -> None:
        """Koduje zadanie i zapisuje je do `<katalog>/<task_id>`, nadpisując poprzednią wersję."""
        self._file_for(task.task_id).write_bytes(encode_task(task))

    def get(self, task_id: str) -> Task:
        """Zwraca zadanie o podanym ID lub unikalnym prefiksie ID.
        Rzuca TaskNotFoundError / AmbiguousPrefixError / RecordFormatError."""
        return self._read(self.resolver.resolve(task_id))

    def list_ids(self) -> list[str]:
        return os.listdir(self.path)

    def list_all(self) -> list[Task]:
        """Dekoduje każdy wpis katalogu, w natywnej kolejności katalogu.
        Pierwszy uszkodzony rekord przerywa całe listowanie."""
        return [decode_task((self.path / name).read_bytes()) for name in self.list_ids()]

    def count_with_prefix(self, prefix: str) -> int:
        return self.resolver.count_with_prefix(prefix)

    def exists(self, prefix: str) -> bool:
        """Zwraca True, jeśli istnieje plik zaczynający się od `prefix`.
        Nie wykrywa niejednoznaczności, do tego służy resolver.lookup()."""
        validate_identifier(prefix)
        return len(matching_ids(self.list_ids(), prefix)) > 0

    def remove(self, task_id: str) -> TaskId:
        """Usuwa zadanie o podanym ID lub unikalnym prefiksie.
        Przy braku lub niejednoznaczności nic nie jest usuwane."""
        full_id = self.resolver.resolve(task_id)
        try:
            self._file_for(full_id).unlink()
        except FileNotFoundError:
            raise TaskNotFoundError(task_id) from None
        return full_id
