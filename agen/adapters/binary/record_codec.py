import struct

from agen.domain.errors import RecordFormatError
from agen.domain.task import Task, TaskId

### COMMENTS
# ==========================================================
# Binarny format rekordu zadania (adapters/binary/record_codec.py).
# ==========================================================
# Kolejność pól (bez nagłówka, bez wersji, bez sumy kontrolnej):
#   u8   długość tytułu          | tytuł (UTF-8)
#   u16  długość opisu (BE)      | opis (UTF-8)
#   u8   cykliczność (1/0)
#   u8   priorytet (0-2)
#   u8   status (3-5)
#   u8   długość identyfikatora  | identyfikator (ASCII/UTF-8)
#
# Przesunięcia liczy kursor (RecordWriter / RecordReader), nie ręczna arytmetyka.
# Każdy odczyt sprawdza, czy zostało dość bajtów -> RecordFormatError.

_U16 = struct.Struct(">H")


class RecordWriter:
    def __init__(self) -> None:
        self._buf = bytearray()

    def write_u8(self, value: int) -> None:
        self._buf.append(value)

    def write_u16(self, value: int) -> None:
        self._buf += _U16.pack(value)

    def write_bytes(self, data: bytes) -> None:
        self._buf += data

    def getvalue(self) -> bytes:
        return bytes(self._buf)


class RecordReader:
    """Kursor tylko-do-odczytu nad rekordem; każdy odczyt przesuwa pozycję."""

    def __init__(self, data: bytes) -> None:
        self._data = memoryview(data)
        self._pos = 0

    def remaining(self) -> int:
        return len(self._data) - self._pos

    def read_bytes(self, size: int) -> bytes:
        if size > self.remaining():
            raise RecordFormatError()
        chunk = self._data[self._pos:self._pos + size].tobytes()
        self._pos += size
        return chunk

    def read_u8(self) -> int:
        return self.read_bytes(1)[0]

    def read_u16(self) -> int:
        return _U16.unpack(self.read_bytes(_U16.size))[0]

    def read_text(self, size: int) -> str:
        raw = self.read_bytes(size)
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise RecordFormatError(f"invalid text in task record: {e}") from e


def record_length(task: Task) -> int:
    """Liczba bajtów potrzebna do zapisania zadania."""
    return (
        1 + len(task.title.encode("utf-8"))
        + 2 + len(task.description.encode("utf-8"))
        + 4 + len(task.task_id.encode("utf-8"))
    )


def encode_task(task: Task) -> bytes:
    title = task.title.encode("utf-8")
    description = task.description.encode("utf-8")
    task_id = task.task_id.encode("utf-8")

    w = RecordWriter()
    w.write_u8(len(title))
    w.write_bytes(title)
    w.write_u16(len(description))
    w.write_bytes(description)
    w.write_u8(1 if task.is_periodic else 0)
    w.write_u8(int(task.priority))
    w.write_u8(int(task.status))
    w.write_u8(len(task_id))
    w.write_bytes(task_id)
    return w.getvalue()


def decode_task(data: bytes) -> Task:
    """
    Odtwarza zadanie z rekordu.

    Zadanie budowane jest tym samym walidującym konstruktorem co w pamięci,
    identyfikator pochodzi z rekordu (nie jest generowany na nowo).
    Bajty za identyfikatorem są ignorowane.

    :raises RecordFormatError: Rekord pusty lub ucięty.
    :raises TaskValidationError: Pola poza dozwolonym zakresem.
    """
    r = RecordReader(data)
    title = r.read_text(r.read_u8())
    description = r.read_text(r.read_u16())
    is_periodic = r.read_u8() == 1
    priority = r.read_u8()
    status = r.read_u8()
    task_id = r.read_text(r.read_u8())

    return Task.new(
        title,
        description,
        is_periodic,
        priority,
        status,
        task_id=TaskId(task_id),
    )
