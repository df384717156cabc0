### COMMENTS
# ============================================
# Konwencja użycia błędów domenowych w projekcie
# ============================================
# - Encja (Task):
#     * waliduje pola przy konstrukcji i w setterach, rzuca TaskValidationError
#
# - Kodek rekordu:
#     * za krótki / uszkodzony rekord -> RecordFormatError
#
# - Repozytorium i resolver:
#     * brak pliku -> TaskNotFoundError
#     * prefiks pasuje do kilku plików -> AmbiguousPrefixError
#     * błędy systemu plików (OSError) NIE są mapowane - lecą dalej bez zmian
#
# - UI (CLI):
#     * łapie DomainError i wyświetla komunikat, kod wyjścia 1


class DomainError(Exception):
    """Bazowa klasa dla błędów domenowych.
    Pozwala odróżnić błędy logiki aplikacji od błędów technicznych (I/O).
    Nie powinna być rzucana bezpośrednio, używaj klas pochodnych.
    """


class TaskValidationError(DomainError):
    """Rzucany, gdy dane zadania nie spełniają reguł encji.
    Przykłady:
    - tytuł pusty albo dłuższy niż 255 bajtów,
    - opis dłuższy niż 65535 bajtów,
    - priorytet lub status spoza zamkniętego zestawu wartości.
    `field` wskazuje pole, `message` to czytelny opis błędu.
    """
    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(self.__str__())
    def __str__(self):
        return self.message


class RecordFormatError(DomainError):
    """Rzucany przez kodek, gdy deklarowane długości pól przekraczają
    liczbę dostępnych bajtów (albo tekst nie jest poprawnym UTF-8).
    """
    def __init__(self, message: str = "invalid task file size"):
        self.message = message
        super().__init__(self.__str__())
    def __str__(self):
        return self.message


class TaskNotFoundError(DomainError):
    """Rzucany, gdy żaden plik w katalogu zadań nie pasuje do identyfikatora (lub prefiksu)."""
    def __init__(self, task_id: str):
        self.task_id = task_id
        super().__init__(self.__str__())
    def __str__(self):
        return f"task {self.task_id} not found"


class AmbiguousPrefixError(DomainError):
    """Rzucany, gdy prefiks identyfikatora pasuje do więcej niż jednego zadania.
    Zgłaszany zanim jakakolwiek zmiana lub usunięcie zostanie wykonane.
    """
    def __init__(self, prefix: str, count: int):
        self.prefix = prefix
        self.count = count
        super().__init__(self.__str__())
    def __str__(self):
        return f"uuid prefix not unique: '{self.prefix}' matches {self.count} tasks"


class InvalidIdentifierError(DomainError):
    """Identyfikator pusty albo dłuższy niż 36 znaków."""
    def __init__(self, value: str):
        self.value = value
        super().__init__(self.__str__())
    def __str__(self):
        return f"invalid uuid length: '{self.value}'"


class InvalidStorePathError(DomainError):
    """Katalog zadań nie został podany albo nie jest katalogiem."""
    def __init__(self, path: str, reason: str = "invalid load path"):
        self.path = path
        self.reason = reason
        super().__init__(self.__str__())
    def __str__(self):
        if not self.path:
            return self.reason
        return f"{self.reason}: {self.path}"
