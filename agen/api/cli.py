from agen.domain.errors import AmbiguousPrefixError, DomainError, TaskNotFoundError, TaskValidationError
from agen.domain.enums import Priority, TaskStatus
from agen.domain.task import Task
from agen.services.task_service import TaskService
from agen.adapters.binary.task_repo import DirectoryTaskRepository
from agen.adapters.memory.task_repo import InMemoryTaskRepository
from agen.adapters.system.id_provider_uuid import UuidIdProvider
from agen.config import TASKS_DIR_ENV, ensure_tasks_dir, resolve_tasks_dir
from agen.logging_setup import setup_logging
from agen.api.colors import TaskColor
from typer import Argument, Exit, Option, Typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.panel import Panel
from pathlib import Path
from typing import Optional
import logging

logger = logging.getLogger(__name__)


### COMMENTS
# ==========================================================
# CLI (Typer + Rich): interfejs użytkownika dla agen.
# ==========================================================
# Rola:
# - Mapuje komendy na metody TaskService (new/list/mark/remove/show).
# - `demo` pokazuje przebieg na repozytorium w pamięci, bez dotykania dysku.
# - Wyświetla wyniki (tabela Rich albo linie `display()` z --plain).
# - Łapie DomainError / OSError, drukuje czerwony panel i kończy kodem 1.
#
# Zasady:
# - Zero logiki biznesowej, deleguj do TaskService.
# - Katalog zadań ustalany w callbacku, serwis budowany leniwie przy
#   pierwszej komendzie, która go potrzebuje.


app = Typer(help="agen: local task tracker", no_args_is_help=True)
console = Console()

_settings: dict = {"dir": None, "init": False}
_service: TaskService | None = None

MARK_USAGE = """Usage of mark:
  agen mark MARK [ID ...]
where MARK is one of the following:
  low, medium, high:  sets the priority of the given tasks
  todo, doing, done:  sets the status of the given tasks
and ID ... are task uuids (or unique prefixes of them)."""


def build_service(directory: Optional[Path], create: bool = False) -> TaskService:
    """Tworzy serwis nad katalogiem zadań (jawnym, z env albo domyślnym)."""
    path = ensure_tasks_dir(resolve_tasks_dir(directory), create=create)
    logger.debug("using tasks directory %s", path)
    return TaskService(DirectoryTaskRepository(path), UuidIdProvider())


def get_service() -> TaskService:
    global _service
    if _service is None:
        _service = build_service(_settings["dir"], create=_settings["init"])
    return _service


@app.callback()
def main(
    directory: Optional[Path] = Option(
        None,
        "--dir",
        "-d",
        envvar=TASKS_DIR_ENV,
        help="Katalog z plikami zadań (domyślnie $HOME/.agen/tasks)",
    ),
    init: bool = Option(False, "--init", help="Utwórz katalog zadań, jeśli nie istnieje"),
    verbose: bool = Option(False, "--verbose", "-v", help="Logi DEBUG na stderr"),
) -> None:
    """Bootstrap konfiguracji na starcie procesu CLI."""
    global _service
    setup_logging(verbose=verbose)
    _settings["dir"] = directory
    _settings["init"] = init
    _service = None


def short_id(task_id: str, n: int = 8) -> str:
    """Zwraca skróconą wersję UUID do wyświetlenia (pierwsze 8 znaków)."""
    return task_id[:n]


def color_status(status: TaskStatus) -> str:
    match status:
        case TaskStatus.TODO:
            return f"{TaskColor.RED}{status.label}{TaskColor.RESET}"
        case TaskStatus.DOING:
            return f"{TaskColor.BLUE}{status.label}{TaskColor.RESET}"
        case TaskStatus.DONE:
            return f"{TaskColor.GREEN}{status.label}{TaskColor.RESET}"
        case _:
            return str(status)


def color_priority(priority: Priority) -> str:
    match priority:
        case Priority.HIGH:
            return f"{TaskColor.RED}{priority.token}{TaskColor.RESET}"
        case Priority.MEDIUM:
            return f"{TaskColor.YELLOW}{priority.token}{TaskColor.RESET}"
        case _:
            return f"{TaskColor.DIM}{priority.token}{TaskColor.RESET}"


def fail(error: Exception, title: str, hint: str | None = None) -> None:
    """Drukuje czerwony panel z błędem i kończy proces kodem 1."""
    body = f"❌ {escape(str(error))}"
    if hint:
        body += f"\n[dim]{hint}[/]"
    console.print(Panel.fit(body, title=title, border_style="red"))
    raise Exit(code=1)


def handle_errors(error: Exception) -> None:
    if isinstance(error, TaskValidationError):
        fail(error, "Błąd walidacji")
    if isinstance(error, TaskNotFoundError):
        fail(error, "Nie znaleziono", "Użyj 'agen list', żeby znaleźć poprawne ID")
    if isinstance(error, AmbiguousPrefixError):
        fail(error, "Niejednoznaczne ID", "Podaj dłuższy prefiks UUID")
    if isinstance(error, DomainError):
        fail(error, "Błąd domenowy")
    fail(error, "Błąd systemu plików")


def render_list(items: list[Task]) -> None:
    """Renderuje tabelę Rich z kolumnami: ID, Title, Priority, Status, Periodic."""
    table = Table(show_lines=True, header_style="bold")
    table.add_column("ID", no_wrap=True, style="cyan")
    table.add_column("Title")
    table.add_column("Priority", no_wrap=True)
    table.add_column("Status", no_wrap=True)
    table.add_column("Periodic", no_wrap=True, style="dim")

    for t in items:
        table.add_row(
            short_id(t.task_id),
            escape(t.title),
            color_priority(t.priority),
            color_status(t.status),
            "yes" if t.is_periodic else "",
        )
    console.print(table)
    console.print(f"[dim]Razem: {len(items)}[/dim]")


@app.command("new")
def new(
    title: str,
    desc: str = Option("", "--desc", help="Opis (max 65535 bajtów)"),
    periodic: bool = Option(False, "--periodic", help="Zadanie cykliczne"),
    prio: str = Option("medium", "--prio", help='"low", "medium" albo "high"'),
    status: str = Option("todo", "--status", help='"todo", "doing" albo "done"'),
) -> None:
    """
    Dodaje nowe zadanie.

    Tytuł: od 1 do 255 bajtów. Sukces: panel z pełnym UUID.
    """
    try:
        task = get_service().create_task(
            title, description=desc, periodic=periodic, priority=prio, status=status
        )
    except (DomainError, OSError) as e:
        handle_errors(e)
        return
    console.print(Panel.fit(
        f"✅ Dodano zadanie\n"
        f"[cyan]ID:[/cyan] {task.task_id}\n"
        f"[dim]Title:[/dim] {escape(task.title)}"
        + (f"\n[dim]Description:[/dim] {escape(task.description)}" if task.description else ""),
        title="Sukces",
        border_style="green",
    ))


@app.command("list")
def list_cmd(
    filters: Optional[list[str]] = Argument(
        None, help="todo/doing/done oraz low/medium/high; OR w kategorii, AND między kategoriami"
    ),
    plain: bool = Option(False, "--plain", help="Jedna linia na zadanie zamiast tabeli"),
) -> None:
    """
    Listuje zadania, opcjonalnie filtrowane.

    Przykłady: `agen list done todo`, `agen list todo high`.
    """
    try:
        items = get_service().list_tasks(filters or [])
    except (DomainError, OSError) as e:
        handle_errors(e)
        return
    if plain:
        for t in items:
            console.print(f"> {t.display()}", markup=False, highlight=False)
        return
    render_list(items)


@app.command("mark", help=MARK_USAGE)
def mark(
    value: str = Argument(..., metavar="MARK"),
    task_ids: Optional[list[str]] = Argument(None, metavar="ID..."),
) -> None:
    """Ustawia status albo priorytet wskazanych zadań."""
    if not (TaskStatus.is_token(value) or Priority.is_token(value)):
        logger.warning("unknown mark: %s", value)
        console.print(MARK_USAGE, markup=False, highlight=False)
        raise Exit(code=1)
    if not task_ids:
        return
    try:
        if TaskStatus.is_token(value):
            updated = get_service().mark_status(value, task_ids)
        else:
            updated = get_service().mark_priority(value, task_ids)
    except (DomainError, OSError) as e:
        handle_errors(e)
        return
    for t in updated:
        console.print(
            f"✅ {short_id(t.task_id)} {escape(t.title)}: "
            f"{color_status(t.status)} / {color_priority(t.priority)}"
        )


@app.command("remove")
def remove(task_ids: Optional[list[str]] = Argument(None, metavar="ID...")) -> None:
    """Usuwa zadania o podanych UUID (lub ich unikalnych prefiksach)."""
    if not task_ids:
        return
    try:
        removed = get_service().remove_tasks(task_ids)
    except (DomainError, OSError) as e:
        handle_errors(e)
        return
    for task_id in removed:
        console.print(f"🟡 Usunięto zadanie {task_id}", highlight=False)


@app.command("show")
def show(task_id: str) -> None:
    """Pokazuje szczegóły pojedynczego zadania."""
    try:
        task = get_service().get_task(task_id)
    except (DomainError, OSError) as e:
        handle_errors(e)
        return

    lines = [
        f"ID: {task.task_id}",
        f"Title: {escape(task.title)}",
        f"Description: {escape(task.description) if task.description else '[dim]brak[/]'}",
        f"Periodic: {'yes' if task.is_periodic else 'no'}",
        f"Priority: {color_priority(task.priority)}",
        f"Status: {color_status(task.status)}",
    ]
    console.print(Panel.fit("\n".join(lines), title="Szczegóły zadania", border_style="cyan"))


@app.command("demo")
def demo() -> None:
    """
    Pokazowy przebieg działania aplikacji w jednym procesie (InMemory).

    - Tworzy 3 zadania.
    - Pokazuje listę.
    - Oznacza jedno jako zakończone, innemu podnosi priorytet.
    - Usuwa trzecie.
    - Pokazuje listę po zmianach.
    """
    service = TaskService(InMemoryTaskRepository(), UuidIdProvider())
    console.print(Panel.fit("🚀 Start demonstracji", border_style="cyan"))

    t1 = service.create_task("Buy milk", description="2% lactose-free")
    t2 = service.create_task("Call mom", description="Sunday afternoon", periodic=True)
    t3 = service.create_task("Read a book", description="DDD chapter 3", priority="low")

    items = service.list_tasks()
    console.print(Panel.fit(f"✅ Utworzono {len(items)} zadania", border_style="green"))
    console.print("\n📋 Lista po utworzeniu:")
    render_list(items)

    service.mark_status("done", [t2.task_id])
    service.mark_priority("high", [t1.task_id])
    console.print(Panel.fit(f"✔️ Zamknięto zadanie: {short_id(t2.task_id)} ({escape(t2.title)})", border_style="yellow"))

    service.remove_tasks([t3.task_id])
    console.print(Panel.fit(f"🗑️ Usunięto zadanie: {short_id(t3.task_id)} ({escape(t3.title)})", border_style="red"))

    console.print("\n📋 Lista po zmianach:")
    render_list(service.list_tasks())


if __name__ == "__main__":
    app()
