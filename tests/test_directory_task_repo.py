import pytest
from pathlib import Path
from agen.adapters.binary.task_repo import DirectoryTaskRepository
from agen.adapters.binary.record_codec import encode_task
from agen.domain.task import Task, TaskId
from agen.domain.enums import Priority, TaskStatus
from agen.domain.errors import (
    AmbiguousPrefixError,
    InvalidIdentifierError,
    InvalidStorePathError,
    RecordFormatError,
    TaskNotFoundError,
)

SHARED_1 = "abcdef12-0000-4000-8000-000000000001"
SHARED_2 = "abcdef12-0000-4000-8000-000000000002"
DISTINCT = "99999999-0000-4000-8000-000000000003"


@pytest.fixture
def tmp_repo(tmp_path):
    """Repozytorium na świeżym, pustym katalogu."""
    tasks_dir = tmp_path / "tasks"
    tasks_dir.mkdir()
    return DirectoryTaskRepository(tasks_dir)


def make_task(task_id: str, title: str = "Test") -> Task:
    return Task.new(title, "desc", False, Priority.MEDIUM, TaskStatus.TODO, task_id=TaskId(task_id))


def test_empty_path_raises():
    with pytest.raises(InvalidStorePathError):
        DirectoryTaskRepository("")


def test_save_writes_file_named_by_id(tmp_repo):
    task = Task.new_default("Kup mleko")
    tmp_repo.save(task)

    path = tmp_repo.path / task.task_id
    assert path.is_file()
    assert path.read_bytes() == encode_task(task)


def test_save_and_get(tmp_repo):
    task = Task.new("A", "opis", True, Priority.HIGH, TaskStatus.DOING)
    tmp_repo.save(task)

    fetched = tmp_repo.get(task.task_id)
    assert fetched == task


def test_save_twice_is_idempotent(tmp_repo):
    task = Task.new_default("A")
    tmp_repo.save(task)
    size_first = (tmp_repo.path / task.task_id).stat().st_size
    tmp_repo.save(task)

    assert tmp_repo.list_ids() == [task.task_id]
    assert (tmp_repo.path / task.task_id).stat().st_size == size_first


def test_save_overwrites_shorter_record(tmp_repo):
    task = Task.new("A", "long description", False, 0, 3)
    tmp_repo.save(task)
    task.set_description("")
    tmp_repo.save(task)

    assert tmp_repo.get(task.task_id).description == ""


def test_get_missing_raises(tmp_repo):
    with pytest.raises(TaskNotFoundError):
        tmp_repo.get(DISTINCT)


@pytest.mark.parametrize("bad", ["", "x" * 37])
def test_get_invalid_identifier_length_raises(tmp_repo, bad):
    with pytest.raises(InvalidIdentifierError):
        tmp_repo.get(bad)


def test_get_by_unique_prefix(tmp_repo):
    tmp_repo.save(make_task(SHARED_1, "A"))
    tmp_repo.save(make_task(DISTINCT, "B"))

    assert tmp_repo.get("9999").title == "B"


def test_get_by_ambiguous_prefix_raises(tmp_repo):
    tmp_repo.save(make_task(SHARED_1))
    tmp_repo.save(make_task(SHARED_2))

    with pytest.raises(AmbiguousPrefixError):
        tmp_repo.get("abcdef12")


def test_list_empty_dir_returns_empty_list(tmp_repo):
    assert tmp_repo.list_all() == []


def test_list_returns_every_task(tmp_repo):
    t1 = make_task(SHARED_1, "A")
    t2 = make_task(DISTINCT, "B")
    tmp_repo.save(t1)
    tmp_repo.save(t2)

    all_tasks = tmp_repo.list_all()
    assert len(all_tasks) == 2
    assert {t.task_id for t in all_tasks} == {SHARED_1, DISTINCT}


def test_list_with_one_corrupt_record_fails(tmp_repo):
    tmp_repo.save(make_task(SHARED_1))
    good = encode_task(make_task(DISTINCT))
    (tmp_repo.path / DISTINCT).write_bytes(good[:-3])

    with pytest.raises(RecordFormatError):
        tmp_repo.list_all()


def test_list_with_empty_file_fails(tmp_repo):
    (tmp_repo.path / DISTINCT).write_bytes(b"")
    with pytest.raises(RecordFormatError):
        tmp_repo.list_all()


def test_list_missing_directory_raises_os_error(tmp_path):
    repo = DirectoryTaskRepository(tmp_path / "nope")
    with pytest.raises(FileNotFoundError):
        repo.list_all()


def test_exists(tmp_repo):
    tmp_repo.save(make_task(SHARED_1))
    tmp_repo.save(make_task(SHARED_2))

    assert tmp_repo.exists("abcdef12")
    assert tmp_repo.exists(SHARED_1)
    assert not tmp_repo.exists("0000")


def test_count_with_prefix(tmp_repo):
    tmp_repo.save(make_task(SHARED_1))
    tmp_repo.save(make_task(SHARED_2))
    tmp_repo.save(make_task(DISTINCT))

    assert tmp_repo.count_with_prefix("abcdef12") == 2
    assert tmp_repo.count_with_prefix("9") == 1
    assert tmp_repo.count_with_prefix("f") == 0


def test_remove_by_full_id(tmp_repo):
    task = make_task(SHARED_1)
    tmp_repo.save(task)

    assert tmp_repo.remove(SHARED_1) == SHARED_1
    with pytest.raises(TaskNotFoundError):
        tmp_repo.get(SHARED_1)


def test_remove_by_prefix(tmp_repo):
    tmp_repo.save(make_task(SHARED_1))
    tmp_repo.save(make_task(DISTINCT))

    assert tmp_repo.remove("999") == DISTINCT
    assert tmp_repo.list_ids() == [SHARED_1]


def test_remove_ambiguous_prefix_removes_nothing(tmp_repo):
    tmp_repo.save(make_task(SHARED_1))
    tmp_repo.save(make_task(SHARED_2))

    with pytest.raises(AmbiguousPrefixError):
        tmp_repo.remove("abcdef12")
    assert sorted(tmp_repo.list_ids()) == [SHARED_1, SHARED_2]


def test_remove_missing_raises(tmp_repo):
    with pytest.raises(TaskNotFoundError):
        tmp_repo.remove("abc")


def test_two_repositories_do_not_share_state(tmp_path: Path):
    (tmp_path / "a").mkdir()
    (tmp_path / "b").mkdir()
    repo_a = DirectoryTaskRepository(tmp_path / "a")
    repo_b = DirectoryTaskRepository(tmp_path / "b")

    repo_a.save(make_task(SHARED_1))

    assert len(repo_a.list_all()) == 1
    assert repo_b.list_all() == []
