import pytest
from agen.services.task_filter import (
    TaskFilter,
    filter_tasks,
    parse_priority_filters,
    parse_status_filters,
)
from agen.domain.task import Task
from agen.domain.enums import Priority, TaskStatus


@pytest.fixture
def all_combinations() -> list[Task]:
    """Dziewięć zadań: każdy status x każdy priorytet."""
    return [
        Task.new(f"{s.token}-{p.token}", "", False, p, s)
        for s in TaskStatus
        for p in Priority
    ]


def test_no_filters_returns_everything(all_combinations):
    assert filter_tasks(all_combinations, []) == all_combinations


def test_unknown_tokens_are_ignored(all_combinations):
    assert filter_tasks(all_combinations, ["urgent", "-h", ""]) == all_combinations


def test_status_union(all_combinations):
    result = filter_tasks(all_combinations, ["done", "todo"])

    assert len(result) == 6
    assert {t.status for t in result} == {TaskStatus.TODO, TaskStatus.DONE}
    assert {t.priority for t in result} == set(Priority)


def test_status_and_priority_intersection(all_combinations):
    result = filter_tasks(all_combinations, ["done", "high"])

    assert len(result) == 1
    assert result[0].status == TaskStatus.DONE
    assert result[0].priority == Priority.HIGH


def test_union_within_both_categories(all_combinations):
    result = filter_tasks(all_combinations, ["todo", "doing", "low", "high"])
    assert len(result) == 4


def test_priority_only(all_combinations):
    result = filter_tasks(all_combinations, ["medium"])
    assert len(result) == 3
    assert all(t.priority == Priority.MEDIUM for t in result)


def test_keeps_input_order(all_combinations):
    result = filter_tasks(all_combinations, ["low"])
    assert result == [t for t in all_combinations if t.priority == Priority.LOW]


def test_duplicates_collapse():
    tokens = ["done", "done", "todo", "high", "high", "foo"]
    assert parse_status_filters(tokens) == [TaskStatus.DONE, TaskStatus.TODO]
    assert parse_priority_filters(tokens) == [Priority.HIGH]


def test_from_tokens():
    f = TaskFilter.from_tokens(["doing", "low"])
    assert f.statuses == (TaskStatus.DOING,)
    assert f.priorities == (Priority.LOW,)
    assert not f.is_empty
    assert TaskFilter.from_tokens([]).is_empty
