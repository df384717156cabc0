import pytest
from agen.domain.resolver import IdentifierResolver, ResolutionState, validate_identifier
from agen.domain.errors import AmbiguousPrefixError, InvalidIdentifierError, TaskNotFoundError

SHARED_1 = "abcdef12-0000-4000-8000-000000000001"
SHARED_2 = "abcdef12-0000-4000-8000-000000000002"
DISTINCT = "99999999-0000-4000-8000-000000000003"


class FakeIdSource:
    def __init__(self, ids):
        self.ids = list(ids)
    def list_ids(self) -> list[str]:
        return list(self.ids)


@pytest.fixture
def resolver():
    return IdentifierResolver(FakeIdSource([SHARED_1, SHARED_2, DISTINCT]))


def test_count_with_prefix(resolver):
    assert resolver.count_with_prefix("abcdef12") == 2
    assert resolver.count_with_prefix("99999999") == 1
    assert resolver.count_with_prefix("0") == 0


def test_exists_and_is_unique(resolver):
    assert resolver.exists_and_is_unique("abcdef12") is False
    assert resolver.exists_and_is_unique("99999999") is True
    assert resolver.exists_and_is_unique(SHARED_1) is True
    assert resolver.exists_and_is_unique("0") is False


def test_lookup_states(resolver):
    assert resolver.lookup("0").state is ResolutionState.ABSENT
    ambiguous = resolver.lookup("abcdef12")
    assert ambiguous.state is ResolutionState.AMBIGUOUS
    assert ambiguous.count == 2
    assert ambiguous.task_id is None
    unique = resolver.lookup("9")
    assert unique.state is ResolutionState.UNIQUE
    assert unique.task_id == DISTINCT


def test_resolve(resolver):
    assert resolver.resolve(SHARED_2) == SHARED_2
    with pytest.raises(AmbiguousPrefixError) as exc:
        resolver.resolve("abc")
    assert exc.value.count == 2
    with pytest.raises(TaskNotFoundError):
        resolver.resolve("f")


@pytest.mark.parametrize("bad", ["", "x" * 37])
def test_invalid_identifier_length(resolver, bad):
    with pytest.raises(InvalidIdentifierError):
        validate_identifier(bad)
    with pytest.raises(InvalidIdentifierError):
        resolver.count_with_prefix(bad)
    with pytest.raises(InvalidIdentifierError):
        resolver.lookup(bad)
