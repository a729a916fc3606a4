import dataclasses
import typing as t

from tristate import (
    ABSENT, NULL, Present, TriState, default_absent, dump, field,
    from_builtin, skip_if_absent, to_builtin,
)


@dataclasses.dataclass
class User:
    id: int
    name: TriState[str] = field()
    enabled: TriState[bool] = field()


class TestHooks:
    def test_skip_if_absent(self):
        """Only absent values should be skipped."""
        assert skip_if_absent(ABSENT)
        assert not skip_if_absent(NULL)
        assert not skip_if_absent(Present(None))
        assert not skip_if_absent(None)

    def test_default_absent(self):
        assert default_absent() is ABSENT

    def test_field_default(self):
        """Fields declared with field() should default to absent."""
        user = User(id=1)
        assert user.name is ABSENT
        assert user.enabled is ABSENT

    def test_to_builtin(self):
        assert to_builtin(Present(5)) == 5
        assert to_builtin(NULL) is None
        assert to_builtin(Present(User(id=2))) == {'id': 2}

    def test_from_builtin(self):
        assert from_builtin(None) is NULL
        assert from_builtin(0) == Present(0)
        assert from_builtin('') == Present('')


class TestDump:
    def test_absent_field_omitted(self):
        """Absent fields should not appear at all in the dumped value."""
        user = User(id=1324, name=ABSENT, enabled=Present(True))
        assert dump(user) == {'id': 1324, 'enabled': True}

    def test_null_field_kept(self):
        assert dump(User(id=1, name=NULL)) == {'id': 1, 'name': None}

    def test_mapping(self):
        data = {'a': ABSENT, 'b': NULL, 'c': Present({'d': ABSENT, 'e': 1})}
        assert dump(data) == {'b': None, 'c': {'e': 1}}

    def test_sequence(self):
        """Absent items in a sequence have no key to omit and become None."""
        assert dump([Present(1), NULL, ABSENT]) == [1, None, None]
        assert dump((1, Present(2))) == [1, 2]

    def test_top_level(self):
        assert dump(ABSENT) is None
        assert dump(NULL) is None
        assert dump(Present('x')) == 'x'

    def test_plain_values(self):
        data: t.Dict[str, t.Any] = {'a': 1, 'b': [None, 'x'], 'c': None}
        assert dump(data) == data
