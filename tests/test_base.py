import copy
import pickle

import pytest

from tristate import (
    ABSENT, NULL, Absent, Null, Present, TriState, UnwrapOnEmptyError,
    Variant,
)

ALL = (Present(3), Present(None), NULL, ABSENT)


class TestConstruction:
    def test_default(self):
        """Default construction should give the absent value."""
        assert TriState() is ABSENT
        assert TriState.default() is ABSENT

    def test_arguments_rejected(self):
        """The bare type should not silently drop a value."""
        with pytest.raises(TypeError):
            TriState(5)
        with pytest.raises(TypeError):
            TriState(value=5)

    def test_singletons(self):
        """Empty variants should only ever have one instance."""
        assert Null() is NULL
        assert Absent() is ABSENT
        assert NULL is not ABSENT

    def test_present_holds_none(self):
        """A present None is still a present value."""
        assert Present(None).is_present()
        assert Present(None) != NULL


class TestPredicates:
    def test_present(self):
        """Present values should only answer to is_present."""
        value = Present(42)
        assert value.is_present()
        assert not value.is_null()
        assert not value.is_absent()
        assert value.is_value()
        assert not value.is_none_like()

    def test_null(self):
        assert NULL.is_null()
        assert not NULL.is_present()
        assert not NULL.is_absent()
        assert NULL.is_none_like()

    def test_absent(self):
        assert ABSENT.is_absent()
        assert not ABSENT.is_present()
        assert not ABSENT.is_null()
        assert ABSENT.is_none_like()

    @pytest.mark.parametrize('value', ALL)
    def test_exactly_one_state(self, value):
        """Exactly one state predicate should hold for any value."""
        states = [value.is_present(), value.is_null(), value.is_absent()]
        assert states.count(True) == 1

    def test_variant(self):
        assert Present(1).variant is Variant.PRESENT
        assert NULL.variant is Variant.NULL
        assert ABSENT.variant is Variant.ABSENT

    def test_contains(self):
        assert Present(2).contains(2)
        assert not Present(3).contains(2)
        assert not NULL.contains(None)
        assert not ABSENT.contains(None)

    def test_truthiness(self):
        """Only present values are truthy, whatever their payload."""
        assert Present(0)
        assert not NULL
        assert not ABSENT


class TestTransformation:
    def test_map(self):
        """Mapping should keep the variant of empty values."""
        assert Present(2).map(lambda x: x * 10) == Present(20)
        assert NULL.map(lambda x: x * 10) is NULL
        assert ABSENT.map(lambda x: x * 10) is ABSENT

    def test_map_or(self):
        assert Present(2).map_or(0, lambda x: x + 1) == 3
        assert NULL.map_or(0, lambda x: x + 1) == 0
        assert ABSENT.map_or_else(lambda: -1, lambda x: x + 1) == -1
        assert Present(2).map_or_else(lambda: -1, lambda x: x + 1) == 3

    def test_and(self):
        assert Present(2).and_(Present('foo')) == Present('foo')
        assert Present(2).and_(NULL) is NULL
        assert NULL.and_(Present('foo')) is NULL
        assert ABSENT.and_(Present('foo')) is ABSENT

    def test_and_then(self):
        def square(x):
            return Present(x * x)

        def nope(_):
            return NULL

        def empty(_):
            return ABSENT

        assert Present(2).and_then(square).and_then(square) == Present(16)
        assert Present(2).and_then(square).and_then(nope) is NULL
        assert Present(2).and_then(square).and_then(empty) is ABSENT
        assert Present(2).and_then(nope).and_then(square) is NULL
        assert ABSENT.and_then(square) is ABSENT

    def test_filter(self):
        """A filtered out value should become absent, never null."""
        def is_even(x):
            return x % 2 == 0

        assert Present(4).filter(is_even) == Present(4)
        assert Present(3).filter(is_even) is ABSENT
        assert NULL.filter(is_even) is NULL
        assert ABSENT.filter(is_even) is ABSENT

    def test_or(self):
        assert Present(2).or_(Present(100)) == Present(2)
        assert NULL.or_(Present(100)) == Present(100)
        assert ABSENT.or_(Present(100)) == Present(100)
        assert NULL.or_(ABSENT) is ABSENT
        assert ABSENT.or_(NULL) is NULL

    def test_or_else(self):
        """The fallback should only be evaluated for empty values."""
        def fail():
            raise AssertionError("fallback evaluated")

        assert Present('barbarians').or_else(fail) == Present('barbarians')
        assert NULL.or_else(lambda: Present('vikings')) == Present('vikings')
        assert NULL.or_else(lambda: ABSENT) is ABSENT

    def test_zip(self):
        assert Present(1).zip(Present('a')) == Present((1, 'a'))
        assert Present(1).zip(NULL) is NULL
        assert NULL.zip(NULL) is NULL
        assert Present(1).zip(ABSENT) is ABSENT
        assert ABSENT.zip(NULL) is ABSENT
        assert NULL.zip(ABSENT) is ABSENT

    def test_iteration(self):
        assert list(Present(4)) == [4]
        assert list(NULL) == []
        assert list(ABSENT) == []


class TestExtraction:
    def test_unwrap_present(self):
        assert Present(42).unwrap() == 42

    @pytest.mark.parametrize('value', (NULL, ABSENT))
    def test_unwrap_empty(self, value):
        """Unwrapping an empty value should name the variant."""
        with pytest.raises(UnwrapOnEmptyError) as info:
            value.unwrap()
        assert info.value.variant is value.variant
        assert value.variant.value in str(info.value)

    def test_unwrap_or(self):
        assert Present(1).unwrap_or(5) == 1
        assert NULL.unwrap_or(5) == 5
        assert ABSENT.unwrap_or(5) == 5

    def test_unwrap_or_else(self):
        assert Present(1).unwrap_or_else(lambda: 5) == 1
        assert ABSENT.unwrap_or_else(lambda: 5) == 5

    def test_expect(self):
        """Expect should fail with the given message."""
        assert Present('value').expect("needs a value") == 'value'
        with pytest.raises(UnwrapOnEmptyError, match="needs a value") as info:
            NULL.expect("needs a value")
        assert str(info.value) == "needs a value"
        assert info.value.variant is Variant.NULL

    def test_error_pickles(self):
        """The error should keep its message and variant when pickled."""
        with pytest.raises(UnwrapOnEmptyError) as info:
            ABSENT.unwrap()
        copied = pickle.loads(pickle.dumps(info.value))
        assert copied.variant is Variant.ABSENT
        assert str(copied) == str(info.value)
        assert copy.copy(info.value).variant is Variant.ABSENT

    def test_unwrap_or_raise(self):
        assert Present(1).unwrap_or_raise(KeyError('name')) == 1
        with pytest.raises(KeyError):
            ABSENT.unwrap_or_raise(KeyError('name'))
        with pytest.raises(LookupError):
            NULL.unwrap_or_raise(LookupError)


class TestConversion:
    def test_to_optional(self):
        """Both empty variants collapse into None."""
        assert Present(1).to_optional() == 1
        assert NULL.to_optional() is None
        assert ABSENT.to_optional() is None

    def test_from_optional_as_null(self):
        assert TriState.from_optional_as_null(None) is NULL
        assert TriState.from_optional_as_null(0) == Present(0)

    def test_from_optional_as_absent(self):
        assert TriState.from_optional_as_absent(None) is ABSENT
        assert TriState.from_optional_as_absent('') == Present('')

    def test_collect(self):
        """Collect should stop at the first empty value."""
        assert TriState.collect([Present(1), Present(2)]) == Present([1, 2])
        assert TriState.collect([]) == Present([])
        assert TriState.collect([Present(1), NULL, ABSENT]) is NULL
        assert TriState.collect([ABSENT, NULL]) is ABSENT


class TestComparison:
    def test_equality(self):
        assert Present(1) == Present(1)
        assert Present(1) != Present(2)
        assert Present(1) != 1
        assert NULL != None  # noqa: E711
        assert NULL != ABSENT

    def test_hash(self):
        assert len({Present(1), Present(1), NULL, ABSENT, NULL}) == 3

    def test_ordering(self):
        """Absent sorts before null, which sorts before any value."""
        values = [Present(2), NULL, Present(1), ABSENT]
        assert sorted(values) == [ABSENT, NULL, Present(1), Present(2)]
        assert ABSENT < NULL < Present(-100)
        assert Present(1) <= Present(1)
        assert Present(3) > Present(1)

    def test_ordering_unrelated_type(self):
        with pytest.raises(TypeError):
            _ = Present(1) < 2


class TestCopying:
    @pytest.mark.parametrize('value', (NULL, ABSENT))
    def test_empty_stays_singleton(self, value):
        assert copy.copy(value) is value
        assert copy.deepcopy(value) is value
        assert pickle.loads(pickle.dumps(value)) is value

    def test_present(self):
        value = Present([1, 2])
        copied = copy.deepcopy(value)
        assert copied == value
        assert copied.unwrap() is not value.unwrap()
        assert pickle.loads(pickle.dumps(value)) == value

    def test_repr(self):
        assert repr(Present('a')) == "Present('a')"
        assert repr(NULL) == 'Null'
        assert repr(ABSENT) == 'Absent'
