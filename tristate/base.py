"""Tri-state value type separating a value, an explicit null and absence.

A two-state optional cannot tell a field that was explicitly set to null
apart from a field that was never given. ``TriState`` keeps the two apart:

* ``Present(value)`` holds an actual value.
* ``NULL`` is an explicit, intentional null.
* ``ABSENT`` means nothing was ever supplied. It is the default.

``Null`` and ``Absent`` are singletons, so ``Null() is NULL`` and
``Absent() is ABSENT``. Instances are never changed in place; every
transformation returns a new value.
"""

import enum
import functools
import typing as t

from tristate.exceptions import UnwrapOnEmptyError

T = t.TypeVar('T')
U = t.TypeVar('U')
V = t.TypeVar('V')


class Variant(enum.Enum):
    """Names the active variant of a tri-state value.

    Members are declared in sort order.
    """
    ABSENT = 'Absent'
    NULL = 'Null'
    PRESENT = 'Present'


_RANKS: t.Dict[Variant, int] = {
    variant: rank for rank, variant in enumerate(Variant)
}


@functools.total_ordering
class TriState(t.Generic[T]):
    """Closed union of the ``Present``, ``Null`` and ``Absent`` variants.

    This class is never instantiated itself. Calling ``TriState()`` returns
    the default value, ``ABSENT``, and takes no arguments.

    Values order as ``Absent < Null < Present(_)``. Two present values
    compare by their payloads.
    """

    __slots__ = ()

    variant: Variant

    def __new__(cls, *args, **kwargs):
        if cls is TriState:
            if args or kwargs:
                raise TypeError(
                    "TriState() takes no arguments, use Present(value) to "
                    "wrap a value",
                )
            return ABSENT
        return super().__new__(cls)

    @classmethod
    def default(cls) -> 'TriState[T]':
        """Returns the default tri-state value, which is ``ABSENT``."""
        return ABSENT

    @classmethod
    def from_optional_as_null(cls, value: t.Optional[T]) -> 'TriState[T]':
        """Converts an optional value, treating ``None`` as an explicit null.

        Args:
            value: Value to convert.

        Returns:
            ``NULL`` if the value is None, otherwise ``Present(value)``.
        """
        if value is None:
            return NULL
        return Present(value)

    @classmethod
    def from_optional_as_absent(cls, value: t.Optional[T]) -> 'TriState[T]':
        """Converts an optional value, treating ``None`` as never supplied.

        Args:
            value: Value to convert.

        Returns:
            ``ABSENT`` if the value is None, otherwise ``Present(value)``.
        """
        if value is None:
            return ABSENT
        return Present(value)

    @classmethod
    def collect(
        cls,
        items: t.Iterable['TriState[T]'],
    ) -> 'TriState[t.List[T]]':
        """Gathers the payloads of multiple tri-state values into a list.

        Iteration stops at the first empty value, which is returned as is.

        Args:
            items: Tri-state values to collect.

        Returns:
            ``Present`` list of every payload if all items are present,
            otherwise the first ``Null`` or ``Absent`` item found.
        """
        values: t.List[T] = []
        for item in items:
            if not item.is_present():
                return item
            values.append(item.unwrap())
        return Present(values)

    def is_present(self) -> bool:
        return self.variant is Variant.PRESENT

    def is_null(self) -> bool:
        return self.variant is Variant.NULL

    def is_absent(self) -> bool:
        return self.variant is Variant.ABSENT

    def is_value(self) -> bool:
        """Alias of ``is_present``."""
        return self.is_present()

    def is_none_like(self) -> bool:
        """Returns True for both ``Null`` and ``Absent``."""
        return not self.is_present()

    def contains(self, value: t.Any) -> bool:
        """Returns True if this is present with a payload equal to value."""
        return self.map_or(False, lambda payload: payload == value)

    def to_optional(self) -> t.Optional[T]:
        """Converts to an optional value.

        This loses information: both ``Null`` and ``Absent`` become None.
        """
        return self.unwrap_or(None)

    def map_or(self, default: U, function: t.Callable[[T], U]) -> U:
        """Applies function to a present payload, otherwise returns default."""
        if self.is_present():
            return function(self.unwrap())
        return default

    def map_or_else(
        self,
        default: t.Callable[[], U],
        function: t.Callable[[T], U],
    ) -> U:
        """Applies function to a present payload, otherwise calls default."""
        if self.is_present():
            return function(self.unwrap())
        return default()

    def zip(self, other: 'TriState[U]') -> 'TriState[t.Tuple[T, U]]':
        """Pairs the payloads of two present values.

        Args:
            other: Value to pair this one with.

        Returns:
            ``Present((a, b))`` if both are present. Otherwise ``ABSENT`` if
            either side is absent, and ``NULL`` if neither is.
        """
        if self.is_present() and other.is_present():
            return Present((self.unwrap(), other.unwrap()))
        if self.is_absent() or other.is_absent():
            return ABSENT
        return NULL

    def __bool__(self) -> bool:
        return self.is_present()

    def __lt__(self, other: t.Any) -> bool:
        if not isinstance(other, TriState):
            return NotImplemented
        if self.is_present() and other.is_present():
            return self.unwrap() < other.unwrap()
        return _RANKS[self.variant] < _RANKS[other.variant]

    # Subclasses provide the rest of the interface.

    def map(self, function: t.Callable[[T], U]) -> 'TriState[U]':
        raise NotImplementedError

    def and_(self, other: 'TriState[U]') -> 'TriState[U]':
        raise NotImplementedError

    def and_then(
        self,
        function: t.Callable[[T], 'TriState[U]'],
    ) -> 'TriState[U]':
        raise NotImplementedError

    def filter(self, predicate: t.Callable[[T], bool]) -> 'TriState[T]':
        raise NotImplementedError

    def or_(self, fallback: 'TriState[T]') -> 'TriState[T]':
        raise NotImplementedError

    def or_else(
        self,
        function: t.Callable[[], 'TriState[T]'],
    ) -> 'TriState[T]':
        raise NotImplementedError

    def unwrap(self) -> T:
        raise NotImplementedError

    def unwrap_or(self, default: T) -> T:
        raise NotImplementedError

    def unwrap_or_else(self, function: t.Callable[[], T]) -> T:
        raise NotImplementedError

    def unwrap_or_raise(
        self,
        error: t.Union[BaseException, t.Callable[[], BaseException]],
    ) -> T:
        raise NotImplementedError

    def expect(self, message: str) -> T:
        raise NotImplementedError

    def __iter__(self) -> t.Iterator[T]:
        raise NotImplementedError


class Present(TriState[T]):
    """Tri-state variant holding an actual value.

    Args:
        value: Payload of the variant.
    """

    __slots__ = ('_value',)
    __match_args__ = ('value',)

    variant = Variant.PRESENT

    def __init__(self, value: T):
        self._value: T = value

    @property
    def value(self) -> T:
        return self._value

    def map(self, function: t.Callable[[T], U]) -> 'TriState[U]':
        """Returns ``Present`` of the function applied to the payload."""
        return Present(function(self._value))

    def and_(self, other: 'TriState[U]') -> 'TriState[U]':
        return other

    def and_then(
        self,
        function: t.Callable[[T], 'TriState[U]'],
    ) -> 'TriState[U]':
        return function(self._value)

    def filter(self, predicate: t.Callable[[T], bool]) -> 'TriState[T]':
        """Keeps the value if it matches the predicate.

        A value that gets filtered out becomes ``ABSENT``, not ``NULL``.
        """
        if predicate(self._value):
            return self
        return ABSENT

    def or_(self, fallback: 'TriState[T]') -> 'TriState[T]':
        return self

    def or_else(
        self,
        function: t.Callable[[], 'TriState[T]'],
    ) -> 'TriState[T]':
        return self

    def unwrap(self) -> T:
        return self._value

    def unwrap_or(self, default: T) -> T:
        return self._value

    def unwrap_or_else(self, function: t.Callable[[], T]) -> T:
        return self._value

    def unwrap_or_raise(
        self,
        error: t.Union[BaseException, t.Callable[[], BaseException]],
    ) -> T:
        return self._value

    def expect(self, message: str) -> T:
        return self._value

    def __iter__(self) -> t.Iterator[T]:
        yield self._value

    def __eq__(self, other: t.Any) -> bool:
        if not isinstance(other, TriState):
            return NotImplemented
        return isinstance(other, Present) and self._value == other._value

    def __hash__(self) -> int:
        return hash((self.variant, self._value))

    def __reduce__(self):
        return self.__class__, (self._value,)

    def __repr__(self) -> str:
        return f"Present({self._value!r})"


class _Empty(TriState[T]):
    """Shared behaviour of the two payload-free variants."""

    __slots__ = ()

    _instance: t.Optional['_Empty'] = None

    def __new__(cls) -> '_Empty':
        if cls.__dict__.get('_instance') is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def map(self, function: t.Callable[[T], U]) -> 'TriState[U]':
        return self

    def and_(self, other: 'TriState[U]') -> 'TriState[U]':
        return self

    def and_then(
        self,
        function: t.Callable[[T], 'TriState[U]'],
    ) -> 'TriState[U]':
        return self

    def filter(self, predicate: t.Callable[[T], bool]) -> 'TriState[T]':
        return self

    def or_(self, fallback: 'TriState[T]') -> 'TriState[T]':
        return fallback

    def or_else(
        self,
        function: t.Callable[[], 'TriState[T]'],
    ) -> 'TriState[T]':
        return function()

    def unwrap(self) -> T:
        raise UnwrapOnEmptyError(variant=self.variant)

    def unwrap_or(self, default: T) -> T:
        return default

    def unwrap_or_else(self, function: t.Callable[[], T]) -> T:
        return function()

    def unwrap_or_raise(
        self,
        error: t.Union[BaseException, t.Callable[[], BaseException]],
    ) -> T:
        if isinstance(error, BaseException):
            raise error
        raise error()

    def expect(self, message: str) -> T:
        raise UnwrapOnEmptyError(message, variant=self.variant)

    def __iter__(self) -> t.Iterator[T]:
        return iter(())

    def __hash__(self) -> int:
        return hash(self.variant)

    def __repr__(self) -> str:
        return self.variant.value


class Null(_Empty[T]):
    """Tri-state variant for an explicit, intentional null."""

    __slots__ = ()

    variant = Variant.NULL

    def __reduce__(self) -> str:
        return 'NULL'


class Absent(_Empty[T]):
    """Tri-state variant for a value that was never supplied."""

    __slots__ = ()

    variant = Variant.ABSENT

    def __reduce__(self) -> str:
        return 'ABSENT'


NULL: TriState[t.Any] = Null()
"""The explicit null value."""

ABSENT: TriState[t.Any] = Absent()
"""The absent value, default of every tri-state."""
