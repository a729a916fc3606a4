"""Hooks serializers use to handle tri-state fields.

None of these depend on a particular serialization library. A serializer
omits a field when ``skip_if_absent`` is true for its value, and fills a
field missing from its input with ``default_absent()``::

    @dataclasses.dataclass
    class Update:
        id: int
        name: TriState[str] = field()

    dump(Update(id=1))             # {'id': 1}
    dump(Update(id=1, name=NULL))  # {'id': 1, 'name': None}
"""

import dataclasses
import typing as t

from tristate.base import ABSENT, NULL, Present, TriState
from tristate.typing import JSONValue


def skip_if_absent(value: t.Any) -> bool:
    """Returns True if a field with the given value should be left out.

    Only ``ABSENT`` is skipped. ``NULL`` is written as an explicit null.
    """
    return value is ABSENT


def default_absent() -> TriState[t.Any]:
    """Default value of a tri-state field missing from the input."""
    return ABSENT


def field(**kwargs) -> t.Any:
    """Declares a dataclass field that defaults to ``ABSENT``.

    Args:
        **kwargs: Passed through to ``dataclasses.field``.

    Returns:
        Dataclass field definition.
    """
    return dataclasses.field(default_factory=default_absent, **kwargs)


def to_builtin(value: TriState[t.Any]) -> JSONValue:
    """Converts a tri-state value into its serialized form.

    ``NULL`` becomes None and ``Present(value)`` becomes the dumped value.
    ``ABSENT`` also becomes None; it is only left out when it sits under a
    key that can be omitted.
    """
    return value.map_or(None, dump)


def from_builtin(value: JSONValue) -> TriState[t.Any]:
    """Converts a deserialized value found in the input into a tri-state.

    The key holding the value must have been present in the input. Missing
    keys resolve to ``default_absent()`` instead.
    """
    if value is None:
        return NULL
    return Present(value)


def dump(obj: t.Any) -> JSONValue:
    """Converts a value containing tri-state fields into builtin types.

    Dataclasses and mappings become dictionaries with their ``ABSENT``
    entries omitted. Lists and tuples become lists, where ``ABSENT`` items
    are written as None since there is no key to omit.

    Parameters
    ----------
    obj: Any
        Value to convert.

    Returns
    -------
    JSONValue
        Value made only of builtin types, ready to be encoded.
    """
    if isinstance(obj, TriState):
        return to_builtin(obj)
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return _dump_items(
            (item.name, getattr(obj, item.name))
            for item in dataclasses.fields(obj)
        )
    if isinstance(obj, t.Mapping):
        return _dump_items(obj.items())
    if isinstance(obj, (list, tuple)):
        return [dump(value) for value in obj]
    return obj


def _dump_items(items: t.Iterable[t.Tuple[str, t.Any]]) -> t.Dict[str, t.Any]:
    return {
        key: dump(value) for key, value in items if not skip_if_absent(value)
    }
