"""Applies partial updates expressed with tri-state values to documents.

Each change decides what happens to the matching document key:

* ``ABSENT`` leaves the key untouched.
* ``NULL`` sets the key to None.
* ``Present(value)`` or a plain value replaces the key. When both the
  current value and the new one are mappings they are merged instead.
"""

import dataclasses
import logging
import typing as t

from tristate.base import TriState
from tristate.serialization import dump
from tristate.typing import JSONDict

logger = logging.getLogger(__name__)

Changes = t.Union[t.Mapping[str, t.Any], t.Any]


def apply(document: t.Mapping[str, t.Any], changes: Changes) -> JSONDict:
    """Returns a copy of the document with the changes applied.

    Parameters
    ----------
    document: Mapping
        Document to update. It is not modified.
    changes: Mapping or dataclass
        Changes to apply, keyed by document key.

    Returns
    -------
    JSONDict
        Updated document.
    """
    updated = {**document}
    for key, change in _items(changes):
        if isinstance(change, TriState):
            if change.is_absent():
                continue
            change = change.to_optional()
        current = document.get(key)
        if isinstance(current, t.Mapping) and _is_mergeable(change):
            logger.debug("Merging changes into key %r", key)
            updated[key] = apply(current, change)
        else:
            updated[key] = dump(change)
    return updated


def _items(changes: Changes) -> t.Iterable[t.Tuple[str, t.Any]]:
    if dataclasses.is_dataclass(changes) and not isinstance(changes, type):
        return (
            (item.name, getattr(changes, item.name))
            for item in dataclasses.fields(changes)
        )
    return changes.items()


def _is_mergeable(change: t.Any) -> bool:
    if dataclasses.is_dataclass(change):
        return not isinstance(change, type)
    return isinstance(change, t.Mapping)
