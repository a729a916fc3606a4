"""Loads dataclasses with tri-state fields from deserialized documents.

The parser of a dataclass is derived from its type hints. A field typed
``TriState[X]`` is never required: a missing key loads as the declared
default of the field, or ``ABSENT`` if it has none. An explicit null loads
as ``NULL``, and a value as ``Present`` of the parsed ``X``.
Values are never converted between types, except integers given for
float fields.
"""

import dataclasses
import functools
import logging
import types
import typing as t

from tristate.base import TriState
from tristate.missing import MISSING
from tristate.schema import parsers
from tristate.schema.exceptions import ValidationError
from tristate.typing import Key

logger = logging.getLogger(__name__)

T = t.TypeVar('T')

SCALARS: t.Dict[type, t.Type[parsers.Parser]] = {
    str: parsers.String,
    int: parsers.Integer,
    float: parsers.Float,
    bool: parsers.Boolean,
}

_UNIONS = {t.Union}
if hasattr(types, 'UnionType'):
    _UNIONS.add(types.UnionType)


def parser_for(annotation: t.Any, **kwargs) -> parsers.Parser:
    """Builds the parser matching a type annotation.

    Scalar, list and dict parsers are strict: an input value of the wrong
    type is rejected rather than converted. Unknown annotations get a parser
    that accepts any value as is.

    Parameters
    ----------
    annotation: Any
        Type annotation to build a parser for.
    **kwargs
        Options passed to the parser, such as `required`.

    Returns
    -------
    Parser
        Parser for values of the annotated type.
    """
    if annotation in SCALARS:
        return SCALARS[annotation](strict=True, **kwargs)
    if dataclasses.is_dataclass(annotation):
        return Record(annotation, **kwargs)
    origin = t.get_origin(annotation)
    args = t.get_args(annotation)
    if _is_tristate(origin or annotation):
        kwargs.pop('required', None)
        return parsers.Possible(parser_for(args[0]) if args else None, **kwargs)
    if origin in _UNIONS:
        remaining = [arg for arg in args if arg is not type(None)]
        if len(remaining) == 1 and len(args) == 2:
            return parsers.Nullable(parser_for(remaining[0]), **kwargs)
        return parsers.Parser(**kwargs)
    if annotation is list or origin is list:
        return parsers.List(
            parser_for(args[0]) if args else None, strict=True, **kwargs,
        )
    if annotation is dict or origin is dict:
        return parsers.Dict(
            parser_for(args[1]) if args else None, strict=True, **kwargs,
        )
    return parsers.Parser(**kwargs)


def _is_tristate(annotation: t.Any) -> bool:
    return isinstance(annotation, type) and issubclass(annotation, TriState)


class Record(parsers.Options):
    """Parses a dictionary into an instance of a dataclass.

    Fields without a default value are required, except tri-state fields
    which default to ``ABSENT``. Fields with a declared default keep it when
    their key is missing. Keys that do not match a field are ignored.

    Field parsers are built on first use, so a dataclass may refer to
    itself through its fields.

    Args:
        cls: Dataclass to create.
    """
    def __init__(self, cls: t.Type[T], **kwargs):
        super().__init__({}, **kwargs)
        self.cls: t.Type[T] = cls
        self._resolved: bool = False

    def resolve(self) -> t.Dict[str, parsers.Parser]:
        """Builds the parsers of the dataclass fields if not done yet."""
        if self._resolved:
            return self.parsers
        hints = t.get_type_hints(self.cls)
        for item in dataclasses.fields(self.cls):
            if not item.init:
                continue
            if (
                item.default is dataclasses.MISSING
                and item.default_factory is dataclasses.MISSING
            ):
                options = {'required': True}
            else:
                # Left out of the result so the dataclass default applies.
                options = {'default': MISSING}
            self.parsers[item.name] = parser_for(hints[item.name], **options)
        self._resolved = True
        return self.parsers

    def transform(self, value: t.Any, key: Key = (), coerce: bool = False) -> T:
        self.resolve()
        parsed = super().transform(value, key=key, coerce=coerce)
        if not isinstance(parsed, dict):
            return parsed
        ignored = parsed.keys() - self.parsers.keys()
        if ignored:
            logger.debug(
                "Ignoring unknown keys %s while loading %s",
                sorted(ignored), self.cls.__name__,
            )
        return self.cls(**{
            name: item for name, item in parsed.items()
            if name in self.parsers
        })

    def _validate(self, value: T, key: Key = ()) -> None:
        if not isinstance(value, self.cls):
            raise ValidationError(
                f"Expected a {self.cls.__name__} mapping but received "
                f"{value!r}", key=key,
            )


@functools.lru_cache(maxsize=None)
def record(cls: t.Type[T]) -> Record:
    """Returns the cached parser of a dataclass."""
    return Record(cls, required=True)


def load(cls: t.Type[T], data: t.Any) -> T:
    """Loads a deserialized document into a dataclass instance.

    Parameters
    ----------
    cls: Type
        Dataclass to load the document into.
    data: Any
        Deserialized document, usually a dictionary.

    Returns
    -------
    Instance of the dataclass.

    Raises
    ------
    ParsingError
        If the document does not match the fields of the dataclass.
    """
    return record(cls).parse(data)
