"""JSON and YAML encoding of values with tri-state fields.

``ABSENT`` fields are left out of the encoded document and ``NULL`` fields
are written as the format's null. Decoding with a dataclass resolves keys
missing from the document to ``ABSENT``.
"""

import logging
import typing as t

import orjson
import yaml

from tristate.schema.records import load
from tristate.serialization import dump

logger = logging.getLogger(__name__)

T = t.TypeVar('T')


def dumps_json(obj: t.Any, **kwargs) -> bytes:
    """Encodes a value as JSON.

    Args:
        obj: Value to encode.
        **kwargs: Passed through to ``orjson.dumps``, such as `option`.

    Returns:
        UTF-8 encoded JSON document.
    """
    return orjson.dumps(dump(obj), **kwargs)


def loads_json(
    data: t.Union[bytes, str],
    cls: t.Optional[t.Type[T]] = None,
) -> t.Any:
    """Decodes a JSON document, optionally into a dataclass.

    Args:
        data: JSON document to decode.
        cls: Dataclass to load the document into.

    Returns:
        Dataclass instance if one was given, otherwise the decoded document.
    """
    document = orjson.loads(data)
    if cls is None:
        return document
    logger.debug("Loading JSON document into %s", cls.__name__)
    return load(cls, document)


def dumps_yaml(obj: t.Any, **kwargs) -> str:
    """Encodes a value as YAML.

    Keys keep their insertion order unless `sort_keys` is given.
    """
    kwargs.setdefault('sort_keys', False)
    return yaml.safe_dump(dump(obj), **kwargs)


def loads_yaml(
    text: t.Union[bytes, str],
    cls: t.Optional[t.Type[T]] = None,
) -> t.Any:
    """Decodes a YAML document, optionally into a dataclass.

    A key without a value, like ``name:``, is an explicit null.
    """
    document = yaml.safe_load(text)
    if cls is None:
        return document
    logger.debug("Loading YAML document into %s", cls.__name__)
    return load(cls, document)
