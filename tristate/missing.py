import typing as t


class Missing:
    """Object type indicating that a key was not found in the input.

    This is only used while parsing, before a missing key is resolved into
    its final value.
    """
    _instance: t.Optional['Missing'] = None

    def __new__(cls) -> 'Missing':
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return 'MISSING'


T = t.TypeVar('T')
MISSING = Missing()
"""Constant that indicates that a key is missing, not None."""

Unset = t.Union[T, Missing]
"""Type that indicates that a value may be the MISSING constant."""
