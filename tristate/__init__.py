"""Tri-state values separating a present value, an explicit null and absence."""

from .base import ABSENT, NULL, Absent, Null, Present, TriState, Variant
from .exceptions import Error, UnwrapOnEmptyError
from .serialization import (
    default_absent, dump, field, from_builtin, skip_if_absent, to_builtin,
)
