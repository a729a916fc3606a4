import functools
import typing as t

if t.TYPE_CHECKING:
    from tristate.base import Variant


class Error(Exception):
    """Base error class for the library."""


class UnwrapOnEmptyError(Error):
    """A value was forcibly extracted from a Null or Absent tri-state.

    Args:
        variant: Empty variant the extraction was attempted on.
    """
    def __init__(self, *args, variant: 'Variant'):
        if not args:
            args = (
                f"Called unwrap() on a {variant.value} value",
            )
        super().__init__(*args)
        self.variant: 'Variant' = variant

    def __reduce__(self):
        return (
            functools.partial(self.__class__, variant=self.variant),
            self.args,
        )
