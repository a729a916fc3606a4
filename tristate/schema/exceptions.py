from tristate.exceptions import Error
from tristate.typing import Key


class ParsingError(Error):
    """Input value could not be parsed.

    Args:
        key: Nested key of the value that failed to parse. An empty key
            refers to the root of the input.
    """
    def __init__(self, *args, key: Key = ()):
        super().__init__(*args)
        self.key: Key = key

    def __str__(self):
        if self.key:
            return f"{'.'.join(self.key)}: {super().__str__()}"
        return super().__str__()


class TransformationError(ParsingError):
    """Value could not be converted into the expected type."""


class ValidationError(ParsingError):
    """Value was converted but is not acceptable."""
