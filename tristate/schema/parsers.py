import os
import typing as t

from tristate.base import ABSENT, NULL, Present, TriState
from tristate.missing import MISSING, Unset
from tristate.schema.exceptions import (
    ParsingError, TransformationError, ValidationError,
)
from tristate.typing import Key

T = t.TypeVar('T')
Fallback = t.Callable[[], Unset[t.Any]]
Transformer = t.Callable[[t.Any], T]
Validator = t.Callable[[T], None]


def env(variable: str) -> Fallback:
    """Environment variable fallback function.

    Args:
        variable: Environment variable to retrieve value from.

    Returns:
        Getter function that retrieves either the string value of the
        environment variable or MISSING.
    """
    def callback():
        return os.environ.get(variable, MISSING)
    return callback


class Parser(t.Generic[T]):
    """Parses, transforms, and validates input values.

    A strict parser rejects input values of the wrong type instead of
    converting them. Values retrieved from a fallback are always converted,
    since fallbacks such as environment variables only ever give strings.

    Args:
        required: If the value is required from either the given value or one
            of the fallback values.
        fallbacks: Iterable of callables that will be used to retrieve a value
            if one is not given.
        default: Default value to use if a value is not given or retrieved
            from one of the fallback callables.
        transformers: Iterable of callables that will be used to transform
            the value before validation.
        validators: Iterable of callables that will be used to validate the
            parsed value.
        strict: If input values must already have the expected type.
    """
    def __init__(
        self,
        required: bool = False,
        fallbacks: t.Iterable[Fallback] = (),
        default: Unset[T] = MISSING,
        transformers: t.Iterable[Transformer] = (),
        validators: t.Iterable[Validator] = (),
        strict: bool = False,
    ):
        self.required: bool = required
        self.fallbacks: t.List[Fallback] = [*fallbacks]
        self.default: Unset[T] = default
        self.transformers: t.List[Transformer] = [*transformers]
        self.validators: t.List[Validator] = [*validators]
        self.strict: bool = strict

    def parse(
        self,
        value: Unset[t.Any],
        key: Key = (),
        coerce: bool = False,
    ) -> Unset[T]:
        """Parses the given input value.

        Args:
            value: Value to parse, or MISSING if the key was not in the
                input.
            key: Current nested key in the input. This is used to give
                context to ParsingError messages.
            coerce: If the value should be converted even when the parser
                is strict. Set for values that came from a fallback.

        Returns:
            Parsed value, the default value, or MISSING if the value is
            missing and there is no default.

        Raises:
            ValidationError: If the value is required but missing, or is
                not acceptable.
            TransformationError: If the value cannot be converted.
        """
        if value is MISSING:
            for fallback in self.fallbacks:
                value = fallback()
                if value is not MISSING:
                    break
            if value is MISSING:
                if self.required:
                    raise ValidationError(
                        "Expected a value but received none.", key=key,
                    )
                return self.default
            coerce = True
        if self.strict and not coerce:
            self._check(value, key=key)
        value = self.transform(value, key=key, coerce=coerce)
        self.validate(value, key=key)
        return value

    def transform(self, value: t.Any, key: Key = (), coerce: bool = False) -> T:
        value = self._transform(value, key=key)
        for transformer in self.transformers:
            try:
                value = transformer(value)
            except ParsingError as error:
                error.key = key
                raise error
            except Exception as error:
                raise TransformationError(
                    "Encountered unexpected error while transforming value.",
                    key=key,
                ) from error
        return value

    def _check(self, value: t.Any, key: Key = ()) -> None:
        """Checks the type of an input value before it is transformed."""

    def _transform(self, value: t.Any, key: Key = ()) -> T:
        return value

    def validate(self, value: T, key: Key = ()) -> None:
        self._validate(value, key=key)
        for validator in self.validators:
            try:
                validator(value)
            except ValidationError as error:
                error.key = key
                raise error
            except Exception as error:
                raise ValidationError(
                    "Encountered unexpected error while validating value.",
                    key=key,
                ) from error

    def _validate(self, value: T, key: Key = ()) -> None:
        """Checks the transformed value. Accepts anything by default."""


class String(Parser[str]):
    def _check(self, value: t.Any, key: Key = ()) -> None:
        self._validate(value, key=key)

    def _transform(self, value: t.Any, key: Key = ()) -> str:
        if not isinstance(value, str):
            value = str(value)
        return value

    def _validate(self, value: str, key: Key = ()) -> None:
        if not isinstance(value, str):
            raise ValidationError(
                f"Expected a string but received {value!r}", key=key,
            )


class Integer(Parser[int]):
    def _check(self, value: t.Any, key: Key = ()) -> None:
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValidationError(
                f"Expected an integer but received {value!r}", key=key,
            )

    def _transform(self, value: t.Any, key: Key = ()) -> int:
        if not isinstance(value, int):
            try:
                value = int(value)
            except Exception as error:
                raise TransformationError(
                    "Expected an integer castable value but received "
                    f"incompatible value {value!r}", key=key,
                ) from error
        return value

    def _validate(self, value: int, key: Key = ()) -> None:
        if not isinstance(value, int):
            raise ValidationError(
                f"Expected an integer but received {value!r}", key=key,
            )


class Float(Parser[float]):
    def _check(self, value: t.Any, key: Key = ()) -> None:
        # Integers are valid floats in JSON and YAML.
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValidationError(
                f"Expected a float but received {value!r}", key=key,
            )

    def _transform(self, value: t.Any, key: Key = ()) -> float:
        if not isinstance(value, float):
            try:
                value = float(value)
            except Exception as error:
                raise TransformationError(
                    "Expected a float castable value but received "
                    f"incompatible value {value!r}", key=key,
                ) from error
        return value

    def _validate(self, value: float, key: Key = ()) -> None:
        if not isinstance(value, float):
            raise ValidationError(
                f"Expected a float but received {value!r}", key=key,
            )


class Boolean(Parser[bool]):
    TRUE_STRINGS: t.Iterable[str] = ('true', 't', 'yes', 'y', '1')
    FALSE_STRINGS: t.Iterable[str] = ('false', 'f', 'no', 'n', '0')

    def __init__(
        self,
        true_strings: t.Iterable[str] = (),
        false_strings: t.Iterable[str] = (),
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.true_strings: t.Set[str] = {
            value.lower() for value in (true_strings or self.TRUE_STRINGS)
        }
        self.false_strings: t.Set[str] = {
            value.lower() for value in (false_strings or self.FALSE_STRINGS)
        }

    def _check(self, value: t.Any, key: Key = ()) -> None:
        self._validate(value, key=key)

    def _transform(self, value: t.Any, key: Key = ()) -> bool:
        if isinstance(value, str):
            lowercase = value.lower()
            if lowercase in self.true_strings:
                return True
            if lowercase in self.false_strings:
                return False
            return value
        return bool(value)

    def _validate(self, value: bool, key: Key = ()) -> None:
        if not isinstance(value, bool):
            raise ValidationError(
                f"Expected a bool but received {value!r}", key=key,
            )


class Possible(Parser[TriState[T]]):
    """Parses a field that may be present, explicitly null, or absent.

    A key missing from the input becomes ``ABSENT`` once the fallbacks are
    exhausted, unless another default is given. An explicit None becomes
    ``NULL``, and anything else is parsed by the inner parser and wrapped in
    ``Present``.

    Args:
        parser: Parser to use for a present value.
    """
    def __init__(self, parser: t.Optional[Parser[T]] = None, **kwargs):
        kwargs.setdefault('default', ABSENT)
        super().__init__(**kwargs)
        self.parser: Parser[T] = parser or Parser()

    def transform(
        self,
        value: t.Any,
        key: Key = (),
        coerce: bool = False,
    ) -> TriState[T]:
        if value is None:
            value = NULL
        elif not isinstance(value, TriState):
            value = Present(self.parser.parse(value, key=key, coerce=coerce))
        return super().transform(value, key=key)

    def _validate(self, value: TriState[T], key: Key = ()) -> None:
        if not isinstance(value, TriState):
            raise ValidationError(
                f"Expected a tri-state but received {value!r}", key=key,
            )


class Nullable(Parser[t.Optional[T]]):
    """Parses a two-state optional field, letting None through.

    Args:
        parser: Parser to use for a value that is not None.
    """
    def __init__(self, parser: t.Optional[Parser[T]] = None, **kwargs):
        super().__init__(**kwargs)
        self.parser: Parser[T] = parser or Parser()

    def transform(
        self,
        value: t.Any,
        key: Key = (),
        coerce: bool = False,
    ) -> t.Optional[T]:
        if value is not None:
            value = self.parser.parse(value, key=key, coerce=coerce)
        return super().transform(value, key=key)


class Options(Parser[t.Dict[str, t.Any]]):
    """Represents a dictionary with heterogeneous values.

    Keys without a parser are passed through untouched. Keys whose parser
    returns MISSING are left out of the result.

    Args:
        parsers: Dictionary of parsers representing the expected keys and
            their expected parsing types.
    """
    def __init__(self, parsers: t.Mapping[str, Parser], **kwargs):
        super().__init__(**kwargs)
        self.parsers: t.Dict[str, Parser] = {**parsers}

    def transform(
        self,
        value: t.Any,
        key: Key = (),
        coerce: bool = False,
    ) -> t.Dict[str, t.Any]:
        result = super().transform(value, key=key)
        if not isinstance(result, dict):
            return result
        parsed: t.Dict[str, t.Any] = {}
        for item, parser in self.parsers.items():
            item_value = parser.parse(
                result.get(item, MISSING), key=(*key, item), coerce=coerce,
            )
            if item_value is not MISSING:
                parsed[item] = item_value
        for extra in result.keys() - self.parsers.keys():
            parsed[extra] = result[extra]
        return parsed

    def _validate(self, value: t.Dict[str, t.Any], key: Key = ()) -> None:
        if not isinstance(value, dict):
            raise ValidationError(
                f"Expected a dict but received {value!r}", key=key,
            )


class Dict(Parser[t.Dict[str, t.Any]]):
    """Represents a dictionary with homogenous values.

    Args:
        parser: Parser to use for parsing each value.
    """
    def __init__(self, parser: t.Optional[Parser] = None, **kwargs):
        super().__init__(**kwargs)
        self.parser: t.Optional[Parser] = parser

    def transform(
        self,
        value: t.Any,
        key: Key = (),
        coerce: bool = False,
    ) -> t.Dict[str, t.Any]:
        result = super().transform(value, key=key)
        if not isinstance(result, dict) or not self.parser:
            return result
        return {
            item: self.parser.parse(
                item_value, key=(*key, item), coerce=coerce,
            )
            for item, item_value in result.items()
        }

    def _check(self, value: t.Any, key: Key = ()) -> None:
        self._validate(value, key=key)

    def _validate(self, value: t.Dict[str, t.Any], key: Key = ()) -> None:
        if not isinstance(value, dict):
            raise ValidationError(
                f"Expected a dict but received {value!r}", key=key,
            )


class List(Parser[t.List[t.Any]]):
    """Represents a list with homogenous values.

    A string value, as given by an environment variable, is split on the
    separator. Strict parsers only accept such strings from a fallback.

    Args:
        parser: Parser to use for parsing each item.
        separator: Separator used to split string values.
    """
    def __init__(
        self,
        parser: t.Optional[Parser] = None,
        separator: str = ',',
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.parser: t.Optional[Parser] = parser
        self.separator: str = separator

    def _check(self, value: t.Any, key: Key = ()) -> None:
        if not isinstance(value, (list, tuple)):
            raise ValidationError(
                f"Expected a list but received {value!r}", key=key,
            )

    def _transform(self, value: t.Any, key: Key = ()) -> t.List[t.Any]:
        if isinstance(value, str):
            return value.split(self.separator)
        if isinstance(value, tuple):
            return [*value]
        return value

    def transform(
        self,
        value: t.Any,
        key: Key = (),
        coerce: bool = False,
    ) -> t.List[t.Any]:
        result = super().transform(value, key=key)
        if not isinstance(result, list) or not self.parser:
            return result
        return [
            self.parser.parse(item, key=(*key, str(index)), coerce=coerce)
            for index, item in enumerate(result)
        ]

    def _validate(self, value: t.List[t.Any], key: Key = ()) -> None:
        if not isinstance(value, list):
            raise ValidationError(
                f"Expected a list but received {value!r}", key=key,
            )
