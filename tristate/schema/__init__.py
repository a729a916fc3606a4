"""Module containing parsers that load documents with tri-state fields."""

from .exceptions import ParsingError, TransformationError, ValidationError
from .records import Record, load, parser_for
