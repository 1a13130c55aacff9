from __future__ import annotations

import enum
import pathlib
import typing
import urllib.parse

import attr

from rigging import result
from rigging import slice as slice_
from rigging.internal import typing_utils
from rigging.traits import value_parser_trait

__all__: typing.Sequence[str] = (
    "StringParser",
    "BoolParser",
    "NumberParser",
    "PathParser",
    "EnumParser",
    "UrlParser",
    "UnionParser",
    "LiteralParser",
    "PairParser",
    "format_value",
)


T = typing.TypeVar("T")
KeyT = typing.TypeVar("KeyT")
ValueT = typing.TypeVar("ValueT")
NumberT = typing.TypeVar("NumberT", bound=int | float)
EnumT = typing.TypeVar("EnumT", bound=enum.Enum)

_TRUTHY = frozenset(("yes", "y", "true", "t", "on", "1"))
_FALSY = frozenset(("no", "n", "false", "f", "off", "0"))


def format_value(parser: value_parser_trait.ValueParser[T], value: T) -> str:
    """Render `value` back to text with `parser`, falling back to `str`."""
    if isinstance(parser, value_parser_trait.ValueFormatter):
        return parser.format(value)

    return str(value)


class StringParser(
    value_parser_trait.ValueParser[str],
    value_parser_trait.ValueFormatter[str],
):
    @property
    def __type__(self) -> typing.Type[str]:
        return str

    def parse(self, argument: slice_.Slice, index: int) -> result.Result[str]:
        return result.Ok(str(argument))

    def format(self, value: str) -> str:
        return value


@attr.define()
class BoolParser(
    value_parser_trait.ValueParser[bool],
    value_parser_trait.ValueFormatter[bool],
):

    truthy: typing.AbstractSet[str] = attr.field(default=_TRUTHY, converter=frozenset)
    falsy: typing.AbstractSet[str] = attr.field(default=_FALSY, converter=frozenset)

    @property
    def __type__(self) -> typing.Type[bool]:
        return bool

    def parse(self, argument: slice_.Slice, index: int) -> result.Result[bool]:
        text = str(argument)
        lowered = text.lower()

        if lowered in self.truthy:
            return result.Ok(True)
        elif lowered in self.falsy:
            return result.Ok(False)

        return result.ConversionFailure(text, bool, f"'{text}' is not a valid boolean.")

    def format(self, value: bool) -> str:
        return "true" if value else "false"


def _parse_int(text: str) -> int:
    try:
        # Base 0 understands 0x/0o/0b prefixes and digit separators.
        return int(text, 0)

    except ValueError:
        # ...but rejects leading zeros, which plain base 10 allows.
        return int(text, 10)


@attr.define()
class NumberParser(
    value_parser_trait.ValueParser[NumberT],
    value_parser_trait.ValueFormatter[NumberT],
):

    signed: bool = attr.field(default=True)
    decimal: bool = attr.field(default=True)

    if typing.TYPE_CHECKING:

        @typing.overload
        def __init__(
            self: NumberParser[int],
            *,
            signed: bool = True,
            decimal: typing.Literal[False],
        ):
            ...

        @typing.overload
        def __init__(
            self: NumberParser[float],
            *,
            signed: bool = True,
            decimal: typing.Literal[True] = True,
        ):
            ...

        def __init__(self, *, signed: bool = True, decimal: bool = True):
            ...

    @property
    def __type__(self) -> typing.Type[NumberT]:
        return typing.cast(typing.Type[NumberT], float if self.decimal else int)

    @property
    def _noun(self) -> str:
        noun = "number" if self.decimal else "integer"
        return noun if self.signed else f"unsigned {noun}"

    def parse(self, argument: slice_.Slice, index: int) -> result.Result[NumberT]:
        text = str(argument)
        type_ = self.__type__

        if not text or text != text.strip():
            return result.ConversionFailure(text, type_, f"'{text}' is not a valid {self._noun}.")

        try:
            value = typing.cast(NumberT, float(text) if self.decimal else _parse_int(text))

        except ValueError as exc:
            return result.ConversionFailure(
                text, type_, f"'{text}' is not a valid {self._noun}.", exc
            )

        if not self.signed and value < 0:
            return result.ConversionFailure(text, type_, f"'{text}' is not a valid {self._noun}.")

        return result.Ok(value)

    def format(self, value: NumberT) -> str:
        return repr(value) if self.decimal else str(value)


class PathParser(
    value_parser_trait.ValueParser[pathlib.Path],
    value_parser_trait.ValueFormatter[pathlib.Path],
):
    @property
    def __type__(self) -> typing.Type[pathlib.Path]:
        return pathlib.Path

    def parse(self, argument: slice_.Slice, index: int) -> result.Result[pathlib.Path]:
        if argument.empty:
            return result.ConversionFailure("", pathlib.Path, "An empty string is not a valid path.")

        return result.Ok(pathlib.Path(str(argument)))

    def format(self, value: pathlib.Path) -> str:
        return str(value)


@attr.define()
class EnumParser(
    value_parser_trait.ValueParser[EnumT],
    value_parser_trait.ValueFormatter[EnumT],
):
    """Looks up enum members by name, ignoring case, and then by value."""

    enum_type: typing.Type[EnumT] = attr.field()

    @property
    def __type__(self) -> typing.Type[EnumT]:
        return self.enum_type

    def parse(self, argument: slice_.Slice, index: int) -> result.Result[EnumT]:
        text = str(argument)
        members = self.enum_type.__members__

        if text in members:
            return result.Ok(members[text])

        folded = text.casefold()
        for name, member in members.items():
            if name.casefold() == folded:
                return result.Ok(member)

        for member in members.values():
            if str(member.value) == text:
                return result.Ok(member)

        choices = "', '".join(members)
        return result.ConversionFailure(
            text,
            self.enum_type,
            f"'{text}' is not a valid {self.enum_type.__name__}, expected one of '{choices}'.",
        )

    def format(self, value: EnumT) -> str:
        return value.name


class UrlParser(
    value_parser_trait.ValueParser[urllib.parse.SplitResult],
    value_parser_trait.ValueFormatter[urllib.parse.SplitResult],
):
    """Strict absolute URLs; both a scheme and a network location are required."""

    @property
    def __type__(self) -> typing.Type[urllib.parse.SplitResult]:
        return urllib.parse.SplitResult

    def parse(
        self, argument: slice_.Slice, index: int
    ) -> result.Result[urllib.parse.SplitResult]:
        text = str(argument)
        if any(char.isspace() or not char.isprintable() for char in text):
            return result.ConversionFailure(
                text, urllib.parse.SplitResult, f"'{text}' is not a valid URL."
            )

        try:
            url = urllib.parse.urlsplit(text)
            # Raises on a non-numeric or out-of-range port.
            url.port

        except ValueError as exc:
            return result.ConversionFailure(
                text, urllib.parse.SplitResult, f"'{text}' is not a valid URL.", exc
            )

        if not url.scheme or not url.netloc:
            return result.ConversionFailure(
                text, urllib.parse.SplitResult, f"'{text}' is not a valid URL."
            )

        return result.Ok(url)

    def format(self, value: urllib.parse.SplitResult) -> str:
        return urllib.parse.urlunsplit(value)


# Composite parsers, built by the registry from other parsers.


@attr.define()
class UnionParser(
    value_parser_trait.ValueParser[T],
    value_parser_trait.ValueFormatter[T],
):
    """Tries each member parser in declaration order.

    An optional union (one that includes `None`) turns empty text into `None`.
    """

    union_type: typing.Any = attr.field()
    parsers: typing.Sequence[value_parser_trait.ValueParser[typing.Any]] = attr.field()
    is_optional: bool = attr.field(default=False)

    @property
    def __type__(self) -> typing.Any:
        return self.union_type

    def parse(self, argument: slice_.Slice, index: int) -> result.Result[T]:
        if self.is_optional and argument.empty:
            return result.Ok(typing.cast(T, None))

        for parser in self.parsers:
            parsed = parser.parse(argument, index)
            if parsed.is_ok:
                return parsed

        text = str(argument)
        types_repr = ", ".join(
            repr(typing_utils.type_name(parser.__type__)) for parser in self.parsers
        )
        return result.ConversionFailure(
            text,
            self.union_type,
            f"'{text}' could not be converted to any of {types_repr}.",
        )

    def format(self, value: T) -> str:
        if value is None:
            return ""

        for parser in self.parsers:
            type_ = typing.get_origin(parser.__type__) or parser.__type__
            if isinstance(type_, type) and isinstance(value, type_):
                return format_value(parser, value)

        return str(value)


@attr.define()
class LiteralParser(
    value_parser_trait.ValueParser[T],
    value_parser_trait.ValueFormatter[T],
):

    literal_type: typing.Any = attr.field()

    @property
    def __type__(self) -> typing.Any:
        return self.literal_type

    @property
    def choices(self) -> typing.Sequence[T]:
        return typing.get_args(self.literal_type)

    def parse(self, argument: slice_.Slice, index: int) -> result.Result[T]:
        for choice in self.choices:
            # Booleans match case-insensitively, like BoolParser.
            candidate = str(argument).lower() if isinstance(choice, bool) else argument
            if candidate == self.format(choice):
                return result.Ok(choice)

        text = str(argument)
        choices = "', '".join(self.format(choice) for choice in self.choices)
        return result.ConversionFailure(
            text, self.literal_type, f"'{text}' is not one of '{choices}'."
        )

    def format(self, value: T) -> str:
        if isinstance(value, bool):
            return "true" if value else "false"
        elif isinstance(value, enum.Enum):
            return value.name

        return str(value)


@attr.define()
class PairParser(
    value_parser_trait.ValueParser[typing.Tuple[KeyT, ValueT]],
    value_parser_trait.ValueFormatter[typing.Tuple[KeyT, ValueT]],
):
    """Parses `key<separator>value`, splitting on the first separator."""

    key_parser: value_parser_trait.ValueParser[KeyT] = attr.field()
    value_parser: value_parser_trait.ValueParser[ValueT] = attr.field()
    separator: str = attr.field(default="=")

    @separator.validator
    def _check_separator(self, _: attr.Attribute[str], value: str) -> None:
        if not value:
            raise ValueError("The separator of a pair parser must not be empty.")

    @property
    def __type__(self) -> typing.Any:
        return typing.Tuple[self.key_parser.__type__, self.value_parser.__type__]

    def parse(
        self, argument: slice_.Slice, index: int
    ) -> result.Result[typing.Tuple[KeyT, ValueT]]:
        if argument.find(self.separator) is slice_.NPOS:
            text = str(argument)
            return result.ConversionFailure(
                text,
                self.__type__,
                f"'{text}' is not a valid pair, expected 'key{self.separator}value'.",
            )

        key_text, value_text = argument.split(self.separator)

        key = self.key_parser.parse(key_text, index)
        if not result.is_ok(key):
            return key

        value = self.value_parser.parse(value_text, index)
        if not result.is_ok(value):
            return value

        return result.Ok((key.value, value.value))

    def format(self, value: typing.Tuple[KeyT, ValueT]) -> str:
        key, item = value
        return (
            f"{format_value(self.key_parser, key)}"
            f"{self.separator}"
            f"{format_value(self.value_parser, item)}"
        )
