from __future__ import annotations

import typing

import attr

from rigging import errors
from rigging.internal import typing_utils

__all__: typing.Sequence[str] = ("Ok", "ConversionFailure", "Result", "is_ok")


T = typing.TypeVar("T")
U = typing.TypeVar("U")


@attr.frozen()
class Ok(typing.Generic[T]):
    """A successful conversion."""

    value: T = attr.field()

    @property
    def is_ok(self) -> typing.Literal[True]:
        return True

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: U) -> T | U:
        return self.value


@attr.frozen()
class ConversionFailure:
    """Text that could not be converted to the requested type.

    Failures are handed back to the caller as values so that an engine can
    collect every bad argument of a run before reporting them.
    """

    argument: str = attr.field()
    type: typing.Any = attr.field()
    reason: str = attr.field()
    exception: typing.Optional[Exception] = attr.field(default=None, eq=False)

    @property
    def is_ok(self) -> typing.Literal[False]:
        return False

    @property
    def type_name(self) -> str:
        return typing_utils.type_name(self.type)

    def unwrap(self) -> typing.NoReturn:
        raise errors.ConversionError(
            self.argument, self.type, self.reason, self.exception
        ) from self.exception

    def unwrap_or(self, default: U) -> U:
        return default

    def __str__(self) -> str:
        return self.reason


Result = typing.Union[Ok[T], ConversionFailure]


def is_ok(result: Result[T]) -> typing.TypeGuard[Ok[T]]:
    return isinstance(result, Ok)
