import typing

from rigging import result
from rigging import slice as slice_

__all__: typing.Sequence[str] = ("ValueParser", "ValueFormatter")


T = typing.TypeVar("T")


@typing.runtime_checkable
class ValueParser(typing.Protocol[T]):
    """Converts the text of one option value to a `T`.

    `index` is the number of values the option already received before this
    one. Implementations must report malformed text by returning a
    `result.ConversionFailure` and must not hold on to `argument`.
    """

    __slots__: typing.Sequence[str] = ()

    @property
    def __type__(self) -> typing.Any:
        ...

    def parse(self, argument: slice_.Slice, index: int) -> result.Result[T]:
        ...


@typing.runtime_checkable
class ValueFormatter(typing.Protocol[T]):
    __slots__: typing.Sequence[str] = ()

    def format(self, value: T) -> str:
        ...
