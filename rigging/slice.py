"""A read-only, non-owning view over a run of characters.

A `Slice` remembers the string it was built from together with a start and
stop offset, so building sub-views (`front`, `trim`, `split`, ...) never copies
character data. Every search reports "not found" as `None`, which compares
unequal to all valid positions including `0`.
"""

from __future__ import annotations

import typing

import attr

__all__: typing.Sequence[str] = ("NPOS", "WHITESPACE", "Slice", "SliceLike")


NPOS: typing.Final[None] = None
"""Readable alias for the value returned by searches that found nothing."""

WHITESPACE: typing.Final[str] = " \t\n\v\f\r"

SliceLike = typing.Union[str, "Slice"]


class _TextSink(typing.Protocol):
    def write(self, __text: str) -> typing.Any:
        ...


def _as_str(value: SliceLike) -> str:
    return value if isinstance(value, str) else str(value)


def _check_count(name: str, value: int) -> None:
    if value < 0:
        raise ValueError(f"{name} must not be negative, got {value}.")


@attr.define(frozen=True, init=False, eq=False, repr=False)
class Slice:

    _source: str = attr.field()
    _start: int = attr.field()
    _stop: int = attr.field()

    def __init__(
        self,
        source: SliceLike = "",
        start: int = 0,
        length: typing.Optional[int] = None,
    ) -> None:
        if isinstance(source, Slice):
            base, offset, limit = source._source, source._start, source._stop
        elif isinstance(source, str):
            base, offset, limit = source, 0, len(source)
        else:
            raise TypeError(f"Cannot build a Slice over {type(source).__name__!r}.")

        _check_count("start", start)
        if offset + start > limit:
            raise ValueError(f"start {start} lies past the end of the source.")

        if length is None:
            stop = limit
        else:
            _check_count("length", length)
            stop = offset + start + length
            if stop > limit:
                raise ValueError(f"A length of {length} from {start} overruns the source.")

        self.__attrs_init__(base, offset + start, stop)

    # Sequence behaviour

    def size(self) -> int:
        return self._stop - self._start

    @property
    def empty(self) -> bool:
        return self._stop == self._start

    def __len__(self) -> int:
        return self.size()

    def __bool__(self) -> bool:
        return not self.empty

    def __iter__(self) -> typing.Iterator[str]:
        source = self._source
        for index in range(self._start, self._stop):
            yield source[index]

    @typing.overload
    def __getitem__(self, key: int) -> str:
        ...

    @typing.overload
    def __getitem__(self, key: slice) -> Slice:
        ...

    def __getitem__(self, key: int | slice) -> str | Slice:
        size = self.size()

        if isinstance(key, slice):
            begin, end, step = key.indices(size)
            if step != 1:
                raise ValueError("Slice views only support a step of 1.")

            return Slice(self, begin, max(end - begin, 0))

        if key < 0:
            key += size

        if not 0 <= key < size:
            raise IndexError("Slice index out of range.")

        return self._source[self._start + key]

    def __str__(self) -> str:
        return self._source[self._start : self._stop]

    def __repr__(self) -> str:
        return f"Slice({str(self)!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Slice):
            other = str(other)
        elif not isinstance(other, str):
            return NotImplemented

        return len(other) == self.size() and self._source.startswith(
            other, self._start, self._stop
        )

    def __hash__(self) -> int:
        return hash(str(self))

    # Searching

    def find(self, needle: SliceLike, from_: int = 0) -> typing.Optional[int]:
        """Return the first position at or after `from_` where `needle` occurs.

        A single character is looked up as such and is never found at
        `from_ == size()`. A substring has to fit inside the view; an empty
        substring matches at `from_` itself as long as `from_ <= size()`.
        """
        _check_count("from_", from_)
        needle = _as_str(needle)
        size = self.size()

        if len(needle) == 1:
            if from_ >= size:
                return NPOS

        elif from_ > size:
            return NPOS

        elif not needle:
            return from_

        index = self._source.find(needle, self._start + from_, self._stop)
        return NPOS if index < 0 else index - self._start

    def find_first_of(self, chars: SliceLike, from_: int = 0) -> typing.Optional[int]:
        _check_count("from_", from_)
        chars = _as_str(chars)
        if from_ >= self.size() or not chars:
            return NPOS

        source = self._source
        for index in range(self._start + from_, self._stop):
            if source[index] in chars:
                return index - self._start

        return NPOS

    def find_first_not_of(self, chars: SliceLike, from_: int = 0) -> typing.Optional[int]:
        _check_count("from_", from_)
        chars = _as_str(chars)
        if from_ >= self.size():
            return NPOS

        source = self._source
        for index in range(self._start + from_, self._stop):
            if source[index] not in chars:
                return index - self._start

        return NPOS

    def _scan_end(self, from_: typing.Optional[int]) -> int:
        # Exclusive end of a backwards scan that starts at `from_`, clamped.
        size = self.size()
        if from_ is None or from_ >= size:
            return size

        _check_count("from_", from_)
        return from_ + 1

    def find_last_of(
        self, chars: SliceLike, from_: typing.Optional[int] = None
    ) -> typing.Optional[int]:
        chars = _as_str(chars)
        if not chars:
            return NPOS

        source = self._source
        for index in range(self._start + self._scan_end(from_) - 1, self._start - 1, -1):
            if source[index] in chars:
                return index - self._start

        return NPOS

    def find_last_not_of(
        self, chars: SliceLike, from_: typing.Optional[int] = None
    ) -> typing.Optional[int]:
        chars = _as_str(chars)

        source = self._source
        for index in range(self._start + self._scan_end(from_) - 1, self._start - 1, -1):
            if source[index] not in chars:
                return index - self._start

        return NPOS

    def starts_with(self, prefix: SliceLike) -> bool:
        return self._source.startswith(_as_str(prefix), self._start, self._stop)

    def ends_with(self, suffix: SliceLike) -> bool:
        return self._source.endswith(_as_str(suffix), self._start, self._stop)

    # Sub-views

    def front(self, count: int) -> Slice:
        _check_count("count", count)
        return Slice(self, 0, min(count, self.size()))

    def back(self, count: int) -> Slice:
        _check_count("count", count)
        count = min(count, self.size())
        return Slice(self, self.size() - count, count)

    def drop_front(self, count: int) -> Slice:
        _check_count("count", count)
        return Slice(self, min(count, self.size()))

    def drop_back(self, count: int) -> Slice:
        _check_count("count", count)
        return Slice(self, 0, self.size() - min(count, self.size()))

    def substr(self, pos: int, count: typing.Optional[int] = None) -> Slice:
        _check_count("pos", pos)
        rest = self.drop_front(pos)
        return rest if count is None else rest.front(count)

    def trim_left(self, chars: SliceLike = WHITESPACE) -> Slice:
        index = self.find_first_not_of(chars)
        return self.drop_front(self.size() if index is NPOS else index)

    def trim_right(self, chars: SliceLike = WHITESPACE) -> Slice:
        index = self.find_last_not_of(chars)
        return self.front(0 if index is NPOS else index + 1)

    def trim(self, chars: SliceLike = WHITESPACE) -> Slice:
        return self.trim_left(chars).trim_right(chars)

    def split(self, separator: SliceLike) -> typing.Tuple[Slice, Slice]:
        """Split around the first `separator`.

        When the separator does not occur the whole view is returned as the
        head and the tail is empty.
        """
        separator = _as_str(separator)
        if not separator:
            raise ValueError("Cannot split on an empty separator.")

        index = self.find(separator)
        if index is NPOS:
            return self, self.drop_front(self.size())

        return self.front(index), self.drop_front(index + len(separator))

    # Output

    def write(self, stream: _TextSink) -> None:
        stream.write(self._source[self._start : self._stop])
