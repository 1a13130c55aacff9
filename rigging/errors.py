import typing

import attr

__all__: typing.Sequence[str] = (
    "RiggingError",
    "ConversionError",
    "BindingError",
    "UnresolvedBindingError",
    "AmbiguousBindingError",
)


@attr.define(auto_exc=True, repr=False, init=False, slots=False)
class RiggingError(Exception):
    pass


@attr.define(auto_exc=True, repr=False, slots=False)
class ConversionError(RiggingError):

    argument: str = attr.field()
    type: typing.Any = attr.field()
    reason: str = attr.field()
    exception: typing.Optional[Exception] = attr.field(default=None)

    def __str__(self) -> str:
        return self.reason


@attr.define(auto_exc=True, repr=False, slots=False)
class BindingError(RiggingError):

    type: typing.Any = attr.field()


@attr.define(auto_exc=True, repr=False, slots=False)
class UnresolvedBindingError(BindingError):

    kind: str = attr.field(default="value parser")

    def __str__(self) -> str:
        return f"No {self.kind} is registered for type {self.type!r}."


@attr.define(auto_exc=True, repr=False, slots=False)
class AmbiguousBindingError(BindingError):

    candidates: typing.Sequence[typing.Any] = attr.field(factory=tuple)
    kind: str = attr.field(default="value parser")

    def __str__(self) -> str:
        if not self.candidates:
            return f"A {self.kind} is already registered for type {self.type!r}."

        candidates = ", ".join(repr(candidate) for candidate in self.candidates)
        return f"Type {self.type!r} matches more than one {self.kind}: {candidates}."
