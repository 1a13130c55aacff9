from __future__ import annotations

import logging
import typing

import attr
import typing_extensions

from rigging import result
from rigging import slice as slice_
from rigging.impl import binding as binding_
from rigging.impl import registry
from rigging.internal import typing_utils
from rigging.traits import container_trait
from rigging.traits import value_parser_trait

__all__: typing.Sequence[str] = ("Option",)


_LOGGER = logging.getLogger("rigging.option")

ContainerT = typing.TypeVar("ContainerT")


def _is_subtype(type_: typing.Any, expected: typing.Any) -> bool:
    if type_ == expected or expected is typing.Any:
        return True

    # bool subclasses int, but "true" is not a number.
    if type_ is bool:
        return False

    if isinstance(type_, type) and isinstance(expected, type):
        return issubclass(type_, expected)

    return False


@attr.define()
class Option(typing.Generic[ContainerT]):
    """One named destination that collects values as the engine feeds them.

    `count` is the number of values accepted so far and doubles as the index
    passed to the value parser.
    """

    name: str = attr.field()
    binding: binding_.Binding[ContainerT, typing.Any] = attr.field()
    parsers: registry.ParserRegistry = attr.field(default=registry.DEFAULT_PARSERS, kw_only=True)
    value: ContainerT = attr.field(init=False)
    count: int = attr.field(init=False, default=0)

    def __attrs_post_init__(self) -> None:
        self.value = self.binding.trait.create()

    @classmethod
    def from_hint(
        cls,
        name: str,
        annotation: typing.Any,
        *,
        parsers: typing.Optional[registry.ParserRegistry] = None,
        traits: typing.Optional[registry.TraitRegistry] = None,
    ) -> typing_extensions.Self:
        parsers = registry.DEFAULT_PARSERS if parsers is None else parsers
        binding = binding_.Binding.resolve(annotation, parsers=parsers, traits=traits)

        _LOGGER.debug(
            "Bound option %r to %s with %r.",
            name,
            typing_utils.type_name(annotation),
            binding,
        )
        return cls(name, binding, parsers=parsers)

    @property
    def element_type(self) -> typing.Any:
        return self.binding.trait.element_type

    def feed(self, argument: slice_.SliceLike) -> typing.Optional[result.ConversionFailure]:
        """Add one value, returning the failure if it could not be converted."""
        populated = self.binding.populate(self.value, argument, self.count)

        if not result.is_ok(populated):
            _LOGGER.debug("Option %r rejected %r: %s", self.name, populated.argument, populated)
            return populated

        self.value = populated.value
        self.count += 1
        return None

    def feed_all(
        self, arguments: typing.Iterable[slice_.SliceLike]
    ) -> typing.Sequence[result.ConversionFailure]:
        """Feed every argument, collecting the failures instead of stopping."""
        failures: typing.List[result.ConversionFailure] = []
        for argument in arguments:
            if failure := self.feed(argument):
                failures.append(failure)

        if failures and _LOGGER.isEnabledFor(logging.DEBUG):
            rejected = ", ".join(repr(failure.argument) for failure in failures)
            _LOGGER.debug("Option %r rejected %d value(s): %s", self.name, len(failures), rejected)

        return failures

    def reset(self) -> None:
        self.value = self.binding.trait.create()
        self.count = 0

    def describe_failure(self, failure: result.ConversionFailure) -> str:
        return (
            f"Invalid value '{failure.argument}' for option '{self.name}' "
            f"(expected {failure.type_name}): {failure.reason}"
        )

    def override(
        self,
        /,
        *,
        parser: typing.Optional[value_parser_trait.ValueParser[typing.Any]] = None,
        trait: typing.Optional[container_trait.ContainerTrait[ContainerT, typing.Any]] = None,
    ) -> None:
        """Swap either strategy of this option before it receives values."""
        if self.count:
            raise RuntimeError(
                f"Cannot override option {self.name!r} after it received {self.count} value(s)."
            )

        new_trait = self.binding.trait if trait is None else trait

        if parser is not None:
            if not _is_subtype(parser.__type__, new_trait.element_type):
                raise TypeError(
                    "The override parser's type must be a subtype of the element type. "
                    f"Got: '{typing_utils.type_name(parser.__type__)}', "
                    f"expected '{typing_utils.type_name(new_trait.element_type)}'."
                )

            new_parser = parser

        elif trait is not None:
            new_parser = self.parsers.resolve(new_trait.element_type)

        else:
            return

        self.binding = binding_.Binding(new_trait, new_parser)
        self.value = new_trait.create()
