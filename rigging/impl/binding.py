from __future__ import annotations

import typing

import attr
import typing_extensions

from rigging import result
from rigging import slice as slice_
from rigging.impl import registry
from rigging.traits import container_trait
from rigging.traits import value_parser_trait

__all__: typing.Sequence[str] = ("Binding",)


ContainerT = typing.TypeVar("ContainerT")
ElementT = typing.TypeVar("ElementT")


@attr.define()
class Binding(typing.Generic[ContainerT, ElementT]):
    """The container trait of a destination paired with its element parser."""

    trait: container_trait.ContainerTrait[ContainerT, ElementT] = attr.field()
    parser: value_parser_trait.ValueParser[ElementT] = attr.field()

    @classmethod
    def resolve(
        cls,
        annotation: typing.Any,
        *,
        parsers: typing.Optional[registry.ParserRegistry] = None,
        traits: typing.Optional[registry.TraitRegistry] = None,
    ) -> typing_extensions.Self:
        """Look up both strategies for a destination typehint.

        Raises `errors.UnresolvedBindingError` or `errors.AmbiguousBindingError`
        when either strategy is missing or contested.
        """
        parsers = registry.DEFAULT_PARSERS if parsers is None else parsers
        traits = registry.DEFAULT_TRAITS if traits is None else traits

        trait = traits.resolve(annotation)
        return cls(trait, parsers.resolve(trait.element_type))

    def populate(
        self,
        container: ContainerT,
        argument: slice_.SliceLike,
        index: int,
    ) -> result.Result[ContainerT]:
        """Parse `argument` and insert it into `container`.

        On failure the container is left exactly as it was and the failure is
        returned instead.
        """
        if not isinstance(argument, slice_.Slice):
            argument = slice_.Slice(argument)

        parsed = self.parser.parse(argument, index)
        if not result.is_ok(parsed):
            return parsed

        return result.Ok(self.trait.insert(container, parsed.value))
