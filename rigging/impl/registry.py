"""Type-indexed registries of value parsers and container traits.

A registry maps a type to the strategy handling it. Registrations are meant to
happen while the host application starts up; `freeze` then turns the registry
read-only so that it can be shared freely between threads. Registering the
same type twice is an error rather than an override, so two add-ons competing
for one type are caught at startup instead of silently shadowing each other.
"""

from __future__ import annotations

import collections
import collections.abc
import enum
import logging
import pathlib
import typing
import urllib.parse

import attr
import typing_extensions

from rigging import errors
from rigging.impl import container
from rigging.impl import value_parser
from rigging.internal import typing_utils
from rigging.traits import container_trait
from rigging.traits import value_parser_trait

__all__: typing.Sequence[str] = (
    "ParserRegistry",
    "TraitRegistry",
    "TraitFactory",
    "DEFAULT_PARSERS",
    "DEFAULT_TRAITS",
    "register_parser",
    "register_trait",
)


_LOGGER = logging.getLogger("rigging.registry")

BindingT = typing.TypeVar("BindingT")
ParserT = typing.TypeVar("ParserT", bound=typing.Callable[[], typing.Any])
TraitFactory = typing.Callable[[typing.Any], container_trait.ContainerTrait[typing.Any, typing.Any]]
TraitFactoryT = typing.TypeVar("TraitFactoryT", bound=TraitFactory)


@attr.define()
class _Registry(typing.Generic[BindingT]):

    _bindings: typing.Dict[typing.Any, BindingT] = attr.field(factory=dict)
    _frozen: bool = attr.field(default=False, kw_only=True)

    _kind: typing.ClassVar[str] = "binding"

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def types(self) -> typing.Sequence[typing.Any]:
        return tuple(self._bindings)

    def __contains__(self, type_: object) -> bool:
        return type_ in self._bindings

    def freeze(self) -> None:
        self._frozen = True

    def copy(self) -> typing_extensions.Self:
        """Return an unfrozen registry holding the same bindings."""
        return type(self)(dict(self._bindings))

    def _register(self, type_: typing.Any, binding: BindingT) -> None:
        if self._frozen:
            raise RuntimeError(f"Cannot register a {self._kind} for {type_!r} on a frozen registry.")

        if type_ in self._bindings:
            raise errors.AmbiguousBindingError(type_, kind=self._kind)

        self._bindings[type_] = binding
        _LOGGER.debug("Registered %s %r for type %r.", self._kind, binding, type_)

    def _lookup(self, type_: typing.Any) -> typing.Optional[BindingT]:
        if type_ in self._bindings:
            return self._bindings[type_]

        if not isinstance(type_, type) or typing.get_origin(type_) is not None:
            return None

        candidates = [
            base for base in type_.__mro__[1:] if base is not object and base in self._bindings
        ]
        if not candidates:
            return None

        # The closest base wins, provided every other candidate is one of its
        # own bases. Otherwise two unrelated bindings compete for this type.
        best, *others = candidates
        conflicting = [other for other in others if not issubclass(best, other)]
        if conflicting:
            raise errors.AmbiguousBindingError(type_, (best, *conflicting), kind=self._kind)

        return self._bindings[best]


@attr.define()
class ParserRegistry(_Registry[value_parser_trait.ValueParser[typing.Any]]):

    pair_separator: str = attr.field(default="=", kw_only=True)

    _kind: typing.ClassVar[str] = "value parser"

    @classmethod
    def with_defaults(cls, *, pair_separator: str = "=") -> typing_extensions.Self:
        registry = cls(pair_separator=pair_separator)
        registry.register(str, value_parser.StringParser())
        registry.register(bool, value_parser.BoolParser())
        registry.register(int, value_parser.NumberParser(decimal=False))
        registry.register(float, value_parser.NumberParser())
        registry.register(pathlib.Path, value_parser.PathParser())
        registry.register(urllib.parse.SplitResult, value_parser.UrlParser())
        return registry

    def copy(self) -> typing_extensions.Self:
        return type(self)(dict(self._bindings), pair_separator=self.pair_separator)

    def register(self, type_: typing.Any, parser: value_parser_trait.ValueParser[typing.Any]) -> None:
        self._register(type_, parser)

    def parser(self, type_: typing.Any) -> typing.Callable[[ParserT], ParserT]:
        """Register the decorated parser class, instantiated without arguments."""

        def wrapper(parser_cls: ParserT) -> ParserT:
            self.register(type_, parser_cls())
            return parser_cls

        return wrapper

    def resolve(self, annotation: typing.Any) -> value_parser_trait.ValueParser[typing.Any]:
        annotation, origin, args, _ = typing_utils.unpack_typehint(annotation)

        if annotation is typing.Any:
            annotation = str

        if annotation in self._bindings:
            return self._bindings[annotation]

        if origin in typing_utils.UNIONS:
            members = [arg for arg in args if arg not in typing_utils.NONES]
            return value_parser.UnionParser(
                annotation,
                [self.resolve(member) for member in members],
                is_optional=len(members) != len(args),
            )

        if origin is typing.Literal:
            return value_parser.LiteralParser(annotation)

        if origin is tuple and len(args) == 2 and args[1] is not Ellipsis:
            return value_parser.PairParser(
                self.resolve(args[0]),
                self.resolve(args[1]),
                separator=self.pair_separator,
            )

        if origin is None and isinstance(annotation, type) and issubclass(annotation, enum.Enum):
            return value_parser.EnumParser(annotation)

        parser = self._lookup(annotation)
        if parser is None:
            raise errors.UnresolvedBindingError(annotation, kind=self._kind)

        _LOGGER.debug("Resolved value parser %r for type %r.", parser, annotation)
        return parser


@attr.define()
class TraitRegistry(_Registry[TraitFactory]):

    _kind: typing.ClassVar[str] = "container trait"

    @classmethod
    def with_defaults(cls) -> typing_extensions.Self:
        registry = cls()
        for sequence_type in (
            list,
            collections.deque,
            collections.abc.Sequence,
            collections.abc.MutableSequence,
        ):
            registry.register(sequence_type, container.sequence_factory)

        registry.register(tuple, container.tuple_factory)

        for set_type in (set, frozenset, collections.abc.Set, collections.abc.MutableSet):
            registry.register(set_type, container.set_factory)

        for mapping_type in (
            dict,
            collections.OrderedDict,
            collections.abc.Mapping,
            collections.abc.MutableMapping,
        ):
            registry.register(mapping_type, container.mapping_factory)

        return registry

    def register(self, type_: typing.Any, factory: TraitFactory) -> None:
        self._register(type_, factory)

    def trait(self, type_: typing.Any) -> typing.Callable[[TraitFactoryT], TraitFactoryT]:
        """Register the decorated function as the trait factory for `type_`."""

        def wrapper(factory: TraitFactoryT) -> TraitFactoryT:
            self.register(type_, factory)
            return factory

        return wrapper

    def resolve(self, annotation: typing.Any) -> container_trait.ContainerTrait[typing.Any, typing.Any]:
        annotation, origin, _, annotated_args = typing_utils.unpack_typehint(annotation)

        if typing_utils.SpecialType.JOINEDSTR in annotated_args:
            return container.JoinedStringTrait()

        if origin in typing_utils.UNIONS or origin is typing.Literal:
            return container.ScalarTrait(annotation)

        factory = self._lookup(origin or annotation)
        if factory is not None:
            trait = factory(annotation)
            _LOGGER.debug("Resolved container trait %r for type %r.", trait, annotation)
            return trait

        if origin is not None:
            # A parametrised generic nobody registered, e.g. MyBox[int].
            raise errors.UnresolvedBindingError(annotation, kind=self._kind)

        return container.ScalarTrait(annotation)


DEFAULT_PARSERS = ParserRegistry.with_defaults()
"""The process-wide value parsers."""

DEFAULT_TRAITS = TraitRegistry.with_defaults()
"""The process-wide container traits."""


def register_parser(type_: typing.Any) -> typing.Callable[[ParserT], ParserT]:
    """Register a parser class for `type_` with the process-wide registry."""
    return DEFAULT_PARSERS.parser(type_)


def register_trait(type_: typing.Any) -> typing.Callable[[TraitFactoryT], TraitFactoryT]:
    """Register a trait factory for `type_` with the process-wide registry."""
    return DEFAULT_TRAITS.trait(type_)
