from __future__ import annotations

import collections.abc
import inspect
import typing

import attr

from rigging import errors
from rigging.traits import container_trait

__all__: typing.Sequence[str] = (
    "ScalarTrait",
    "SequenceTrait",
    "SetTrait",
    "MappingTrait",
    "MultiMappingTrait",
    "JoinedStringTrait",
    "sequence_factory",
    "tuple_factory",
    "set_factory",
    "mapping_factory",
)


T = typing.TypeVar("T")
KeyT = typing.TypeVar("KeyT")
ValueT = typing.TypeVar("ValueT")
SequenceT = typing.TypeVar("SequenceT", bound=typing.Sequence[typing.Any])
SetT = typing.TypeVar("SetT", bound=typing.AbstractSet[typing.Any])
MappingT = typing.TypeVar("MappingT", bound=typing.Mapping[typing.Any, typing.Any])

_MULTI_VALUE_ORIGINS = frozenset(
    (list, collections.abc.Sequence, collections.abc.MutableSequence)
)


def _concrete(collection_type: typing.Any, fallback: typing.Any) -> typing.Any:
    collection_type = typing.get_origin(collection_type) or collection_type
    return fallback if inspect.isabstract(collection_type) else collection_type


@attr.define()
class ScalarTrait(container_trait.ContainerTrait[typing.Optional[T], T]):
    """A single value; every insertion replaces the previous one."""

    value_type: typing.Any = attr.field()

    @property
    def __type__(self) -> typing.Any:
        return self.value_type

    @property
    def element_type(self) -> typing.Any:
        return self.value_type

    def create(self) -> typing.Optional[T]:
        return None

    def insert(self, container: typing.Optional[T], element: T) -> T:
        return element


@attr.define()
class _CollectionTrait(container_trait.ContainerTrait[T, typing.Any]):
    # NOTE: Private because inserting differs per collection shape; the
    #       subclasses below pick the shape.

    collection_type: typing.Type[T] = attr.field()
    element_type: typing.Any = attr.field(default=str)

    @property
    def __type__(self) -> typing.Type[T]:
        return self.collection_type

    def create(self) -> T:
        return self.collection_type()


@attr.define()
class SequenceTrait(_CollectionTrait[SequenceT]):
    """Appends values in the order they arrive."""

    def __attrs_post_init__(self) -> None:
        # In case some non-instantiable generic was passed, default to list.
        self.collection_type = _concrete(self.collection_type, list)

    def insert(self, container: SequenceT, element: typing.Any) -> SequenceT:
        if isinstance(container, collections.abc.MutableSequence):
            container.append(element)
            return container

        # Immutable sequences such as tuples are rebuilt.
        return self.collection_type((*container, element))  # type: ignore[call-arg]


@attr.define()
class SetTrait(_CollectionTrait[SetT]):
    """Adds values, deduplicating with the set's own equality."""

    def __attrs_post_init__(self) -> None:
        # In case some non-instantiable generic was passed, default to set.
        self.collection_type = _concrete(self.collection_type, set)

    def insert(self, container: SetT, element: typing.Any) -> SetT:
        if isinstance(container, collections.abc.MutableSet):
            container.add(element)
            return container

        return self.collection_type((*container, element))  # type: ignore[call-arg]


@attr.define()
class MappingTrait(container_trait.ContainerTrait[MappingT, typing.Tuple[typing.Any, typing.Any]]):
    """Stores `(key, value)` pairs; a repeated key keeps the last value."""

    collection_type: typing.Type[MappingT] = attr.field()
    key_type: typing.Any = attr.field(default=str)
    value_type: typing.Any = attr.field(default=str)

    def __attrs_post_init__(self) -> None:
        self.collection_type = _concrete(self.collection_type, dict)

    @property
    def __type__(self) -> typing.Type[MappingT]:
        return self.collection_type

    @property
    def element_type(self) -> typing.Any:
        return typing.Tuple[self.key_type, self.value_type]

    def create(self) -> MappingT:
        return self.collection_type()

    def insert(self, container: MappingT, element: typing.Tuple[typing.Any, typing.Any]) -> MappingT:
        key, value = element
        container[key] = value  # type: ignore[index]
        return container


@attr.define()
class MultiMappingTrait(MappingTrait[MappingT]):
    """Stores every value of a repeated key, in arrival order."""

    values_type: typing.Callable[[], typing.Any] = attr.field(default=list, kw_only=True)

    def insert(self, container: MappingT, element: typing.Tuple[typing.Any, typing.Any]) -> MappingT:
        key, value = element
        container.setdefault(key, self.values_type()).append(value)  # type: ignore[attr-defined]
        return container


@attr.define()
class JoinedStringTrait(container_trait.ContainerTrait[typing.Optional[str], str]):
    """Joins every value into one string."""

    separator: str = attr.field(default=" ")

    @property
    def __type__(self) -> typing.Type[str]:
        return str

    @property
    def element_type(self) -> typing.Type[str]:
        return str

    def create(self) -> typing.Optional[str]:
        return None

    def insert(self, container: typing.Optional[str], element: str) -> str:
        if container is None:
            return element

        return f"{container}{self.separator}{element}"


# Factories turning a destination typehint into a trait, used by the registry.


def _collection_type(annotation: typing.Any) -> typing.Any:
    return typing.get_origin(annotation) or annotation


def sequence_factory(annotation: typing.Any) -> container_trait.ContainerTrait[typing.Any, typing.Any]:
    args = typing.get_args(annotation)
    return SequenceTrait(_collection_type(annotation), args[0] if args else str)


def tuple_factory(annotation: typing.Any) -> container_trait.ContainerTrait[typing.Any, typing.Any]:
    args = typing.get_args(annotation)
    if not args:
        return SequenceTrait(_collection_type(annotation), str)

    if len(args) == 2 and args[1] is Ellipsis:
        return SequenceTrait(_collection_type(annotation), args[0])

    # A fixed-size tuple such as tuple[str, int] is a single value.
    return ScalarTrait(annotation)


def set_factory(annotation: typing.Any) -> container_trait.ContainerTrait[typing.Any, typing.Any]:
    args = typing.get_args(annotation)
    return SetTrait(_collection_type(annotation), args[0] if args else str)


def mapping_factory(annotation: typing.Any) -> container_trait.ContainerTrait[typing.Any, typing.Any]:
    args = typing.get_args(annotation)
    if len(args) not in (0, 2):
        # e.g. Counter[str], which reaches this factory through dict.
        raise errors.UnresolvedBindingError(annotation, kind="container trait")

    key_type, value_type = args if args else (str, str)

    if typing.get_origin(value_type) in _MULTI_VALUE_ORIGINS:
        value_args = typing.get_args(value_type)
        return MultiMappingTrait(
            _collection_type(annotation),
            key_type,
            value_args[0] if value_args else str,
        )

    return MappingTrait(_collection_type(annotation), key_type, value_type)
