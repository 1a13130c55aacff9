import typing

__all__: typing.Sequence[str] = ("ContainerTrait",)


ContainerT = typing.TypeVar("ContainerT")
ElementT = typing.TypeVar("ElementT")


@typing.runtime_checkable
class ContainerTrait(typing.Protocol[ContainerT, ElementT]):
    """Describes how parsed values accumulate in a destination.

    `element_type` is the type every single value is parsed to. `insert`
    never fails for a value of that type and returns the updated destination,
    which is the same object for mutable containers.
    """

    __slots__: typing.Sequence[str] = ()

    @property
    def __type__(self) -> typing.Any:
        ...

    @property
    def element_type(self) -> typing.Any:
        ...

    def create(self) -> ContainerT:
        ...

    def insert(self, container: ContainerT, element: ElementT) -> ContainerT:
        ...
