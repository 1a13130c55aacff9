import enum
import types
import typing

__all__: typing.Sequence[str] = (
    "UNIONS",
    "NONES",
    "SpecialType",
    "JoinedStr",
    "unpack_typehint",
    "type_name",
)


UNIONS = frozenset((typing.Union, types.UnionType))
NONES = frozenset((None, types.NoneType))


class SpecialType(enum.Enum):
    JOINEDSTR = enum.auto()


JoinedStr = typing.Annotated[str, SpecialType.JOINEDSTR]


def unpack_typehint(
    annotation: typing.Any,
) -> typing.Tuple[
    typing.Any,  # Typehint with any Annotated wrapper removed
    typing.Optional[typing.Any],  # Origin (e.g. list for list[int]), if any
    typing.Sequence[typing.Any],  # Type arguments
    typing.Sequence[typing.Any],  # Annotated arguments, if any
]:
    annotated_args: typing.Sequence[typing.Any] = ()
    if typing.get_origin(annotation) is typing.Annotated:
        annotation, *annotated_args = typing.get_args(annotation)

    return (
        annotation,
        typing.get_origin(annotation),
        typing.get_args(annotation),
        tuple(annotated_args),
    )


def type_name(annotation: typing.Any) -> str:
    if isinstance(annotation, type) and not typing.get_args(annotation):
        return annotation.__name__

    return repr(annotation).replace("typing.", "")
