"""Building blocks for command-line option parsing.

`Slice` carries argument text without copying it. Value parsers turn that text
into typed values and container traits decide how those values accumulate in
a destination; both are looked up by type from registries that host
applications extend without touching the parsing engine.
"""

import typing

from rigging.errors import *
from rigging.impl.binding import *
from rigging.impl.container import *
from rigging.impl.option import *
from rigging.impl.registry import *
from rigging.impl.value_parser import *
from rigging.internal.typing_utils import JoinedStr
from rigging.result import *
from rigging.slice import *
from rigging.traits.container_trait import *
from rigging.traits.value_parser_trait import *

__all__: typing.Sequence[str] = (
    # errors
    "RiggingError",
    "ConversionError",
    "BindingError",
    "UnresolvedBindingError",
    "AmbiguousBindingError",
    # slice
    "NPOS",
    "WHITESPACE",
    "Slice",
    "SliceLike",
    # result
    "Ok",
    "ConversionFailure",
    "Result",
    "is_ok",
    # traits
    "ValueParser",
    "ValueFormatter",
    "ContainerTrait",
    # value parsers
    "StringParser",
    "BoolParser",
    "NumberParser",
    "PathParser",
    "EnumParser",
    "UrlParser",
    "UnionParser",
    "LiteralParser",
    "PairParser",
    "format_value",
    # container traits
    "ScalarTrait",
    "SequenceTrait",
    "SetTrait",
    "MappingTrait",
    "MultiMappingTrait",
    "JoinedStringTrait",
    "JoinedStr",
    # registries
    "ParserRegistry",
    "TraitRegistry",
    "DEFAULT_PARSERS",
    "DEFAULT_TRAITS",
    "register_parser",
    "register_trait",
    # engine-facing
    "Binding",
    "Option",
)
