import collections
import logging
import sys
import typing

import rigging

logging.basicConfig()
logging.getLogger().setLevel(logging.DEBUG)


# Rigging ships value parsers for the usual scalar types and container traits
# for the standard collections. A host application can teach it new types
# without touching whatever engine drives the parsing. We'll go over both
# kinds of extension here.

# First, a value parser. Existing implementations live under
# `rigging.impl.value_parser`, and the prototype a parser should follow is
# `rigging.traits.value_parser_trait.ValueParser`. Inheriting from it is not
# strictly required, because it's ultimately just a prototype.

# A parser receives a `Slice`, a view over the argument text, together with
# the number of values the option already received. Instead of raising on bad
# input it returns a `ConversionFailure`, so the engine can report every bad
# argument in one go.

from rigging.traits import value_parser_trait


class Size(int):
    """A byte count written as e.g. `512`, `4k` or `16M`."""


_UNITS = {"": 1, "k": 1024, "m": 1024**2, "g": 1024**3}


@rigging.register_parser(Size)
class SizeParser(value_parser_trait.ValueParser[Size], value_parser_trait.ValueFormatter[Size]):
    @property
    def __type__(self) -> typing.Type[Size]:
        return Size

    def parse(self, argument: rigging.Slice, index: int) -> rigging.Result[Size]:
        # Split the digits from the unit without copying the text.
        split_at = argument.find_first_not_of("0123456789")
        digits = argument if split_at is rigging.NPOS else argument.front(split_at)
        unit = str(argument.drop_front(digits.size())).lower()

        if digits.empty or unit not in _UNITS:
            return rigging.ConversionFailure(
                str(argument), Size, f"'{argument}' is not a valid size."
            )

        return rigging.Ok(Size(int(str(digits)) * _UNITS[unit]))

    def format(self, value: Size) -> str:
        return str(int(value))


# Now `Size` can be used like any other type, on its own or inside any of the
# supported containers.

limits = rigging.Option.from_hint("limit", typing.List[Size])
limits.feed_all(["512", "4k", "16M"])
print(limits.value)  # [512, 4096, 16777216]


# Something similar can be done for destinations. A container trait tells
# Rigging which element type a destination holds and how to add one element
# to it. Trait factories are registered per container type and receive the
# full typehint, so they can read its type arguments.

# For sake of illustration, we'll make a destination that counts how often
# each value was given.


class Tally(collections.Counter):  # type: ignore[type-arg]
    pass


class TallyTrait(rigging.ContainerTrait[Tally, typing.Any]):
    def __init__(self, element_type: typing.Any) -> None:
        self._element_type = element_type

    @property
    def __type__(self) -> typing.Type[Tally]:
        return Tally

    @property
    def element_type(self) -> typing.Any:
        return self._element_type

    def create(self) -> Tally:
        return Tally()

    def insert(self, container: Tally, element: typing.Any) -> Tally:
        container[element] += 1
        return container


@rigging.register_trait(Tally)
def tally_factory(annotation: typing.Any) -> TallyTrait:
    args = typing.get_args(annotation)
    return TallyTrait(args[0] if args else str)


votes = rigging.Option.from_hint("vote", Tally)
failures = votes.feed_all(["red", "blue", "red"])
print(dict(votes.value))  # {'red': 2, 'blue': 1}


# Conversion failures carry the offending text and target type, which is all
# an engine needs for a useful diagnostic.

sizes = rigging.Option.from_hint("size", Size)
for failure in sizes.feed_all(["12", "lots"]):
    print(sizes.describe_failure(failure), file=sys.stderr)


# Once start-up is done, the process-wide registries can be frozen so that
# nothing registers a competing binding later on.

rigging.DEFAULT_PARSERS.freeze()
rigging.DEFAULT_TRAITS.freeze()
