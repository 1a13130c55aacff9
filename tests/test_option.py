"""Tests for `Binding` and `Option`, the surface a parsing engine talks to."""

from __future__ import annotations

import collections
import logging
import typing

import pytest

from rigging import errors
from rigging import result
from rigging.impl import binding
from rigging.impl import container
from rigging.impl import option
from rigging.impl import registry
from rigging.impl import value_parser
from rigging.internal import typing_utils
from rigging.slice import Slice


class Port(int):
    pass


class RepeatAwareParser:
    """Accepts anything for the first value and only digits afterwards."""

    @property
    def __type__(self) -> typing.Type[str]:
        return str

    def parse(self, argument: Slice, index: int) -> result.Result[str]:
        text = str(argument)
        if index and not text.isdigit():
            return result.ConversionFailure(text, str, f"'{text}' must be numeric after the first value.")

        return result.Ok(text)


# ---------------------------------------------------------------------------
# Binding
# ---------------------------------------------------------------------------


class TestBinding:
    def test_resolve_rejects_mapping_with_one_type_argument(self) -> None:
        with pytest.raises(errors.UnresolvedBindingError):
            binding.Binding.resolve(collections.Counter[str])

    def test_resolve_pairs_trait_and_parser(self) -> None:
        bound = binding.Binding.resolve(typing.List[int])
        assert isinstance(bound.trait, container.SequenceTrait)
        assert bound.parser.__type__ is int

    def test_resolve_fails_eagerly_for_unparsable_elements(self) -> None:
        class Opaque:
            pass

        with pytest.raises(errors.UnresolvedBindingError):
            binding.Binding.resolve(typing.List[Opaque])

    def test_populate_accepts_plain_strings(self) -> None:
        bound = binding.Binding.resolve(int)
        assert bound.populate(None, "12", 0) == result.Ok(12)

    def test_failed_populate_leaves_container_untouched(self) -> None:
        bound = binding.Binding.resolve(typing.List[int])
        values = [1]

        populated = bound.populate(values, Slice("nope"), 1)

        assert isinstance(populated, result.ConversionFailure)
        assert values == [1]

    def test_custom_registries(self) -> None:
        parsers = registry.ParserRegistry()
        parsers.register(str, value_parser.StringParser())

        bound = binding.Binding.resolve(typing.Set[str], parsers=parsers)
        assert bound.populate(set(), "a", 0) == result.Ok({"a"})

        with pytest.raises(errors.UnresolvedBindingError):
            binding.Binding.resolve(int, parsers=parsers)


# ---------------------------------------------------------------------------
# Option
# ---------------------------------------------------------------------------


class TestOption:
    def test_sequence_of_integers_reports_bad_tokens(self) -> None:
        numbers = option.Option.from_hint("numbers", typing.List[int])

        failures = numbers.feed_all(["1", "x", "3"])

        assert numbers.value == [1, 3]
        assert numbers.count == 2
        assert len(failures) == 1
        assert failures[0].argument == "x"
        assert failures[0].type is int
        assert "'x' is not a valid integer" in str(failures[0])

    def test_scalar_last_write_wins(self) -> None:
        level = option.Option.from_hint("level", int)
        level.feed_all(["1", "2"])
        assert level.value == 2

    def test_scalar_starts_as_none(self) -> None:
        assert option.Option.from_hint("level", int).value is None

    def test_mapping_duplicate_key(self) -> None:
        defines = option.Option.from_hint("define", typing.Dict[str, int])
        assert not defines.feed_all(["k=1", "k=2"])
        assert defines.value == {"k": 2}

    def test_multi_mapping_duplicate_key(self) -> None:
        headers = option.Option.from_hint("header", typing.Dict[str, typing.List[str]])
        headers.feed_all(["accept=json", "accept=xml"])
        assert headers.value == {"accept": ["json", "xml"]}

    def test_set_deduplicates(self) -> None:
        tags = option.Option.from_hint("tag", typing.FrozenSet[str])
        tags.feed_all(["a", "b", "a"])
        assert tags.value == frozenset({"a", "b"})

    def test_joined_string(self) -> None:
        message = option.Option.from_hint("message", typing_utils.JoinedStr)
        message.feed_all(["hello", "there"])
        assert message.value == "hello there"

    def test_index_is_the_occurrence_count(self) -> None:
        ids = option.Option.from_hint("id", typing.List[str])
        ids.override(parser=RepeatAwareParser())

        failures = ids.feed_all(["first", "2", "third"])

        assert ids.value == ["first", "2"]
        assert [failure.argument for failure in failures] == ["third"]

    def test_feed_accepts_slices(self) -> None:
        name = option.Option.from_hint("name", str)
        assert name.feed(Slice("--name=bob", 7)) is None
        assert name.value == "bob"

    def test_reset(self) -> None:
        numbers = option.Option.from_hint("numbers", typing.List[int])
        numbers.feed("1")
        numbers.reset()
        assert numbers.value == []
        assert numbers.count == 0

    def test_describe_failure(self) -> None:
        port = option.Option.from_hint("port", int)
        failure = port.feed("http")

        assert failure is not None
        message = port.describe_failure(failure)
        assert "'http'" in message
        assert "'port'" in message
        assert "int" in message

    def test_failures_are_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        port = option.Option.from_hint("port", int)
        with caplog.at_level(logging.DEBUG, logger="rigging.option"):
            port.feed("http")

        assert "rejected 'http'" in caplog.text

    def test_feed_all_logs_every_rejected_value(self, caplog: pytest.LogCaptureFixture) -> None:
        numbers = option.Option.from_hint("numbers", typing.List[int])
        with caplog.at_level(logging.DEBUG, logger="rigging.option"):
            numbers.feed_all(["1", "x", "3", "y"])

        assert "rejected 2 value(s): 'x', 'y'" in caplog.text

    def test_feed_all_without_failures_logs_no_summary(self, caplog: pytest.LogCaptureFixture) -> None:
        numbers = option.Option.from_hint("numbers", typing.List[int])
        with caplog.at_level(logging.DEBUG, logger="rigging.option"):
            numbers.feed_all(["1", "2"])

        assert "value(s)" not in caplog.text


class TestOptionOverride:
    def test_parser_must_produce_element_type(self) -> None:
        numbers = option.Option.from_hint("numbers", typing.List[int])
        with pytest.raises(TypeError):
            numbers.override(parser=value_parser.BoolParser())

    def test_parser_of_unrelated_type_is_rejected(self) -> None:
        numbers = option.Option.from_hint("numbers", typing.List[int])
        with pytest.raises(TypeError):
            numbers.override(parser=value_parser.PathParser())

    def test_bool_parser_for_bool_option(self) -> None:
        flag = option.Option.from_hint("flag", bool)
        flag.override(parser=value_parser.BoolParser(truthy={"sure"}))
        flag.feed("sure")
        assert flag.value is True

    def test_override_without_arguments_keeps_binding(self) -> None:
        numbers = option.Option.from_hint("numbers", typing.List[int])
        before = numbers.binding
        numbers.override()
        assert numbers.binding is before

    def test_parser_may_produce_a_subtype(self) -> None:
        class PortParser:
            @property
            def __type__(self) -> typing.Type[Port]:
                return Port

            def parse(self, argument: Slice, index: int) -> result.Result[Port]:
                return result.Ok(Port(str(argument)))

        ports = option.Option.from_hint("port", typing.List[int])
        ports.override(parser=PortParser())
        ports.feed("80")
        assert isinstance(ports.value[0], Port)

    def test_trait_override_resolves_a_parser(self) -> None:
        values = option.Option.from_hint("value", int)
        values.override(trait=container.SequenceTrait(list, float))

        values.feed_all(["1.5", "2"])
        assert values.value == [1.5, 2.0]

    def test_override_after_values_is_rejected(self) -> None:
        numbers = option.Option.from_hint("numbers", typing.List[int])
        numbers.feed("1")
        with pytest.raises(RuntimeError):
            numbers.override(trait=container.SetTrait(set, int))
