import logging

import orjson
import pytest

from typed_struct import (
    DeserializationError,
    Field,
    SerializationError,
    Symbol,
    TypedStruct,
    TypeMismatchError,
)
from typed_struct.config import configure
from typed_struct.wire import json


@pytest.fixture
def simple_cls(registry):
    class Simple(TypedStruct, registry=registry):
        n = Field(int)
        text = Field("string", tag="str")
        f = Field(float)

    return Simple


def test_marshal(simple_cls):
    simple = simple_cls(n=53, text="Hello, world!")
    assert json.marshal(simple) == '{"n":53,"str":"Hello, world!","f":0.0}'


def test_unmarshal(simple_cls):
    simple = json.unmarshal('{"n":53,"str":"Hello, world!","f":1.5}', simple_cls)
    assert simple == simple_cls(n=53, text="Hello, world!", f=1.5)
    assert json.unmarshal(b'{"n":1}', simple_cls).n == 1


def test_unmarshal_does_not_coerce(simple_cls):
    with pytest.raises(TypeMismatchError):
        json.unmarshal('{"n":"53"}', simple_cls)
    with pytest.raises(TypeMismatchError):
        json.unmarshal('{"f":1}', simple_cls)


def test_omitempty(registry):
    class Tagged(TypedStruct, registry=registry):
        a = Field(int, tag="a_key,omitempty")
        b = Field(str, nilable=True, tag=",omitempty")
        c = Field(int, tag="-")

    assert json.marshal(Tagged(c=5)) == "{}"
    assert json.marshal(Tagged(a=1, b="")) == '{"a_key":1,"b":""}'


def test_nested_and_lists(registry):
    class Child(TypedStruct, registry=registry):
        n = Field(int)

    class Parent(TypedStruct, registry=registry):
        obj = Field(Child, nilable=True)
        children = Field([Child])

    parent = Parent(obj=Child(n=1), children=[Child(n=2)])
    text = json.marshal(parent)
    assert text == '{"obj":{"n":1},"children":[{"n":2}]}'
    assert json.unmarshal(text, Parent) == parent
    assert json.unmarshal('{"obj":null}', Parent).obj is None


def test_top_level_lists(simple_cls):
    text = json.marshal([simple_cls(n=1), simple_cls(n=2)])
    assert text == '[{"n":1,"str":"","f":0.0},{"n":2,"str":"","f":0.0}]'
    assert json.unmarshal(text, [simple_cls]) == [simple_cls(n=1), simple_cls(n=2)]


def test_invalid_json(simple_cls, caplog):
    with caplog.at_level(logging.DEBUG, logger="typed_struct.wire.json"):
        with pytest.raises(DeserializationError):
            json.unmarshal("{", simple_cls)
    assert "Failed to decode JSON" in caplog.text


def test_top_level_shape_mismatch(simple_cls):
    with pytest.raises(DeserializationError):
        json.unmarshal("[1, 2]", simple_cls)


def test_unencodable_value(registry):
    class Holder(TypedStruct, registry=registry):
        value = Field("any")

    with pytest.raises(SerializationError):
        json.marshal(Holder(value=2**70))


def test_options_from_settings(simple_cls):
    configure({"JSON": {"option": orjson.OPT_INDENT_2}})
    assert json.marshal(simple_cls(n=1)) == '{\n  "n": 1,\n  "str": "",\n  "f": 0.0\n}'


@pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
def test_non_finite_floats_are_rejected(simple_cls, value):
    with pytest.raises(SerializationError, match="cannot represent"):
        json.marshal(simple_cls(f=value))


@pytest.mark.parametrize(
    "value, text",
    [
        (1e16, '{"f":1.0e+16}'),
        (1e-7, '{"f":1.0e-07}'),
        (2.5e20, '{"f":2.5e+20}'),
        (3.0, '{"f":3.0}'),
        (-0.5, '{"f":-0.5}'),
    ],
)
def test_floats_keep_a_fractional_digit(registry, value, text):
    class Measure(TypedStruct, registry=registry):
        f = Field(float)

    assert json.marshal(Measure(f=value)) == text
    restored = json.unmarshal(text, Measure)
    assert type(restored.f) is float
    assert restored.f == value


def test_integer_range(registry):
    class Counter(TypedStruct, registry=registry):
        n = Field(int)

    assert json.marshal(Counter(n=2**63)) == '{"n":9223372036854775808}'
    assert json.marshal(Counter(n=-(2**63))) == '{"n":-9223372036854775808}'
    assert json.unmarshal('{"n":18446744073709551615}', Counter).n == 2**64 - 1

    with pytest.raises(SerializationError, match="18446744073709551615"):
        json.marshal(Counter(n=2**64))
    with pytest.raises(SerializationError):
        json.marshal(Counter(n=-(2**63) - 1))
    # Never read back as an int, whether the decoder rejects it or widens it
    with pytest.raises((DeserializationError, TypeMismatchError)):
        json.unmarshal('{"n":18446744073709551616}', Counter)


def test_symbols_are_written_as_strings(registry):
    class Record(TypedStruct, registry=registry):
        kind = Field(Symbol)
        kinds = Field([Symbol])

    text = json.marshal(Record(kind=Symbol("on"), kinds=[Symbol("a")]))
    assert text == '{"kind":"on","kinds":["a"]}'
    assert json.unmarshal(text, Record).kind == Symbol("on")
