from typed_struct import Field, Symbol, TypedStruct
from typed_struct.wire import tree


def test_marshal_and_unmarshal(registry):
    class Point(TypedStruct, registry=registry):
        x = Field(int)
        y = Field(int, tag="y_key,omitempty")

    assert tree.marshal(Point(x=1)) == {"x": 1}
    assert tree.marshal(Point(x=1, y=2)) == {"x": 1, "y_key": 2}
    assert tree.unmarshal({"x": 1, "y_key": 2}, Point) == Point(x=1, y=2)
    assert tree.unmarshal([{"x": 3}], ["Point"], registry=registry) == [Point(x=3)]


def test_symbols_are_kept(registry):
    class Record(TypedStruct, registry=registry):
        kind = Field(Symbol)

    node = tree.marshal(Record(kind=Symbol("on")))
    assert isinstance(node["kind"], Symbol)
    assert tree.unmarshal({"kind": "on"}, Record).kind == Symbol("on")
