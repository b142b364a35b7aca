import copy

import pytest

from typed_struct import (
    AnyField,
    BooleanField,
    Field,
    FieldError,
    FloatField,
    IntegerField,
    ListField,
    NestedField,
    StringField,
    Symbol,
    SymbolField,
    TypedStruct,
    TypeMismatchError,
    UnknownFieldError,
    UnsupportedTypeError,
)


@pytest.fixture
def point_cls(registry):
    class Point(TypedStruct, registry=registry):
        x = Field(int)
        y = Field(int)
        label = Field(str, nilable=True)

    return Point


def test_construct_with_zero_values(point_cls):
    point = point_cls()
    assert point.x == 0
    assert point.y == 0
    assert point.label is None


def test_construct_from_mapping_and_keywords(point_cls):
    point = point_cls({"x": 1, "y": 2}, y=3, label="p")
    assert point.to_dict() == {"x": 1, "y": 3, "label": "p"}


def test_construct_ignores_unknown_keys(point_cls):
    point = point_cls({"x": 1, "z": 5})
    assert point.x == 1
    with pytest.raises(UnknownFieldError):
        point["z"]


def test_construct_does_not_coerce(point_cls):
    with pytest.raises(TypeMismatchError) as exc_info:
        point_cls(x="10")

    error = exc_info.value
    assert error.field == "x"
    assert error.expected == "int"
    assert error.actual == "10"
    assert "Point.x" in str(error)
    assert isinstance(error, FieldError)
    assert isinstance(error, TypeError)


def test_attribute_and_item_access(point_cls):
    point = point_cls()
    point.x = 5
    point["y"] = 6
    assert point["x"] == 5
    assert point.y == 6
    assert point.get("x") == 5


def test_assignment_is_validated_and_atomic(point_cls):
    point = point_cls(x=1)
    with pytest.raises(TypeMismatchError):
        point.x = "2"
    with pytest.raises(TypeMismatchError):
        point["x"] = 2.0
    with pytest.raises(TypeMismatchError):
        point.assign("x", None)
    assert point.x == 1


def test_nilable_assignment(point_cls):
    point = point_cls(label="a")
    point.label = None
    assert point.label is None
    with pytest.raises(TypeMismatchError) as exc_info:
        point.label = 1
    assert exc_info.value.expected == "string or None"


def test_unknown_fields(point_cls):
    point = point_cls()
    with pytest.raises(UnknownFieldError):
        point.z
    with pytest.raises(UnknownFieldError):
        point.z = 1
    with pytest.raises(UnknownFieldError):
        point["z"]
    with pytest.raises(UnknownFieldError):
        point["z"] = 1
    with pytest.raises(UnknownFieldError):
        point.assign("z", 1)
    assert not hasattr(point, "z")
    assert getattr(point, "z", None) is None


def test_fields_cannot_be_deleted(point_cls):
    point = point_cls()
    with pytest.raises(AttributeError):
        del point.x


def test_try_assign(point_cls):
    point = point_cls(x=1)
    assert point.try_assign("x", 2) is True
    assert point.x == 2
    assert point.try_assign("x", "3") is False
    assert point.try_assign("z", 3) is False
    assert point.x == 2


def test_sequence_field_element_strictness(registry):
    class Numbers(TypedStruct, registry=registry):
        values = Field([int])

    numbers = Numbers()
    with pytest.raises(TypeMismatchError):
        numbers.values = [1, "x"]
    numbers.values = []
    assert numbers.values == []
    with pytest.raises(TypeMismatchError):
        numbers.values = (1, 2)


def test_zero_values_are_not_shared(registry):
    class Numbers(TypedStruct, registry=registry):
        values = Field([int])

    first, second = Numbers(), Numbers()
    first.values.append(1)
    assert second.values == []


def test_nested_struct_fields(registry):
    class Child(TypedStruct, registry=registry):
        n = Field(int)

    class Parent(TypedStruct, registry=registry):
        child = Field(Child)
        maybe = Field(Child, nilable=True)

    parent = Parent()
    assert parent.child == Child()
    assert parent.maybe is None

    parent.maybe = Child(n=1)
    assert parent.maybe.n == 1
    with pytest.raises(TypeMismatchError):
        parent.child = {"n": 1}
    with pytest.raises(TypeMismatchError):
        parent.child = None


def test_equality(point_cls, registry):
    class Other(TypedStruct, registry=registry):
        x = Field(int)
        y = Field(int)
        label = Field(str, nilable=True)

    assert point_cls(x=1) == point_cls(x=1)
    assert point_cls(x=1) != point_cls(x=2)
    assert point_cls(x=1) != Other(x=1)
    assert point_cls() != {"x": 0, "y": 0, "label": None}


def test_repr(point_cls):
    assert repr(point_cls(x=1, label="a")) == "Point(x=1, y=0, label='a')"


def test_instances_are_unhashable(point_cls):
    with pytest.raises(TypeError):
        hash(point_cls())


def test_copy(point_cls):
    point = point_cls(x=1, y=2)
    duplicate = copy.deepcopy(point)
    assert duplicate == point
    duplicate.x = 3
    assert point.x == 1


def test_to_dict(registry):
    class Record(TypedStruct, registry=registry):
        zeta = Field(int, tag="z_key")
        alpha = Field(str, tag="-")
        items = Field([int])

    record = Record(zeta=1, items=[2])
    result = record.to_dict()
    assert list(result) == ["zeta", "alpha", "items"]
    assert result == {"zeta": 1, "alpha": "", "items": [2]}

    result["zeta"] = "not an int"
    del result["alpha"]
    assert record.zeta == 1
    assert record.alpha == ""
    # Shallow: values themselves are shared
    assert result["items"] is record.items


def test_shorthand_fields(registry):
    class Everything(TypedStruct, registry=registry):
        anything = AnyField()
        flag = BooleanField()
        ratio = FloatField()
        count = IntegerField()
        name = StringField(tag="full_name")
        kind = SymbolField()
        tags = ListField(StringField())
        scores = ListField(int, nilable=True)

    instance = Everything()
    assert instance.to_dict() == {
        "anything": None,
        "flag": False,
        "ratio": 0.0,
        "count": 0,
        "name": "",
        "kind": Symbol(""),
        "tags": [],
        "scores": None,
    }
    instance.kind = Symbol("active")
    with pytest.raises(TypeMismatchError):
        instance.kind = "active"
    instance.anything = {"a": [1, None]}
    with pytest.raises(TypeMismatchError):
        instance.anything = object()


def test_nested_field(registry):
    class Child(TypedStruct, registry=registry):
        n = Field(int)

    class Parent(TypedStruct, registry=registry):
        child = NestedField(Child)
        later = NestedField("Child", nilable=True)

    assert Parent().child == Child()
    with pytest.raises(UnsupportedTypeError):
        NestedField(int)


def test_list_field_child_rules():
    with pytest.raises(UnsupportedTypeError):
        ListField(IntegerField(nilable=True))
    with pytest.raises(UnsupportedTypeError):
        ListField(IntegerField(tag="key"))
    with pytest.raises(UnsupportedTypeError):
        ListField([int, str])


def test_unsupported_field_type():
    with pytest.raises(UnsupportedTypeError):
        Field(dict)


def test_unbound_field_has_no_wire_key():
    with pytest.raises(FieldError):
        Field(int).wire_key
