"""Typed struct implementation with field type enforcement."""

import typing

from .exceptions import UnknownFieldError
from .fields import Field
from .registry import Schema, SchemaRegistry, default_registry


def _struct_repr(instance: "TypedStruct") -> str:
    """Build a string representation of the struct instance."""
    values = instance.__values__
    field_strs = [f"{key}={values[key]!r}" for key in type(instance).__schema__.fields]
    return f"{type(instance).__name__}({', '.join(field_strs)})"


def _inherited_fields(
    bases: typing.Tuple[type, ...],
) -> typing.Dict[str, Field]:
    """Collect fields from the base classes, in base declaration order."""
    fields: typing.Dict[str, Field] = {}
    inspected = set()
    for base_ in reversed(bases):
        for cls_ in reversed(base_.mro()[:-1]):
            if cls_ in inspected:
                continue
            inspected.add(cls_)
            schema = cls_.__dict__.get("__schema__", None)
            if not isinstance(schema, Schema):
                continue
            # Subclassing ends the parent's declaration phase
            schema.freeze()
            fields.update(schema.fields)
    return fields


class TypedStructMeta(type):
    """Metaclass for TypedStruct types."""

    def __new__(
        mcs,
        name: str,
        bases: typing.Tuple[type, ...],
        attrs: typing.Dict[str, typing.Any],
        registry: typing.Optional[SchemaRegistry] = None,
    ):
        """
        Create a new TypedStruct type and declare its schema.

        Fields declared on base classes come first, in their declaration order,
        followed by the fields declared in the class body. A field redefined in
        the class body replaces the inherited one in place.

        :param name: Name of the new class.
        :param bases: Base classes for the new class.
        :param attrs: Attributes and namespace for the new class.
        :param registry: Registry to declare the schema in. Defaults to `default_registry`.
        :return: New TypedStruct type
        """
        attrs = dict(attrs)
        # Instances keep their values in `__values__` only.
        attrs.setdefault("__slots__", ())
        new_cls = super().__new__(mcs, name, bases, attrs)

        is_base = not any(isinstance(base_, TypedStructMeta) for base_ in bases)
        schema = Schema(name)
        schema.struct = new_cls
        new_cls.__schema__ = schema
        if is_base:
            return new_cls

        own_fields = {
            key: value for key, value in attrs.items() if isinstance(value, Field)
        }
        for field_name, field in own_fields.items():
            field.bind(schema, field_name)

        inherited = _inherited_fields(bases)
        for field_name, field in inherited.items():
            schema.add_field(field_name, own_fields.get(field_name, field))
        for field_name, field in own_fields.items():
            if field_name not in inherited:
                schema.add_field(field_name, field)

        target = registry if registry is not None else default_registry
        target.register(schema)
        return new_cls

    def __init__(cls, name, bases, attrs, **kwargs):
        super().__init__(name, bases, attrs)


class TypedStruct(metaclass=TypedStructMeta):
    """
    Record type whose fields are type-checked on every construction and assignment.

    Structs are defined by subclassing `TypedStruct` and declaring fields as
    class attributes:

    ```python
    class Point(TypedStruct):
        x = Field(int)
        y = Field(int)
        label = Field(str, nilable=True, tag="name,omitempty")

    point = Point(x=1)
    point.y = 2
    point["y"]  # 2
    point.y = "2"  # raises TypeMismatchError
    ```

    Pass `registry=` as a class keyword to declare the schema in a registry
    other than `default_registry`.
    """

    __slots__ = ("__values__", "__weakref__")
    __schema__: typing.ClassVar[Schema]
    __hash__ = None  # type: ignore[assignment]

    def __init__(
        self,
        data: typing.Optional[typing.Mapping[str, typing.Any]] = None,
        /,
        **kwargs: typing.Any,
    ) -> None:
        """
        Initialize the struct from an initial value mapping and/or keyword arguments.

        Every field takes its value from `data`/`kwargs` if present (keyword
        arguments win) or its zero value otherwise. Unknown keys are ignored.

        :raises TypeMismatchError: At the first field whose value does not
            satisfy the field's type.
        :raises UnsupportedTypeError: If building the zero value of the struct
            would never end, because non-nilable struct references form a cycle.
        """
        schema = type(self).__schema__
        schema.check_references()
        schema.freeze()
        init = {**(data or {}), **kwargs}
        values: typing.Dict[str, typing.Any] = {}
        object.__setattr__(self, "__values__", values)
        for name, field in schema.fields.items():
            value = init[name] if name in init else field.zero()
            values[name] = field.validate(value, schema.name)

    @classmethod
    def define(
        cls,
        name: str,
        field_type: typing.Any,
        *,
        nilable: bool = False,
        tag: typing.Optional[str] = None,
    ) -> Field:
        """
        Declare an additional field on the struct type.

        Only possible until the type is first instantiated or subclassed.

        :param name: Field name.
        :param field_type: The field's type, as accepted by `Field`.
        :param nilable: If True, the field may hold None.
        :param tag: Wire tag directive.
        :raises UnsupportedTypeError: If `field_type` is not a supported type.
        :raises FrozenSchemaError: If the struct type's declaration phase is over.
        """
        return cls.__schema__.declare(name, field_type, nilable=nilable, tag=tag)

    def get(self, name: str) -> typing.Any:
        """
        Return the current value of a field.

        :raises UnknownFieldError: If the struct has no such field.
        """
        try:
            return self.__values__[name]
        except KeyError:
            raise UnknownFieldError(name, type(self).__name__) from None

    def assign(self, name: str, value: typing.Any) -> None:
        """
        Validate and set a field's value. The field is left unchanged on failure.

        :raises UnknownFieldError: If the struct has no such field.
        :raises TypeMismatchError: If the value does not satisfy the field's type.
        """
        schema = type(self).__schema__
        field = schema.get_field(name)
        self.__values__[name] = field.validate(value, schema.name)

    def try_assign(self, name: str, value: typing.Any) -> bool:
        """
        Set a field's value if it is valid.

        :return: True if the value was set, False if the field is unknown
            or the value does not satisfy the field's type.
        """
        field = type(self).__schema__.fields.get(name)
        if field is None or not field.check(value):
            return False
        self.__values__[name] = value
        return True

    def to_dict(self) -> typing.Dict[str, typing.Any]:
        """Return a shallow mapping of field names to values."""
        return dict(self.__values__)

    def __getitem__(self, key: str) -> typing.Any:
        return TypedStruct.get(self, key)

    def __setitem__(self, key: str, value: typing.Any) -> None:
        TypedStruct.assign(self, key, value)

    def __getattr__(self, name: str) -> typing.Any:
        # Only called when normal lookup fails
        if name.startswith("__"):
            raise AttributeError(name)
        raise UnknownFieldError(name, type(self).__name__)

    def __setattr__(self, name: str, value: typing.Any) -> None:
        TypedStruct.assign(self, name, value)

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"cannot delete field '{name}' of '{type(self).__name__}'")

    def __eq__(self, other: typing.Any) -> bool:
        if not isinstance(other, TypedStruct):
            return NotImplemented
        if type(other) is not type(self):
            return False
        return self.__values__ == other.__values__

    def __repr__(self) -> str:
        return _struct_repr(self)

    def __getstate__(self) -> typing.Dict[str, typing.Any]:
        return dict(self.__values__)

    def __setstate__(self, state: typing.Dict[str, typing.Any]) -> None:
        object.__setattr__(self, "__values__", {})
        for name, value in state.items():
            TypedStruct.assign(self, name, value)


def define_struct(
    name: str,
    fields: typing.Union[
        typing.Mapping[str, typing.Any], typing.Iterable[typing.Tuple[str, typing.Any]]
    ],
    *,
    registry: typing.Optional[SchemaRegistry] = None,
    bases: typing.Tuple[type, ...] = (TypedStruct,),
) -> typing.Type[TypedStruct]:
    """
    Declare a struct type without a class body.

    Example:
    ```python
    Point = define_struct("Point", {"x": int, "y": Field(int, tag="y_key")})
    ```

    :param name: Name of the struct type (and its schema).
    :param fields: Field names mapped to `Field` instances or type spellings,
        in declaration order.
    :param registry: Registry to declare the schema in. Defaults to `default_registry`.
    :param bases: Base struct types.
    :return: The new struct type.
    """
    items = fields.items() if isinstance(fields, typing.Mapping) else fields
    attrs: typing.Dict[str, typing.Any] = {}
    for key, spec in items:
        attrs[key] = spec if isinstance(spec, Field) else Field(spec)
    return typing.cast(
        typing.Type[TypedStruct],
        TypedStructMeta(name, bases, attrs, registry=registry),
    )


__all__ = ["TypedStructMeta", "TypedStruct", "define_struct"]
