"""Struct fields"""

import typing

from typing_extensions import Self, Unpack

from .descriptors import (
    ANY,
    BOOL,
    FLOAT,
    INT,
    STRING,
    SYMBOL,
    Descriptor,
    Sequence,
    StructRef,
    to_descriptor,
)
from .exceptions import FieldError, TypeMismatchError, UnsupportedTypeError
from .registry import Schema, SchemaRegistry, resolve_descriptor
from .tags import DEFAULT_TAG, WireTag, parse_tag
from .validators import is_empty, type_correct, zero_value

if typing.TYPE_CHECKING:
    from .struct import TypedStruct


_T = typing.TypeVar("_T")


class FieldInitKwargs(typing.TypedDict, total=False):
    """Possible keyword arguments for initializing a field."""

    nilable: bool
    """If True, permits the field to hold None. None is then its zero value."""
    tag: typing.Union[str, WireTag, None]
    """Wire tag directive, e.g. `"other_key,omitempty"`, `"-"` or `"-,"`."""


class Field(typing.Generic[_T]):
    """Attribute descriptor declaring a typed struct field and enforcing its type."""

    def __init__(
        self,
        field_type: typing.Any,
        *,
        nilable: bool = False,
        tag: typing.Union[str, WireTag, None] = None,
    ) -> None:
        """
        Initialize the field.

        :param field_type: The field's type. Any spelling accepted by `to_descriptor`:
            `"int"`, `int`, `"string"`, `str`, `"float"`, `"bool"`, `"symbol"`,
            `"any"`, a struct type or name, or a one-element list of any of these.
        :param nilable: If True, permits the field to be set to None, defaults to False.
        :param tag: Wire tag directive controlling the field's key on the wire,
            defaults to None (wire key is the field name).
        :raises UnsupportedTypeError: If `field_type` is not a supported type.
        """
        self.field_type = field_type
        self.descriptor: Descriptor = to_descriptor(field_type)
        self.nilable = bool(nilable)
        self.tag = parse_tag(tag)
        self.name: typing.Optional[str] = None
        self.schema: typing.Optional[Schema] = None
        self._resolved: typing.Optional[Descriptor] = None

    def __repr__(self) -> str:
        nilable = ", nilable=True" if self.nilable else ""
        return f"{type(self).__name__}({self.descriptor}{nilable}, name={self.name!r})"

    @property
    def wire_key(self) -> str:
        """Key used for the field on the wire; the rename if tagged, else the field name."""
        if self.name is None:
            raise FieldError(f"'{type(self).__name__}' has no name. Ensure it is bound to a struct.")
        return self.tag.key_for(self.name)

    @property
    def registry(self) -> typing.Optional[SchemaRegistry]:
        return self.schema.registry if self.schema is not None else None

    def bind(self, schema: Schema, name: str) -> None:
        """
        Called when the field is bound to a struct's schema.

        :param schema: The schema to which the field is bound.
        :param name: The name of the field.
        """
        self.schema = schema
        self.name = name

    def __set_name__(self, owner: typing.Type[typing.Any], name: str) -> None:
        if self.name is None:
            self.name = name

    def resolve(self) -> Descriptor:
        """
        Return the field's descriptor with struct names resolved to struct types.

        :raises UnsupportedTypeError: If a referenced struct name is not registered.
        """
        if self._resolved is None:
            self._resolved = resolve_descriptor(self.descriptor, self.registry)
        return self._resolved

    def zero(self) -> typing.Any:
        """Return a fresh zero value for the field."""
        return zero_value(self.resolve(), self.nilable)

    def check(self, value: typing.Any) -> bool:
        """Check if the value satisfies the field's type and nilability."""
        return type_correct(self.resolve(), value, self.nilable)

    def validate(self, value: typing.Any, owner: typing.Optional[str] = None) -> _T:
        """
        Validate a value for the field.

        :param value: The value to validate.
        :param owner: Name of the struct the field belongs to, for error messages.
        :raises TypeMismatchError: If the value does not satisfy the field's type.
        """
        if not self.check(value):
            expected = f"{self.descriptor}{' or None' if self.nilable else ''}"
            raise TypeMismatchError(self.name or "?", expected, value, owner)
        return value

    def is_empty(self, value: typing.Any) -> bool:
        return is_empty(self.resolve(), value, self.nilable)

    @typing.overload
    def __get__(self, instance: None, owner: typing.Type[typing.Any]) -> Self: ...

    @typing.overload
    def __get__(
        self, instance: "TypedStruct", owner: typing.Optional[typing.Type[typing.Any]]
    ) -> _T: ...

    def __get__(
        self,
        instance: typing.Optional["TypedStruct"],
        owner: typing.Optional[typing.Type[typing.Any]] = None,
    ) -> typing.Union[_T, Self]:
        """Retrieve the field value from an instance, or the field itself from the class."""
        if instance is None:
            return self
        return instance.__values__[self.name]

    def __set__(self, instance: "TypedStruct", value: typing.Any) -> None:
        """Validate and set the field value on an instance."""
        owner = type(instance).__name__
        instance.__values__[self.name] = self.validate(value, owner)


class AnyField(Field[typing.Any]):
    """Field for values of the generic tree variant."""

    def __init__(self, **kwargs: Unpack[FieldInitKwargs]) -> None:
        super().__init__(ANY, **kwargs)


class BooleanField(Field[bool]):
    """Field for handling boolean values."""

    def __init__(self, **kwargs: Unpack[FieldInitKwargs]) -> None:
        super().__init__(BOOL, **kwargs)


class FloatField(Field[float]):
    """Field for handling float values."""

    def __init__(self, **kwargs: Unpack[FieldInitKwargs]) -> None:
        super().__init__(FLOAT, **kwargs)


class IntegerField(Field[int]):
    """Field for handling integer values."""

    def __init__(self, **kwargs: Unpack[FieldInitKwargs]) -> None:
        super().__init__(INT, **kwargs)


class StringField(Field[str]):
    """Field for handling string values."""

    def __init__(self, **kwargs: Unpack[FieldInitKwargs]) -> None:
        super().__init__(STRING, **kwargs)


class SymbolField(Field[str]):
    """Field for handling symbol values."""

    def __init__(self, **kwargs: Unpack[FieldInitKwargs]) -> None:
        super().__init__(SYMBOL, **kwargs)


class ListField(Field[typing.List[typing.Any]]):
    """
    Field for lists, with every element validated against the `child` field's type.

    Elements are never nilable, so the child field must not be nilable either.
    Use `AnyField` as the child if elements may be None.
    """

    def __init__(
        self,
        child: typing.Union[Field[typing.Any], typing.Any],
        **kwargs: Unpack[FieldInitKwargs],
    ) -> None:
        if isinstance(child, Field):
            if child.nilable:
                raise UnsupportedTypeError(
                    "list elements cannot be nilable; use AnyField as the child instead",
                    child,
                )
            if child.tag != DEFAULT_TAG:
                raise UnsupportedTypeError("list element fields cannot be tagged", child)
            inner = child.descriptor
        else:
            inner = to_descriptor(child)
        super().__init__(Sequence(inner), **kwargs)
        self.child = child


class NestedField(Field["TypedStruct"]):
    """Nested struct field."""

    def __init__(
        self,
        struct: typing.Union[typing.Type["TypedStruct"], str],
        **kwargs: Unpack[FieldInitKwargs],
    ) -> None:
        descriptor = to_descriptor(struct)
        if not isinstance(descriptor, StructRef):
            raise UnsupportedTypeError(f"{struct!r} is not a typed struct type", struct)
        super().__init__(descriptor, **kwargs)


__all__ = [
    "FieldInitKwargs",
    "Field",
    "AnyField",
    "BooleanField",
    "FloatField",
    "IntegerField",
    "StringField",
    "SymbolField",
    "ListField",
    "NestedField",
]
