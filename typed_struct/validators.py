"""
Instance validation.

`type_correct` decides whether a value may live in a slot described by a
descriptor and nilability flag. `zero_value` computes the value a slot holds
when nothing is supplied, and `is_empty` decides whether a value counts as
empty for `omitempty` wire tags.
"""

import typing

from .descriptors import Descriptor, Kind, Primitive, Sequence, StructRef, Symbol
from .registry import SchemaRegistry, resolve_struct


def _is_int(value: typing.Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_string(value: typing.Any) -> bool:
    return isinstance(value, str) and not isinstance(value, Symbol)


def is_generic_value(value: typing.Any) -> bool:
    """
    Check that a value fits the generic tree variant: None, a boolean, a number,
    a string, a list of generic values, or a string-keyed mapping of generic values.
    """
    if value is None or isinstance(value, (bool, int, float, str)):
        return True
    if isinstance(value, list):
        return all(is_generic_value(item) for item in value)
    if isinstance(value, dict):
        return all(
            isinstance(key, str) and is_generic_value(item)
            for key, item in value.items()
        )
    return False


_PRIMITIVE_CHECKS: typing.Dict[Kind, typing.Callable[[typing.Any], bool]] = {
    Kind.INT: _is_int,
    Kind.STRING: _is_string,
    Kind.FLOAT: lambda value: isinstance(value, float),
    Kind.BOOL: lambda value: isinstance(value, bool),
    Kind.SYMBOL: lambda value: isinstance(value, Symbol),
    Kind.ANY: is_generic_value,
}

_PRIMITIVE_ZEROS: typing.Dict[Kind, typing.Callable[[], typing.Any]] = {
    Kind.INT: int,
    Kind.STRING: str,
    Kind.FLOAT: float,
    Kind.BOOL: bool,
    Kind.SYMBOL: Symbol,
    Kind.ANY: lambda: None,
}


def zero_value(
    descriptor: Descriptor,
    nilable: bool = False,
    *,
    registry: typing.Optional[SchemaRegistry] = None,
) -> typing.Any:
    """
    Return the zero value for a descriptor.

    Nilable slots are None. Otherwise: 0, "", 0.0, False, an empty symbol,
    None for `any`, an empty list for sequences and a freshly zeroed instance
    for struct references.

    :param descriptor: The slot's descriptor.
    :param nilable: Whether the slot may hold None.
    :param registry: Registry used to resolve struct references by name.
    """
    if nilable:
        return None
    if isinstance(descriptor, Primitive):
        return _PRIMITIVE_ZEROS[descriptor.kind]()
    if isinstance(descriptor, StructRef):
        return resolve_struct(descriptor, registry)()
    return []


def type_correct(
    descriptor: Descriptor,
    value: typing.Any,
    nilable: bool = False,
    *,
    registry: typing.Optional[SchemaRegistry] = None,
) -> bool:
    """
    Check whether `value` satisfies a descriptor and nilability flag.

    No coercion is performed: a numeric string is not an int, and
    `0`/`1` are not booleans. Sequence elements are never nilable,
    whatever the slot's own nilability.

    :param descriptor: The slot's descriptor.
    :param value: The candidate value.
    :param nilable: Whether the slot may hold None.
    :param registry: Registry used to resolve struct references by name.
    """
    if value is None:
        if nilable:
            return True
        return isinstance(descriptor, Primitive) and descriptor.kind is Kind.ANY

    if isinstance(descriptor, Primitive):
        return _PRIMITIVE_CHECKS[descriptor.kind](value)
    if isinstance(descriptor, StructRef):
        return isinstance(value, resolve_struct(descriptor, registry))
    if not isinstance(value, list):
        return False
    return all(
        type_correct(descriptor.inner, item, False, registry=registry)
        for item in value
    )


def is_empty(
    descriptor: Descriptor,
    value: typing.Any,
    nilable: bool = False,
) -> bool:
    """
    Check whether a value is empty for the purpose of `omitempty`.

    For nilable slots only None is empty. Otherwise the value is empty when
    it equals the descriptor's zero value. Struct values are never empty.
    """
    if nilable:
        return value is None
    if isinstance(descriptor, StructRef):
        return False
    if isinstance(descriptor, Sequence):
        return isinstance(value, list) and len(value) == 0
    if descriptor.kind is Kind.ANY:
        return value is None
    return value == _PRIMITIVE_ZEROS[descriptor.kind]()


__all__ = ["zero_value", "type_correct", "is_empty", "is_generic_value"]
