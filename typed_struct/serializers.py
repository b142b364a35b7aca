"""
Serialization engine.

Converts struct instances to generic trees (dicts, lists and scalars) and
generic trees back to struct instances, applying each field's wire tag.
"""

import typing

from .descriptors import SYMBOL, Descriptor, Sequence, StructRef, Symbol
from .exceptions import DeserializationError, SerializationError
from .registry import SchemaRegistry, resolve_descriptor
from .struct import TypedStruct
from .validators import type_correct

_SCALARS = (type(None), bool, int, float, str)


def _serialize_instance(instance: TypedStruct) -> typing.Dict[str, typing.Any]:
    """
    Serialize a struct instance to a dictionary keyed by wire keys.

    Keys follow the schema's declaration order. Skipped fields, and empty
    values of fields tagged `omitempty`, are left out.

    :param instance: The struct instance to serialize.
    :return: A dictionary representation of the struct instance.
    """
    serialized_data: typing.Dict[str, typing.Any] = {}
    values = instance.__values__
    for name, field in type(instance).__schema__.fields.items():
        tag = field.tag
        if tag.skip:
            continue

        value = values[name]
        if tag.omit_if_empty and field.is_empty(value):
            continue
        serialized_data[field.wire_key] = _serialize_value(value)
    return serialized_data


def _serialize_value(value: typing.Any) -> typing.Any:
    if isinstance(value, TypedStruct):
        return _serialize_instance(value)
    if isinstance(value, list):
        return [_serialize_value(item) for item in value]
    if isinstance(value, dict):
        return {key: _serialize_value(item) for key, item in value.items()}
    if isinstance(value, _SCALARS):
        return value
    raise SerializationError(
        f"cannot serialize value of type '{type(value).__name__}'"
    )


def serialize(value: typing.Any) -> typing.Any:
    """
    Return the generic tree representation of a value.

    :param value: A struct instance, a list (of instances, scalars or lists),
        or a scalar.
    :return: Nested dicts, lists and scalars. Symbols are kept as `Symbol`
        values; the text adapters write them as strings.
    :raises SerializationError: If the value holds something that has no
        tree representation.
    """
    return _serialize_value(value)


def _deserialize_instance(
    tree: typing.Mapping[str, typing.Any],
    struct: typing.Type[TypedStruct],
) -> TypedStruct:
    """
    Build a struct instance from a mapping keyed by wire keys.

    Skipped fields and keys absent from the mapping are left to take their
    zero value.
    """
    init: typing.Dict[str, typing.Any] = {}
    for name, field in struct.__schema__.fields.items():
        if field.tag.skip:
            continue

        key = field.wire_key
        if key not in tree:
            continue
        init[name] = _deserialize_value(tree[key], field.resolve())
    return struct(init)


def _deserialize_value(node: typing.Any, descriptor: Descriptor) -> typing.Any:
    # Nodes of the wrong shape pass through, for `Construct` to reject.
    if isinstance(descriptor, StructRef):
        if isinstance(node, typing.Mapping):
            return _deserialize_instance(
                node, typing.cast(typing.Type[TypedStruct], descriptor.target)
            )
        return node
    if isinstance(descriptor, Sequence):
        if isinstance(node, list):
            return [_deserialize_value(item, descriptor.inner) for item in node]
        return node
    if descriptor == SYMBOL and type(node) is str:
        return Symbol(node)
    return node


def deserialize(
    tree: typing.Any,
    target: typing.Any,
    *,
    registry: typing.Optional[SchemaRegistry] = None,
) -> typing.Any:
    """
    Convert a generic tree to a value of the target type.

    Example:
    ```python
    point = deserialize({"x": 1, "y": 2}, Point)
    points = deserialize([{"x": 1}, {"x": 2}], [Point])
    ```

    :param tree: The generic tree to convert.
    :param target: A struct type, or any type spelling accepted by `Field`,
        such as `[Point]` for a list of points.
    :param registry: Registry used to resolve struct names in `target`.
    :return: The deserialized value.
    :raises DeserializationError: If the tree's top-level shape does not
        match the target.
    :raises TypeMismatchError: If a value in the tree does not satisfy its
        field's type.
    """
    descriptor = resolve_descriptor(target, registry)
    if isinstance(descriptor, StructRef) and not isinstance(tree, typing.Mapping):
        raise DeserializationError(
            f"expected a mapping for '{descriptor.name}', got {type(tree).__name__}"
        )
    if isinstance(descriptor, Sequence) and not isinstance(tree, list):
        raise DeserializationError(
            f"expected a list for '{descriptor}', got {type(tree).__name__}"
        )

    value = _deserialize_value(tree, descriptor)
    if not type_correct(descriptor, value):
        raise DeserializationError(
            f"cannot deserialize {tree!r} as '{descriptor}'"
        )
    return value


__all__ = ["serialize", "deserialize"]
