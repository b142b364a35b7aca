"""Generic tree adapter. Converts between struct instances and in-memory trees."""

import typing

from ..registry import SchemaRegistry
from ..serializers import deserialize, serialize


def marshal(value: typing.Any) -> typing.Any:
    """
    Convert a struct instance (or list of instances) to a generic tree.

    :param value: The value to convert.
    :return: Nested dicts, lists and scalars keyed by wire keys.
    """
    return serialize(value)


def unmarshal(
    tree: typing.Any,
    target: typing.Any,
    *,
    registry: typing.Optional[SchemaRegistry] = None,
) -> typing.Any:
    """
    Convert a generic tree to an instance of `target`.

    :param tree: The generic tree.
    :param target: A struct type, or a type spelling such as `[Point]`.
    :param registry: Registry used to resolve struct names in `target`.
    """
    return deserialize(tree, target, registry=registry)


__all__ = ["marshal", "unmarshal"]
