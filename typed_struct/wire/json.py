"""
JSON adapter. Compact JSON text with keys in schema declaration order.

Floats always carry a fractional digit (`0.0`, `1.0e+16`), and non-finite
floats are rejected. Integers must fit in the range `orjson` handles, from
`-2**63` to `2**64 - 1`.
"""

import logging
import math
import typing

import orjson

from ..config import settings
from ..descriptors import Symbol
from ..exceptions import DeserializationError, SerializationError
from ..logging import log_exception
from ..registry import SchemaRegistry
from ..serializers import deserialize, serialize

logger = logging.getLogger(__name__)

MIN_INT = -(2**63)
MAX_INT = 2**64 - 1


def _format_float(value: float) -> str:
    text = repr(value)
    mantissa, sep, exponent = text.partition("e")
    if "." not in mantissa:
        mantissa += ".0"
    return f"{mantissa}{sep}{exponent}"


def _encodable(node: typing.Any) -> typing.Any:
    """
    Prepare a generic tree for `orjson`.

    Floats are replaced by pre-rendered fragments so their text does not
    depend on `orjson`'s float formatting.

    :raises SerializationError: On a non-finite float, or an integer outside
        the 64-bit range.
    """
    if isinstance(node, dict):
        return {key: _encodable(item) for key, item in node.items()}
    if isinstance(node, list):
        return [_encodable(item) for item in node]
    if isinstance(node, bool):
        return node
    if isinstance(node, float):
        if not math.isfinite(node):
            raise SerializationError(f"JSON cannot represent the float {node!r}")
        return orjson.Fragment(_format_float(node))
    if isinstance(node, int) and not MIN_INT <= node <= MAX_INT:
        raise SerializationError(
            f"JSON encoding supports integers from {MIN_INT} to {MAX_INT}, got {node}"
        )
    if isinstance(node, Symbol):
        return str(node)
    return node


def dumps(tree: typing.Any) -> str:
    """
    Encode a generic tree as JSON text.

    :raises SerializationError: If the tree cannot be encoded.
    """
    try:
        return orjson.dumps(
            _encodable(tree), option=settings.JSON["option"]
        ).decode("utf-8")
    except orjson.JSONEncodeError as exc:
        log_exception(exc, "Failed to encode JSON", level=logging.DEBUG, logger=logger)
        raise SerializationError(f"Failed to encode JSON: {exc}") from exc


def loads(text: typing.Union[str, bytes]) -> typing.Any:
    """
    Decode JSON text into a generic tree.

    Integers outside the 64-bit range are never decoded as `int`.

    :raises DeserializationError: If the text is not valid JSON.
    """
    try:
        return orjson.loads(text)
    except orjson.JSONDecodeError as exc:
        log_exception(exc, "Failed to decode JSON", level=logging.DEBUG, logger=logger)
        raise DeserializationError(f"Invalid JSON: {exc}") from exc


def marshal(value: typing.Any) -> str:
    """
    Convert a struct instance (or list of instances) to JSON text.

    Example:
    ```python
    marshal(Point(x=1, y=2))  # '{"x":1,"y":2}'
    ```

    :raises SerializationError: If the value cannot be encoded.
    """
    return dumps(serialize(value))


def unmarshal(
    text: typing.Union[str, bytes],
    target: typing.Any,
    *,
    registry: typing.Optional[SchemaRegistry] = None,
) -> typing.Any:
    """
    Convert JSON text to an instance of `target`.

    :param text: The JSON text.
    :param target: A struct type, or a type spelling such as `[Point]`.
    :param registry: Registry used to resolve struct names in `target`.
    :raises DeserializationError: If the text is not valid JSON or its
        top-level shape does not match `target`.
    :raises TypeMismatchError: If a value does not satisfy its field's type.
    """
    return deserialize(loads(text), target, registry=registry)


__all__ = ["dumps", "loads", "marshal", "unmarshal"]
