"""
YAML adapter.

Single documents are block-style mappings without a leading `---` marker.
Streams hold one `---`-separated document per value.
"""

import logging
import typing

import yaml

from ..config import settings
from ..descriptors import Symbol
from ..exceptions import DeserializationError, SerializationError
from ..logging import log_exception
from ..registry import SchemaRegistry
from ..serializers import deserialize, serialize

logger = logging.getLogger(__name__)


class StructDumper(yaml.SafeDumper):
    """Safe dumper that writes `Symbol` values as plain strings."""


StructDumper.add_representer(Symbol, yaml.representer.SafeRepresenter.represent_str)


def _dump_options() -> typing.Dict[str, typing.Any]:
    return {
        **settings.YAML,
        "default_flow_style": False,
        "sort_keys": False,
    }


def dumps(tree: typing.Any) -> str:
    """
    Encode a generic tree as a YAML document.

    :raises SerializationError: If the tree cannot be represented in YAML.
    """
    try:
        return yaml.dump(tree, Dumper=StructDumper, **_dump_options())
    except yaml.YAMLError as exc:
        log_exception(exc, "Failed to encode YAML", level=logging.DEBUG, logger=logger)
        raise SerializationError(f"Failed to encode YAML: {exc}") from exc


def dumps_all(trees: typing.Iterable[typing.Any]) -> str:
    """
    Encode generic trees as a YAML stream of `---`-separated documents.

    :raises SerializationError: If a tree cannot be represented in YAML.
    """
    try:
        return yaml.dump_all(list(trees), Dumper=StructDumper, **_dump_options())
    except yaml.YAMLError as exc:
        log_exception(exc, "Failed to encode YAML", level=logging.DEBUG, logger=logger)
        raise SerializationError(f"Failed to encode YAML: {exc}") from exc


def loads(text: typing.Union[str, bytes]) -> typing.Any:
    """
    Decode a YAML document into a generic tree.

    :raises DeserializationError: If the text is not valid YAML.
    """
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as exc:
        log_exception(exc, "Failed to decode YAML", level=logging.DEBUG, logger=logger)
        raise DeserializationError(f"Invalid YAML: {exc}") from exc


def loads_all(text: typing.Union[str, bytes]) -> typing.List[typing.Any]:
    """
    Decode a YAML stream into a list of generic trees, one per document.

    :raises DeserializationError: If the text is not valid YAML.
    """
    try:
        return list(yaml.safe_load_all(text))
    except yaml.YAMLError as exc:
        log_exception(exc, "Failed to decode YAML", level=logging.DEBUG, logger=logger)
        raise DeserializationError(f"Invalid YAML: {exc}") from exc


def marshal(value: typing.Any) -> str:
    """
    Convert a struct instance (or list of instances) to a YAML document.

    Example:
    ```python
    marshal(Point(x=1, y=2))  # 'x: 1\\ny: 2\\n'
    ```
    """
    return dumps(serialize(value))


def unmarshal(
    text: typing.Union[str, bytes],
    target: typing.Any,
    *,
    registry: typing.Optional[SchemaRegistry] = None,
) -> typing.Any:
    """
    Convert a YAML document to an instance of `target`.

    :param text: The YAML text.
    :param target: A struct type, or a type spelling such as `[Point]`.
    :param registry: Registry used to resolve struct names in `target`.
    """
    return deserialize(loads(text), target, registry=registry)


def marshal_stream(values: typing.Iterable[typing.Any]) -> str:
    """Convert values to a YAML stream, one document per value."""
    return dumps_all(serialize(value) for value in values)


def unmarshal_stream(
    text: typing.Union[str, bytes],
    targets: typing.Sequence[typing.Any],
    *,
    registry: typing.Optional[SchemaRegistry] = None,
) -> typing.List[typing.Any]:
    """
    Convert a YAML stream to a list of values, pairing documents with
    `targets` by position.

    :param text: The YAML stream.
    :param targets: One target type per document.
    :param registry: Registry used to resolve struct names in `targets`.
    :raises DeserializationError: If the number of documents differs from
        the number of targets, or a document does not match its target.
    """
    documents = loads_all(text)
    if len(documents) != len(targets):
        raise DeserializationError(
            f"expected {len(targets)} document(s), got {len(documents)}"
        )
    return [
        deserialize(document, target, registry=registry)
        for document, target in zip(documents, targets)
    ]


__all__ = [
    "dumps",
    "dumps_all",
    "loads",
    "loads_all",
    "marshal",
    "unmarshal",
    "marshal_stream",
    "unmarshal_stream",
]
