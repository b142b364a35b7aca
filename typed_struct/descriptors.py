"""
Type descriptors.

A descriptor is the declared shape a field's value must conform to. There are
exactly three kinds, all immutable and hashable:

- `Primitive(kind)`: one of the `Kind` members.
- `StructRef(target)`: an instance of another declared struct. `target` is
  either the struct class itself or its registered name (a forward reference,
  resolved through the schema registry on first use).
- `Sequence(inner)`: a list whose every element satisfies `inner`.

`to_descriptor` turns the spellings accepted in field declarations
(`"int"`, `int`, `[Point]`, `"Node"`, ...) into descriptors.
"""

import enum
import typing

from .exceptions import UnsupportedTypeError


class Symbol(str):
    """
    An interned identifier value.

    Symbols compare equal to strings with the same text but are a distinct
    kind for validation purposes: a `Symbol` is not a String value, and a
    plain `str` is not a Symbol value.
    """

    __slots__ = ()

    def __repr__(self) -> str:
        return f"Symbol({str.__repr__(self)})"


class Kind(enum.Enum):
    """Primitive kinds."""

    INT = "int"
    STRING = "string"
    FLOAT = "float"
    BOOL = "bool"
    SYMBOL = "symbol"
    ANY = "any"


class Primitive(typing.NamedTuple):
    kind: Kind

    def __str__(self) -> str:
        return self.kind.value


class StructRef(typing.NamedTuple):
    target: typing.Union[type, str]

    @property
    def name(self) -> str:
        if isinstance(self.target, str):
            return self.target
        return self.target.__name__

    @property
    def is_forward(self) -> bool:
        """Whether the reference is by name and needs registry resolution."""
        return isinstance(self.target, str)

    def __str__(self) -> str:
        return self.name


class Sequence(typing.NamedTuple):
    inner: "Descriptor"

    def __str__(self) -> str:
        return f"[{self.inner}]"


Descriptor = typing.Union[Primitive, StructRef, Sequence]

INT = Primitive(Kind.INT)
STRING = Primitive(Kind.STRING)
FLOAT = Primitive(Kind.FLOAT)
BOOL = Primitive(Kind.BOOL)
SYMBOL = Primitive(Kind.SYMBOL)
ANY = Primitive(Kind.ANY)

_NAMED_PRIMITIVES: typing.Dict[str, Primitive] = {
    "int": INT,
    "string": STRING,
    "str": STRING,
    "float": FLOAT,
    "bool": BOOL,
    "symbol": SYMBOL,
    "any": ANY,
}

_CLASS_PRIMITIVES: typing.Dict[typing.Any, Primitive] = {
    int: INT,
    str: STRING,
    float: FLOAT,
    bool: BOOL,
    Symbol: SYMBOL,
    typing.Any: ANY,
}


def is_descriptor(obj: typing.Any) -> typing.TypeGuard[Descriptor]:
    return isinstance(obj, (Primitive, StructRef, Sequence))


def _is_struct_class(obj: typing.Any) -> bool:
    # Avoids a circular import of `struct`, which imports this module.
    return isinstance(obj, type) and hasattr(obj, "__schema__")


def _check(descriptor: typing.Any) -> Descriptor:
    """Validate (and normalise) a descriptor instance built by hand."""
    if isinstance(descriptor, Primitive):
        if not isinstance(descriptor.kind, Kind):
            raise UnsupportedTypeError(
                f"unsupported primitive kind {descriptor.kind!r}", descriptor
            )
    elif isinstance(descriptor, StructRef):
        target = descriptor.target
        if isinstance(target, str):
            if not target:
                raise UnsupportedTypeError("struct reference needs a name", descriptor)
        elif not _is_struct_class(target):
            raise UnsupportedTypeError(
                f"'{target!r}' is not a typed struct type", descriptor
            )
    else:
        return Sequence(to_descriptor(descriptor.inner))
    return descriptor


def to_descriptor(spec: typing.Any) -> Descriptor:
    """
    Convert a field type spelling to a type descriptor.

    :param spec: A primitive kind name, a primitive Python type, a typed struct
        class, the name of a typed struct, a one-element list wrapping any of
        these, or a descriptor instance.
    :return: The normalised descriptor.
    :raises UnsupportedTypeError: If `spec` does not describe a supported type.
    """
    if is_descriptor(spec):
        return _check(spec)

    if isinstance(spec, str):
        if spec in _NAMED_PRIMITIVES:
            return _NAMED_PRIMITIVES[spec]
        if not (spec.isidentifier() and spec[0].isupper()):
            raise UnsupportedTypeError(f"unsupported type {spec!r}", spec)
        return StructRef(spec)

    if isinstance(spec, list):
        if len(spec) != 1:
            raise UnsupportedTypeError(
                f"sequence type must have exactly one element type, got {len(spec)}",
                spec,
            )
        try:
            return Sequence(to_descriptor(spec[0]))
        except UnsupportedTypeError as exc:
            raise UnsupportedTypeError(
                f"unsupported sequence element type in {spec!r}", spec
            ) from exc

    try:
        primitive = _CLASS_PRIMITIVES.get(spec)
    except TypeError:
        # Unhashable specs can never be primitives
        primitive = None
    if primitive is not None:
        return primitive

    if _is_struct_class(spec):
        return StructRef(spec)
    raise UnsupportedTypeError(f"unsupported type {spec!r}", spec)


__all__ = [
    "Symbol",
    "Kind",
    "Primitive",
    "StructRef",
    "Sequence",
    "Descriptor",
    "INT",
    "STRING",
    "FLOAT",
    "BOOL",
    "SYMBOL",
    "ANY",
    "is_descriptor",
    "to_descriptor",
]
