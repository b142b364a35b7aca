"""Schema registry."""

import logging
import typing
from types import MappingProxyType

from .descriptors import Descriptor, Sequence, StructRef, to_descriptor
from .exceptions import (
    FrozenSchemaError,
    SchemaError,
    UnknownFieldError,
    UnsupportedTypeError,
)

if typing.TYPE_CHECKING:
    from .fields import Field
    from .struct import TypedStruct


logger = logging.getLogger(__name__)


class Schema:
    """
    Ordered field specifications of one record type.

    Fields are appended during declaration and the schema is frozen
    afterwards. Declaration order is the serialization key order.
    """

    def __init__(
        self,
        name: str,
        registry: typing.Optional["SchemaRegistry"] = None,
    ) -> None:
        self.name = name
        self.registry = registry
        self.struct: typing.Optional[typing.Type["TypedStruct"]] = None
        self._fields: typing.Dict[str, "Field"] = {}
        self._frozen = False
        self._references_checked = False

    def __repr__(self) -> str:
        return f"<Schema {self.name} fields={list(self._fields)}>"

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def fields(self) -> typing.Mapping[str, "Field"]:
        """Read-only mapping of field names to fields, in declaration order."""
        return MappingProxyType(self._fields)

    @property
    def wire_keys(self) -> typing.Dict[str, str]:
        """Field name to wire key, for fields that are not skipped."""
        return {
            name: field.wire_key
            for name, field in self._fields.items()
            if not field.tag.skip
        }

    def _check_field(self, name: str, field: "Field") -> None:
        descriptor = field.descriptor
        if (
            isinstance(descriptor, StructRef)
            and not field.nilable
            and (descriptor.target == self.name or descriptor.target is self.struct)
        ):
            raise UnsupportedTypeError(
                f"'{self.name}.{name}' refers to its own schema and must be nilable",
                descriptor,
            )
        if field.tag.skip:
            return

        key = field.tag.key_for(name)
        for other_name, other in self._fields.items():
            if other_name == name or other.tag.skip:
                continue
            if other.wire_key == key:
                raise SchemaError(
                    f"'{self.name}.{name}' and '{self.name}.{other_name}' share the wire key '{key}'"
                )

    def add_field(self, name: str, field: "Field") -> "Field":
        """
        Append a field to the schema.

        :param name: Field name.
        :param field: The field specification.
        :raises FrozenSchemaError: If the schema is frozen.
        :raises SchemaError: If a field of the same name exists, or the field's
            wire key is already used by another field.
        :raises UnsupportedTypeError: If a non-nilable field refers back to its own schema.
        """
        if self._frozen:
            raise FrozenSchemaError(
                f"cannot declare '{name}' on frozen schema '{self.name}'"
            )
        if name in self._fields:
            raise SchemaError(f"field '{name}' is already declared on '{self.name}'")

        self._check_field(name, field)
        self._fields[name] = field
        return field

    def declare(
        self,
        name: str,
        field_type: typing.Any,
        *,
        nilable: bool = False,
        tag: typing.Optional[str] = None,
    ) -> "Field":
        """
        Declare a new field on the schema.

        If the schema is bound to a struct type, the field also becomes
        readable and writable on its instances.

        :param name: Field name.
        :param field_type: Any type spelling accepted by `to_descriptor`.
        :param nilable: If True, the field may hold None.
        :param tag: Wire tag directive.
        :return: The declared field.
        :raises UnsupportedTypeError: If `field_type` is not a supported type.
        """
        from .fields import Field

        field = Field(field_type, nilable=nilable, tag=tag)
        field.bind(self, name)
        self.add_field(name, field)
        if self.struct is not None:
            type.__setattr__(self.struct, name, field)
        return field

    def get_field(self, name: str) -> "Field":
        field = self._fields.get(name)
        if field is None:
            raise UnknownFieldError(name, self.name)
        return field

    def check_references(self) -> None:
        """
        Check that building a zero value of the schema terminates.

        Follows non-nilable struct references from this schema. The check
        runs once per schema.

        :raises UnsupportedTypeError: If a referenced struct name cannot be
            resolved, or non-nilable struct references form a cycle.
        """
        if self._references_checked:
            return
        find_reference_cycle(self)
        self._references_checked = True

    def freeze(self) -> None:
        """End the declaration phase. Further declarations raise `FrozenSchemaError`."""
        if self._frozen:
            return
        self._frozen = True
        logger.debug("Froze schema '%s'", self.name)


def _required_references(schema: Schema) -> typing.List[Schema]:
    # Only non-nilable, non-sequence references need a zero value built
    # eagerly, so only those edges can recurse forever.
    targets = []
    for field in schema.fields.values():
        if isinstance(field.descriptor, StructRef) and not field.nilable:
            struct = resolve_struct(field.descriptor, field.registry)
            targets.append(struct.__schema__)
    return targets


def find_reference_cycle(
    schema: Schema,
    done: typing.Optional[typing.Set[Schema]] = None,
) -> None:
    """
    Walk the non-nilable struct references reachable from `schema`.

    :param schema: The schema to start from.
    :param done: Schemas already known to be free of cycles. Updated in place.
    :raises UnsupportedTypeError: If the references form a cycle.
    """
    done = set() if done is None else done
    visiting: typing.List[Schema] = []

    def visit(current: Schema) -> None:
        if current in done:
            return
        if current in visiting:
            path = [*visiting[visiting.index(current):], current]
            cycle = " -> ".join(item.name for item in path)
            raise UnsupportedTypeError(
                f"non-nilable struct reference cycle: {cycle}", current.name
            )
        visiting.append(current)
        for target in _required_references(current):
            visit(target)
        visiting.pop()
        done.add(current)

    visit(schema)


class SchemaRegistry:
    """
    Registry of declared schemas.

    Schemas are held by identity, so distinct struct types may share a name.
    Names are only used to resolve forward references, and resolving a name
    shared by several schemas is an error.

    Written during the declaration phase only. `freeze` resolves every
    forward reference and rejects further registrations, after which the
    registry is safe to share for reads.
    """

    def __init__(self) -> None:
        self._schemas: typing.List[Schema] = []
        self._names: typing.Dict[str, typing.List[Schema]] = {}
        self._frozen = False

    def __repr__(self) -> str:
        return f"<SchemaRegistry {[schema.name for schema in self._schemas]}>"

    def __contains__(self, item: object) -> bool:
        """Check for a schema, a struct type, or a schema name."""
        if isinstance(item, str):
            return item in self._names
        if isinstance(item, Schema):
            return any(schema is item for schema in self._schemas)
        return any(schema.struct is item for schema in self._schemas)

    def __iter__(self) -> typing.Iterator[Schema]:
        return iter(list(self._schemas))

    def __len__(self) -> int:
        return len(self._schemas)

    @property
    def frozen(self) -> bool:
        return self._frozen

    def register(self, schema: Schema) -> Schema:
        """
        Register a schema.

        :raises FrozenSchemaError: If the registry is frozen.
        :raises SchemaError: If the schema is already registered.
        """
        if self._frozen:
            raise FrozenSchemaError(
                f"cannot register '{schema.name}', the registry is frozen"
            )
        if schema in self:
            raise SchemaError(f"schema '{schema.name}' is already registered")

        schema.registry = self
        self._schemas.append(schema)
        self._names.setdefault(schema.name, []).append(schema)
        logger.debug(
            "Registered schema '%s' with %d field(s)", schema.name, len(schema.fields)
        )
        return schema

    def get(self, name: str) -> Schema:
        """
        Return the schema registered under `name`.

        :raises UnsupportedTypeError: If no schema, or more than one schema,
            is registered under `name`.
        """
        schemas = self._names.get(name, [])
        if not schemas:
            raise UnsupportedTypeError(f"no schema named '{name}' is registered", name)
        if len(schemas) > 1:
            raise UnsupportedTypeError(
                f"the name '{name}' is ambiguous, {len(schemas)} schemas are registered under it",
                name,
            )
        return schemas[0]

    def resolve(self, ref: StructRef) -> typing.Type["TypedStruct"]:
        """Return the struct class a struct reference points to."""
        if not ref.is_forward:
            return typing.cast(typing.Type["TypedStruct"], ref.target)

        struct = self.get(ref.name).struct
        if struct is None:
            raise UnsupportedTypeError(
                f"schema '{ref.name}' is not bound to a struct type", ref
            )
        return struct

    def freeze(self) -> None:
        """
        Freeze every schema and the registry itself.

        :raises UnsupportedTypeError: If a struct reference cannot be resolved,
            or non-nilable struct references form a cycle.
        """
        for schema in self._schemas:
            for field in schema.fields.values():
                field.resolve()
            schema.freeze()

        done: typing.Set[Schema] = set()
        for schema in self._schemas:
            find_reference_cycle(schema, done)
            schema._references_checked = True
        self._frozen = True


default_registry = SchemaRegistry()
"""Registry used by struct types that do not name one."""


def resolve_struct(
    ref: StructRef,
    registry: typing.Optional[SchemaRegistry] = None,
) -> typing.Type["TypedStruct"]:
    """Return the struct class `ref` points to, resolving names through `registry`."""
    if not ref.is_forward:
        return typing.cast(typing.Type["TypedStruct"], ref.target)
    if registry is None:
        registry = default_registry
    return registry.resolve(ref)


def resolve_descriptor(
    descriptor: typing.Any,
    registry: typing.Optional[SchemaRegistry] = None,
) -> Descriptor:
    """
    Normalise a type spelling and replace forward struct references with
    references to the struct classes they name.
    """
    descriptor = to_descriptor(descriptor)
    if isinstance(descriptor, StructRef):
        return StructRef(resolve_struct(descriptor, registry))
    if isinstance(descriptor, Sequence):
        return Sequence(resolve_descriptor(descriptor.inner, registry))
    return descriptor


__all__ = [
    "Schema",
    "SchemaRegistry",
    "default_registry",
    "find_reference_cycle",
    "resolve_struct",
    "resolve_descriptor",
]
