import typing


class StructError(Exception):
    """Base class for typed struct errors."""

    pass


class SchemaError(StructError):
    """Exception raised for schema declaration errors."""

    pass


class UnsupportedTypeError(SchemaError, TypeError):
    """Raised when a field is declared with an invalid type descriptor."""

    def __init__(self, message: str, spec: typing.Any = None) -> None:
        super().__init__(message)
        self.spec = spec


class FrozenSchemaError(SchemaError):
    """Raised when a frozen schema or registry is modified."""

    pass


class FieldError(StructError):
    """Exception raised for field-related errors."""

    pass


class TypeMismatchError(FieldError, TypeError):
    """Raised when a value does not satisfy a field's descriptor and nilability."""

    def __init__(
        self,
        field: str,
        expected: typing.Any,
        actual: typing.Any,
        owner: typing.Optional[str] = None,
    ) -> None:
        target = f"{owner}.{field}" if owner else field
        super().__init__(f"cannot assign {actual!r} to {target} (expected {expected})")
        self.field = field
        self.expected = expected
        self.actual = actual
        self.owner = owner


class UnknownFieldError(FieldError, AttributeError):
    """Raised when an undeclared field is read or written."""

    def __init__(self, field: str, owner: typing.Optional[str] = None) -> None:
        if owner:
            message = f"'{owner}' has no field '{field}'"
        else:
            message = f"unknown field '{field}'"
        super().__init__(message)
        self.field = field
        self.owner = owner


class SerializationError(StructError):
    """Exception raised for serialization errors."""

    pass


class DeserializationError(StructError):
    """Exception raised for deserialization errors."""

    pass


__all__ = [
    "StructError",
    "SchemaError",
    "UnsupportedTypeError",
    "FrozenSchemaError",
    "FieldError",
    "TypeMismatchError",
    "UnknownFieldError",
    "SerializationError",
    "DeserializationError",
]
