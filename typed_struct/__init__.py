"""
Typed record structs with field-level type enforcement and wire (de)serialization.

```python
from typed_struct import TypedStruct, Field
from typed_struct.wire import json

class Point(TypedStruct):
    x = Field(int)
    y = Field(int, tag="y_key,omitempty")

json.marshal(Point(x=1))  # '{"x":1}'
json.unmarshal('{"x":1,"y_key":2}', Point)  # Point(x=1, y=2)
```
"""

from .dependencies import deps_required

deps_required(
    {
        "typing_extensions": "typing-extensions",
        "orjson": "orjson",
        "yaml": "pyyaml",
    }
)

from .descriptors import (  # noqa: E402
    Kind,
    Primitive,
    Sequence,
    StructRef,
    Symbol,
    to_descriptor,
)
from .exceptions import (  # noqa: E402
    DeserializationError,
    FieldError,
    FrozenSchemaError,
    SchemaError,
    SerializationError,
    StructError,
    TypeMismatchError,
    UnknownFieldError,
    UnsupportedTypeError,
)
from .fields import (  # noqa: E402
    AnyField,
    BooleanField,
    Field,
    FloatField,
    IntegerField,
    ListField,
    NestedField,
    StringField,
    SymbolField,
)
from .registry import Schema, SchemaRegistry, default_registry  # noqa: E402
from .serializers import deserialize, serialize  # noqa: E402
from .struct import TypedStruct, TypedStructMeta, define_struct  # noqa: E402
from .tags import WireTag, parse_tag  # noqa: E402
from .validators import is_empty, type_correct, zero_value  # noqa: E402

__version__ = "0.1.0"

__all__ = [
    "Kind",
    "Primitive",
    "Sequence",
    "StructRef",
    "Symbol",
    "to_descriptor",
    "StructError",
    "SchemaError",
    "UnsupportedTypeError",
    "FrozenSchemaError",
    "FieldError",
    "TypeMismatchError",
    "UnknownFieldError",
    "SerializationError",
    "DeserializationError",
    "Field",
    "AnyField",
    "BooleanField",
    "FloatField",
    "IntegerField",
    "ListField",
    "NestedField",
    "StringField",
    "SymbolField",
    "Schema",
    "SchemaRegistry",
    "default_registry",
    "serialize",
    "deserialize",
    "TypedStruct",
    "TypedStructMeta",
    "define_struct",
    "WireTag",
    "parse_tag",
    "zero_value",
    "type_correct",
    "is_empty",
]
