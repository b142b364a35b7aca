"""
Wire adapters.

Each adapter converts between its wire format and the generic tree, and
delegates everything else to the serialization engine:

- `typed_struct.wire.tree`: in-memory generic trees.
- `typed_struct.wire.json`: JSON text, via `orjson`.
- `typed_struct.wire.yaml`: YAML documents and streams, via PyYAML.
"""
