"""Wire tag directives."""

import typing

OMITEMPTY = "omitempty"
SKIP = "-"


class WireTag(typing.NamedTuple):
    """
    Per-field directives controlling how a field appears on the wire.

    :param rename: Wire key to use instead of the field name.
    :param omit_if_empty: If True, the field is left out of serialized output
        when it holds its empty value.
    :param skip: If True, the field is ignored in both directions.
    """

    rename: typing.Optional[str] = None
    omit_if_empty: bool = False
    skip: bool = False

    def key_for(self, name: str) -> str:
        """Return the wire key for a field called `name`."""
        return name if self.rename is None else self.rename


DEFAULT_TAG = WireTag()


def parse_tag(directive: typing.Union[str, WireTag, None]) -> WireTag:
    """
    Parse a comma-separated wire tag directive.

    The first token renames the wire key (an empty token keeps the field name).
    A second token of exactly `omitempty` enables omission of empty values.
    A directive of exactly `-` skips the field, while `-,` uses the literal
    key `-`.

    Example:
    ```python
    parse_tag("other_key,omitempty")  # WireTag(rename="other_key", omit_if_empty=True)
    parse_tag(",omitempty")  # WireTag(rename=None, omit_if_empty=True)
    parse_tag("-")  # WireTag(skip=True)
    parse_tag("-,")  # WireTag(rename="-")
    ```
    """
    if isinstance(directive, WireTag):
        return directive
    if not directive:
        return DEFAULT_TAG
    if not isinstance(directive, str):
        raise TypeError(f"wire tag must be a string, not {type(directive).__name__}")
    if directive == SKIP:
        return WireTag(skip=True)

    tokens = directive.split(",")
    rename = tokens[0] or None
    omit_if_empty = len(tokens) > 1 and tokens[1] == OMITEMPTY
    return WireTag(rename=rename, omit_if_empty=omit_if_empty)


__all__ = ["WireTag", "DEFAULT_TAG", "parse_tag"]
