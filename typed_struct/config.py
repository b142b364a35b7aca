"""
Package settings.

Settings are read at call time by the wire adapters, so `configure` takes
effect immediately:

```python
import orjson
from typed_struct.config import configure, settings

configure({"JSON": {"option": orjson.OPT_INDENT_2}})
settings.JSON["option"]  # 1
```
"""

import copy
import typing

from ._utils import merge_dicts

__all__ = ["settings", "configure", "reset", "DEFAULT_SETTINGS", "ValueStoreProxy"]


DEFAULT_SETTINGS: typing.Dict[str, typing.Any] = {
    "JSON": {
        # Extra `orjson.OPT_*` flags, or-ed together
        "option": 0,
    },
    "YAML": {
        "indent": 2,
        "allow_unicode": True,
        "width": None,
        "explicit_start": False,
    },
}


class ValueStoreProxy:
    """
    Proxy for accessing the values in a value store or dictionary as attributes
    """

    def __init__(self, valuestore: typing.Dict[str, typing.Any]) -> None:
        self.valuestore = valuestore

    def __getattr__(self, name: str) -> typing.Any:
        try:
            return self.valuestore[name]
        except KeyError:
            try:
                return self.valuestore[name.upper()]
            except KeyError as exc:
                raise AttributeError(exc) from None


class _Settings(ValueStoreProxy):
    """Settings proxy"""

    __instance = None

    def __new__(cls, *args, **kwargs):
        if not cls.__instance:
            cls.__instance = super().__new__(cls)
        return cls.__instance

    def __init__(self) -> None:
        super().__init__(copy.deepcopy(DEFAULT_SETTINGS))

    def update(self, overrides: typing.Mapping[str, typing.Any]) -> None:
        self.valuestore = merge_dicts(self.valuestore, overrides)

    def restore(self) -> None:
        self.valuestore = copy.deepcopy(DEFAULT_SETTINGS)


settings = _Settings()
"""`typed_struct` settings"""


def configure(overrides: typing.Mapping[str, typing.Any]) -> None:
    """
    Deep-merge overrides into the active settings.

    :param overrides: Nested mapping of setting names to values,
        e.g. `{"YAML": {"indent": 4}}`.
    :raises KeyError: If a top-level setting name is unknown.
    """
    unknown = set(overrides) - set(DEFAULT_SETTINGS)
    if unknown:
        raise KeyError(f"Unknown setting(s): {', '.join(sorted(unknown))}")
    settings.update(overrides)


def reset() -> None:
    """Restore the default settings."""
    settings.restore()
