"""Typed reader for one YAML config section.

Loaders wrap their section in a `ConfigSection` and read values through it,
so every error names the dotted key (``search.limit``,
``vocabulary.date_presets.gestern``). Wrong types raise `TypeError`; missing
required keys raise `ValueError`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator, Mapping

_REQUIRED: Any = object()


@dataclass(frozen=True, slots=True)
class ConfigSection:
    """A config mapping plus the dotted path it was read from."""

    path: str
    data: Mapping[str, Any]

    @classmethod
    def of(cls, raw: Mapping[str, Any], name: str, *, required: bool) -> ConfigSection:
        """Open a top-level section; optional missing sections read as empty."""
        return cls("", raw)._child(name, required=required)

    def key(self, field: str) -> str:
        return f"{self.path}.{field}" if self.path else field

    def __iter__(self) -> Iterator[str]:
        return iter(self.data)

    def text(self, field: str, default: Any = _REQUIRED) -> str:
        value = self._value(field, default)
        if not isinstance(value, str):
            raise TypeError(f"{self.key(field)} must be a string")
        return value

    def flag(self, field: str, default: Any = _REQUIRED) -> bool:
        value = self._value(field, default)
        if not isinstance(value, bool):
            raise TypeError(f"{self.key(field)} must be a boolean")
        return value

    def integer(self, field: str, default: Any = _REQUIRED) -> int:
        value = self._value(field, default)
        # bool is an int subclass; `limit: true` is a typo, not 1.
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"{self.key(field)} must be an integer")
        return value

    def words(self, field: str, default: Any = _REQUIRED) -> tuple[str, ...]:
        """Read a string list; a single string counts as a one-item list."""
        value = self._value(field, default)
        if isinstance(value, str):
            return (value,)
        if not isinstance(value, (list, tuple)):
            raise TypeError(f"{self.key(field)} must be a list")
        for idx, item in enumerate(value):
            if not isinstance(item, str):
                raise TypeError(f"{self.key(field)}[{idx}] must be a string")
        return tuple(value)

    def table(self, field: str) -> ConfigSection:
        """Read a nested mapping (``None`` or missing is empty) as a section."""
        return self._child(field, required=False)

    def _child(self, field: str, *, required: bool) -> ConfigSection:
        value = self.data.get(field)
        path = self.key(field)
        if value is None:
            if required:
                raise ValueError(f"Missing required config: {path}")
            return ConfigSection(path, {})
        if not isinstance(value, Mapping):
            raise TypeError(f"{path} must be an object")
        bad = [key for key in value if not isinstance(key, str)]
        if bad:
            raise TypeError(f"{path} keys must be strings, got {bad!r}")
        return ConfigSection(path, value)

    def _value(self, field: str, default: Any) -> Any:
        if field in self.data:
            return self.data[field]
        if default is _REQUIRED:
            raise ValueError(f"Missing required config: {self.key(field)}")
        return default
