"""Variable table mutated by assignments."""

from __future__ import annotations

from typing import Iterator


class VariableStore:
    """Mapping from variable name to value with unique keys.

    Redefining a name updates its value in place. Looking up an undefined name
    yields ``0.0``; the warning pass reports such names as invalid tokens.
    """

    __slots__ = ("_values",)

    def __init__(self) -> None:
        self._values: dict[str, float] = {}

    def define(self, key: str, value: float) -> None:
        self._values[key] = float(value)

    def lookup(self, key: str) -> float:
        return self._values.get(key, 0.0)

    def clear(self) -> None:
        self._values.clear()

    def as_dict(self) -> dict[str, float]:
        return dict(self._values)

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._values))


__all__ = ["VariableStore"]
