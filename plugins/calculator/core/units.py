"""Byte-unit multipliers backed by a shared Pint registry."""

from __future__ import annotations

from functools import lru_cache
from types import MappingProxyType
from typing import Mapping

from pint import UnitRegistry

# Suffixes are binary multiples: 1 mb is 2**20 bytes.
_SUFFIX_UNITS: dict[str, str] = {
    "mb": "mebibyte",
    "gb": "gibibyte",
    "tb": "tebibyte",
    "pb": "pebibyte",
}


@lru_cache(maxsize=1)
def get_registry() -> UnitRegistry:
    """Return a singleton :class:`~pint.UnitRegistry` instance."""

    return UnitRegistry()


@lru_cache(maxsize=1)
def byte_multipliers() -> Mapping[str, float]:
    registry = get_registry()
    table = {
        suffix: float(registry.Quantity(1, unit).to("byte").magnitude)
        for suffix, unit in _SUFFIX_UNITS.items()
    }
    return MappingProxyType(table)


def data_unit_suffixes() -> frozenset[str]:
    return frozenset(_SUFFIX_UNITS)


def to_bytes(value: float, suffix: str) -> float:
    return value * byte_multipliers()[suffix]


__all__ = ["get_registry", "byte_multipliers", "data_unit_suffixes", "to_bytes"]
