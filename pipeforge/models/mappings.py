"""Read-only mapping field types for frozen models.

``frozen=True`` only blocks attribute assignment; a plain ``dict`` field can
still be changed in place.  These annotated types store a ``MappingProxyType``
and serialize back to plain dicts.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Annotated, Any

from pydantic import AfterValidator, PlainSerializer


def _freeze(value: Mapping[str, Any]) -> Mapping[str, Any]:
    return MappingProxyType(dict(value))


def _thaw(value: Mapping[str, Any]) -> dict[str, Any]:
    return {
        key: _thaw(item) if isinstance(item, Mapping) else item
        for key, item in value.items()
    }


StringMap = Annotated[
    Mapping[str, str],
    AfterValidator(_freeze),
    PlainSerializer(_thaw),
]

# operator -> {condition key -> values}
ConditionMap = Annotated[
    Mapping[str, Annotated[Mapping[str, tuple[str, ...]], AfterValidator(_freeze)]],
    AfterValidator(_freeze),
    PlainSerializer(_thaw),
]
