"""Cross-module type aliases."""

from __future__ import annotations

from typing import Literal, TypeAlias

SubjectId: TypeAlias = int | str
Capability: TypeAlias = Literal["evaluator", "persister"]
CompositionOperator: TypeAlias = Literal["and", "or", "minus"]

JsonScalar: TypeAlias = str | int | float | bool | None
JsonValue: TypeAlias = JsonScalar | list["JsonValue"] | dict[str, "JsonValue"]
JsonObject: TypeAlias = dict[str, JsonValue]
