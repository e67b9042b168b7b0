"""Declared parameters of a cohort definition."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, get_origin

from cohortlib.exceptions import DefinitionError


@dataclass(frozen=True)
class Parameter:
    """A named, typed input of a definition with an optional default value."""

    name: str
    type: type
    default: Any = None
    label: str = ""
    required: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.type, type) or get_origin(self.type) is not None:
            raise DefinitionError(f"Parameter {self.name!r} must declare a class as its type, got {self.type!r}")

    def accepts(self, value: Any) -> bool:
        """Return True when *value* can be bound to this parameter."""
        if value is None:
            return not self.required
        if self.type is float and isinstance(value, int) and not isinstance(value, bool):
            return True
        if self.type is int and isinstance(value, bool):
            return False
        return isinstance(value, self.type)
