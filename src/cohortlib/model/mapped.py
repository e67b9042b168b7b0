"""A definition paired with the parameter values it should be evaluated with."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from cohortlib.model.definition import CohortDefinition


@dataclass
class Mapped:
    """Child definition plus its parameter mappings.

    Mapping values are literals or ``${name}`` expressions that are resolved
    against the parent evaluation context.
    """

    definition: CohortDefinition
    parameter_mappings: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def map(cls, definition: CohortDefinition, **mappings: Any) -> Mapped:
        return cls(definition=definition, parameter_mappings=dict(mappings))
