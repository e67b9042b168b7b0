"""Data model: cohorts, parameters and definitions."""

from .cohort import Cohort
from .definition import CohortDefinition, definition_type_for
from .mapped import Mapped
from .parameter import Parameter

__all__ = [
    "Cohort",
    "CohortDefinition",
    "Mapped",
    "Parameter",
    "definition_type_for",
]
