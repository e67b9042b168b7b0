"""Cohort definition evaluation engine."""

from __future__ import annotations

import logging
from importlib.metadata import PackageNotFoundError, version

from cohortlib.evaluation import EvaluationContext
from cohortlib.model import Cohort, CohortDefinition, Mapped, Parameter
from cohortlib.service import CohortDefinitionService

__all__ = [
    "Cohort",
    "CohortDefinition",
    "CohortDefinitionService",
    "EvaluationContext",
    "Mapped",
    "Parameter",
    "__version__",
]

try:
    __version__ = version("cohortlib")
except PackageNotFoundError:
    __version__ = "0.0.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())
