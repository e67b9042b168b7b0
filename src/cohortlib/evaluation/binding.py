"""Parameter binding: clone a definition and write resolved values onto it."""

from __future__ import annotations

import copy
import logging
from typing import Any

from cohortlib.constants.definitions import METADATA_FIELDS
from cohortlib.evaluation.context import EvaluationContext
from cohortlib.exceptions import BindingError
from cohortlib.model.definition import CohortDefinition
from cohortlib.model.parameter import Parameter

logger = logging.getLogger(__name__)


def bind_parameters(definition: CohortDefinition, context: EvaluationContext | None) -> CohortDefinition:
    """Return a deep copy of *definition* with every declared parameter resolved.

    A value present in *context* (or any of its parents) wins over the
    parameter default. Neither argument is modified.
    """
    clone = copy.deepcopy(definition)
    configuration_fields = set(clone.configuration_fields())

    for parameter in clone.parameters:
        value = _resolve_value(parameter, context)
        if parameter.name in METADATA_FIELDS or parameter.name not in configuration_fields:
            raise BindingError(
                f"{type(clone).__name__} {clone} has no configuration field for parameter {parameter.name!r}"
            )
        if not parameter.accepts(value):
            expected = getattr(parameter.type, "__name__", repr(parameter.type))
            raise BindingError(
                f"Parameter {parameter.name!r} of {clone} expects {expected}, got {type(value).__name__}: {value!r}"
            )
        setattr(clone, parameter.name, _coerce(parameter, copy.deepcopy(value)))

    logger.debug("Bound parameters for %s: %r", clone, clone.configuration())
    return clone


def _resolve_value(parameter: Parameter, context: EvaluationContext | None) -> Any:
    if context is not None and context.contains_parameter(parameter.name):
        return context.get_parameter_value(parameter.name)
    return parameter.default


def _coerce(parameter: Parameter, value: Any) -> Any:
    if parameter.type is float and isinstance(value, int) and not isinstance(value, bool):
        return float(value)
    return value
