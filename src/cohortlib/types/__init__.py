"""Shared type aliases for cohortlib."""

from .common import Capability, CompositionOperator, JsonObject, JsonScalar, JsonValue, SubjectId

__all__ = [
    "Capability",
    "CompositionOperator",
    "JsonObject",
    "JsonScalar",
    "JsonValue",
    "SubjectId",
]
