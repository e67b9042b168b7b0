"""Evaluator and persister interfaces and the handler registry."""

from .base import CohortDefinitionEvaluator, CohortDefinitionPersister
from .registry import HandlerRegistration, HandlerRegistry

__all__ = [
    "CohortDefinitionEvaluator",
    "CohortDefinitionPersister",
    "HandlerRegistration",
    "HandlerRegistry",
]
