"""Handler registry: most-specific-type lookup of evaluators and persisters."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, TypeAlias

from cohortlib.constants.capabilities import EVALUATOR, PERSISTER, VALID_CAPABILITIES
from cohortlib.exceptions import ConfigError, HandlerConflictError, NoHandlerError
from cohortlib.handlers.base import CohortDefinitionEvaluator, CohortDefinitionPersister
from cohortlib.model.definition import CohortDefinition
from cohortlib.types.common import Capability

logger = logging.getLogger(__name__)

_CAPABILITY_INTERFACES: dict[str, type] = {
    EVALUATOR: CohortDefinitionEvaluator,
    PERSISTER: CohortDefinitionPersister,
}


@dataclass(frozen=True)
class HandlerRegistration:
    """One handler registered for a definition type and its subtypes."""

    capability: Capability
    definition_type: type[CohortDefinition]
    handler: Any
    order: int = 0


_RegistrationKey: TypeAlias = tuple[str, type[CohortDefinition]]


class HandlerRegistry:
    """Maps definition types to the handlers able to process them.

    Registration replaces an immutable snapshot under a lock, so lookups
    during evaluation read without locking.
    """

    def __init__(self) -> None:
        self._write_lock = threading.Lock()
        self._registrations: MappingProxyType[_RegistrationKey, tuple[HandlerRegistration, ...]] = MappingProxyType(
            {}
        )

    def register(
        self,
        capability: Capability,
        definition_type: type[CohortDefinition],
        handler: Any,
        *,
        order: int = 0,
    ) -> None:
        """Register *handler* for *definition_type* and its subclasses.

        Lower ``order`` wins between handlers registered on the same type.
        """
        if capability not in VALID_CAPABILITIES:
            raise ConfigError(f"capability must be one of {sorted(VALID_CAPABILITIES)}, got {capability!r}")
        if not (isinstance(definition_type, type) and issubclass(definition_type, CohortDefinition)):
            raise ConfigError(f"definition_type must be a CohortDefinition subclass, got {definition_type!r}")
        interface = _CAPABILITY_INTERFACES[capability]
        if not isinstance(handler, interface):
            raise ConfigError(f"{type(handler).__name__} does not implement {interface.__name__}")

        registration = HandlerRegistration(capability, definition_type, handler, order)
        key = (capability, definition_type)
        with self._write_lock:
            updated = dict(self._registrations)
            updated[key] = (*updated.get(key, ()), registration)
            self._registrations = MappingProxyType(updated)
        logger.debug(
            "Registered %s %s for %s (order %d)",
            capability,
            type(handler).__name__,
            definition_type.__name__,
            order,
        )

    def resolve(
        self,
        capability: Capability,
        definition_type: type[CohortDefinition],
        definition_name: str = "",
    ) -> Any:
        """Return the handler registered for the most specific matching type.

        A registered type is most specific when no other matching registered
        type derives from it. Raises NoHandlerError when no registration
        matches and HandlerConflictError when two registrations tie, either
        as unrelated bases or at the same order on one type.
        """
        registrations = self._registrations
        matching = [klass for klass in definition_type.__mro__ if registrations.get((capability, klass))]
        if not matching:
            raise NoHandlerError(capability, definition_type, definition_name)

        closest = [
            klass for klass in matching if not any(other is not klass and issubclass(other, klass) for other in matching)
        ]
        if len(closest) > 1:
            names = ", ".join(klass.__name__ for klass in closest)
            raise HandlerConflictError(
                f"Ambiguous {capability} for {definition_type.__name__}: equally specific registrations on {names}"
            )

        klass = closest[0]
        candidates = registrations[(capability, klass)]
        best_order = min(candidate.order for candidate in candidates)
        best = [candidate for candidate in candidates if candidate.order == best_order]
        if len(best) > 1:
            names = ", ".join(sorted(type(candidate.handler).__name__ for candidate in best))
            raise HandlerConflictError(f"Ambiguous {capability} for {klass.__name__} at order {best_order}: {names}")
        return best[0].handler

    def handlers(self, capability: Capability) -> list[Any]:
        """Return distinct registered handlers for *capability*, in registration order."""
        seen: list[Any] = []
        for (registered_capability, _), registrations in self._registrations.items():
            if registered_capability != capability:
                continue
            for registration in registrations:
                if not any(existing is registration.handler for existing in seen):
                    seen.append(registration.handler)
        return seen

    def __len__(self) -> int:
        return sum(len(registrations) for registrations in self._registrations.values())
