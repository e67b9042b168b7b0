"""Process-local definition storage."""

from __future__ import annotations

import copy
import logging
import threading

from cohortlib.handlers.base import CohortDefinitionPersister
from cohortlib.model.definition import CohortDefinition

logger = logging.getLogger(__name__)


class InMemoryDefinitionPersister(CohortDefinitionPersister):
    """Keeps deep copies of saved definitions keyed by uuid."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._definitions: dict[str, CohortDefinition] = {}

    def save(self, definition: CohortDefinition) -> CohortDefinition:
        with self._lock:
            self._definitions[definition.uuid] = copy.deepcopy(definition)
        logger.info("Saved definition %s (%s)", definition, definition.uuid)
        return definition

    def get(self, uuid: str) -> CohortDefinition | None:
        with self._lock:
            stored = self._definitions.get(uuid)
        return copy.deepcopy(stored) if stored is not None else None

    def get_all(self) -> list[CohortDefinition]:
        with self._lock:
            stored = list(self._definitions.values())
        return [copy.deepcopy(definition) for definition in stored]

    def purge(self, definition: CohortDefinition) -> None:
        with self._lock:
            self._definitions.pop(definition.uuid, None)
