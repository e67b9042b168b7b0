"""Directory of YAML definition documents, one file per definition."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

import jsonschema
import yaml

from cohortlib.constants.persistence import (
    DEFINITION_DOCUMENT_SCHEMA,
    DEFINITION_FILE_SUFFIX,
    DEFINITION_TEMP_PREFIX,
    DEFINITION_TEMP_SUFFIX,
)
from cohortlib.exceptions import DefinitionError, PersistenceError
from cohortlib.handlers.base import CohortDefinitionPersister
from cohortlib.model.definition import CohortDefinition
from cohortlib.model.serialize import definition_from_document, definition_to_document

logger = logging.getLogger(__name__)


class YamlDefinitionPersister(CohortDefinitionPersister):
    """Stores each definition as ``<uuid>.yaml`` under a directory."""

    def __init__(self, directory: Path) -> None:
        self._directory = directory

    @property
    def directory(self) -> Path:
        return self._directory

    def save(self, definition: CohortDefinition) -> CohortDefinition:
        try:
            document = definition_to_document(definition)
        except TypeError as exc:
            raise PersistenceError(f"Definition {definition} cannot be serialized: {exc}") from exc
        path = self._path_for(definition.uuid)
        text = yaml.safe_dump(document, sort_keys=True, allow_unicode=True)
        try:
            self._replace_document(path, text)
        except OSError as exc:
            raise PersistenceError(f"Failed to write definition file {path}: {exc}") from exc
        logger.info("Saved definition %s to %s", definition, path)
        return definition

    def get(self, uuid: str) -> CohortDefinition | None:
        path = self._path_for(uuid)
        if not path.is_file():
            return None
        return self._load(path)

    def get_all(self) -> list[CohortDefinition]:
        if not self._directory.is_dir():
            return []
        return [self._load(path) for path in sorted(self._directory.glob(f"*{DEFINITION_FILE_SUFFIX}"))]

    def purge(self, definition: CohortDefinition) -> None:
        path = self._path_for(definition.uuid)
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            raise PersistenceError(f"Failed to delete definition file {path}: {exc}") from exc

    def _path_for(self, uuid: str) -> Path:
        if not uuid or "/" in uuid or "\\" in uuid or uuid.startswith("."):
            raise PersistenceError(f"Invalid definition uuid for file storage: {uuid!r}")
        return self._directory / f"{uuid}{DEFINITION_FILE_SUFFIX}"

    def _replace_document(self, path: Path, text: str) -> None:
        """Swap in the new document so readers never see a partial file."""
        self._directory.mkdir(parents=True, exist_ok=True)
        fd, temp_name = tempfile.mkstemp(
            dir=self._directory,
            prefix=DEFINITION_TEMP_PREFIX,
            suffix=DEFINITION_TEMP_SUFFIX,
        )
        temp_path = Path(temp_name)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(text)
            os.replace(temp_path, path)
        except OSError:
            temp_path.unlink(missing_ok=True)
            raise

    @staticmethod
    def _load(path: Path) -> CohortDefinition:
        try:
            document = yaml.safe_load(path.read_text(encoding="utf-8"))
        except OSError as exc:
            raise PersistenceError(f"Failed to read definition file {path}: {exc}") from exc
        except yaml.YAMLError as exc:
            raise PersistenceError(f"Invalid YAML in {path}: {exc}") from exc

        try:
            jsonschema.validate(instance=document, schema=DEFINITION_DOCUMENT_SCHEMA)
        except jsonschema.ValidationError as exc:
            raise PersistenceError(f"Definition file {path} does not match the document schema: {exc.message}") from exc

        assert isinstance(document, dict)
        try:
            return definition_from_document(document)
        except DefinitionError as exc:
            raise PersistenceError(f"Cannot rebuild definition from {path}: {exc}") from exc
