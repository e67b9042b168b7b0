"""Definition document format for the YAML persister."""

from __future__ import annotations

from typing import Any

DEFINITION_FILE_SUFFIX: str = ".yaml"
DEFINITION_TEMP_PREFIX: str = ".cohortlib-"
DEFINITION_TEMP_SUFFIX: str = ".tmp"
DOCUMENT_VERSION: int = 1

# Tagged value wrappers for non-JSON types.
DATE_TAG: str = "$date"
SET_TAG: str = "$set"
MAPPED_TAG: str = "$mapped"

DEFINITION_DOCUMENT_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "required": ["version", "kind", "uuid", "name", "parameters", "config"],
    "additionalProperties": False,
    "properties": {
        "version": {"const": DOCUMENT_VERSION},
        "kind": {"type": "string", "pattern": "^[a-z][a-z0-9_]*$"},
        "uuid": {"type": "string", "minLength": 1},
        "name": {"type": "string"},
        "description": {"type": "string"},
        "parameters": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["name", "type"],
                "additionalProperties": False,
                "properties": {
                    "name": {"type": "string", "minLength": 1},
                    "type": {"type": "string"},
                    "default": {},
                    "label": {"type": "string"},
                    "required": {"type": "boolean"},
                },
            },
        },
        "config": {"type": "object"},
    },
}
