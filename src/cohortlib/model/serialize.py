"""Tagged JSON/YAML-safe encoding of cohort definitions.

Dates, sets and nested mapped definitions are wrapped in single-key tag
objects so documents can be decoded without per-variant hooks.
"""

from __future__ import annotations

from datetime import date
from typing import Any

from cohortlib.constants.definitions import PARAMETER_TYPE_NAMES, PARAMETER_TYPES
from cohortlib.constants.persistence import DATE_TAG, DOCUMENT_VERSION, MAPPED_TAG, SET_TAG
from cohortlib.exceptions import DefinitionError
from cohortlib.model.definition import CohortDefinition, definition_type_for
from cohortlib.model.mapped import Mapped
from cohortlib.model.parameter import Parameter
from cohortlib.types.common import JsonObject, JsonValue


def encode_value(value: Any) -> JsonValue:
    """Encode a configuration value into a JSON-compatible structure."""
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, date):
        return {DATE_TAG: value.isoformat()}
    if isinstance(value, (set, frozenset)):
        return {SET_TAG: sorted((encode_value(item) for item in value), key=repr)}
    if isinstance(value, (list, tuple)):
        return [encode_value(item) for item in value]
    if isinstance(value, dict):
        return {str(key): encode_value(item) for key, item in value.items()}
    if isinstance(value, Mapped):
        return {
            MAPPED_TAG: {
                "definition": definition_to_document(value.definition),
                "mappings": encode_value(value.parameter_mappings),
            }
        }
    raise TypeError(f"Cannot encode value of type {type(value).__name__}")


def decode_value(value: JsonValue) -> Any:
    """Decode a structure produced by :func:`encode_value`."""
    if isinstance(value, list):
        return tuple(decode_value(item) for item in value)
    if not isinstance(value, dict):
        return value
    if len(value) == 1:
        tag, payload = next(iter(value.items()))
        if tag == DATE_TAG and isinstance(payload, str):
            return date.fromisoformat(payload)
        if tag == SET_TAG and isinstance(payload, list):
            return frozenset(decode_value(item) for item in payload)
        if tag == MAPPED_TAG and isinstance(payload, dict):
            definition = payload.get("definition")
            mappings = payload.get("mappings") or {}
            if not isinstance(definition, dict) or not isinstance(mappings, dict):
                raise DefinitionError("Malformed mapped definition payload")
            return Mapped(
                definition=definition_from_document(definition),
                parameter_mappings={key: decode_value(item) for key, item in mappings.items()},
            )
    return {key: decode_value(item) for key, item in value.items()}


def _encode_parameter(parameter: Parameter) -> JsonObject:
    type_name = PARAMETER_TYPE_NAMES.get(parameter.type)
    if type_name is None:
        raise DefinitionError(f"Parameter {parameter.name!r} has unsupported type {parameter.type!r}")
    payload: JsonObject = {"name": parameter.name, "type": type_name}
    if parameter.default is not None:
        payload["default"] = encode_value(parameter.default)
    if parameter.label:
        payload["label"] = parameter.label
    if parameter.required:
        payload["required"] = True
    return payload


def _decode_parameter(payload: JsonObject) -> Parameter:
    type_name = payload.get("type")
    parameter_type = PARAMETER_TYPES.get(type_name) if isinstance(type_name, str) else None
    if parameter_type is None:
        raise DefinitionError(f"Unsupported parameter type {type_name!r}")
    default = decode_value(payload.get("default"))
    if parameter_type is list and isinstance(default, tuple):
        default = list(default)
    return Parameter(
        name=str(payload["name"]),
        type=parameter_type,
        default=default,
        label=str(payload.get("label", "")),
        required=bool(payload.get("required", False)),
    )


def definition_to_document(definition: CohortDefinition) -> JsonObject:
    """Return a versioned, JSON-compatible document for *definition*."""
    return {
        "version": DOCUMENT_VERSION,
        "kind": definition.kind,
        "uuid": definition.uuid,
        "name": definition.name,
        "description": definition.description,
        "parameters": [_encode_parameter(p) for p in definition.parameters],
        "config": {key: encode_value(value) for key, value in definition.configuration().items()},
    }


def definition_from_document(document: JsonObject) -> CohortDefinition:
    """Rebuild a definition from a document produced by :func:`definition_to_document`."""
    kind = document.get("kind")
    if not isinstance(kind, str):
        raise DefinitionError("Definition document is missing 'kind'")
    definition_cls = definition_type_for(kind)

    raw_config = document.get("config") or {}
    if not isinstance(raw_config, dict):
        raise DefinitionError(f"Definition config for kind {kind!r} must be a mapping")
    raw_parameters = document.get("parameters") or []
    if not isinstance(raw_parameters, list):
        raise DefinitionError(f"Definition parameters for kind {kind!r} must be a list")

    config = {key: decode_value(value) for key, value in raw_config.items()}
    try:
        return definition_cls(
            name=str(document.get("name", "")),
            description=str(document.get("description", "")),
            uuid=str(document["uuid"]),
            parameters=tuple(_decode_parameter(p) for p in raw_parameters if isinstance(p, dict)),
            **config,
        )
    except (KeyError, TypeError) as exc:
        raise DefinitionError(f"Cannot build {kind!r} definition: {exc}") from exc
