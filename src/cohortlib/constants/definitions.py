"""Definition metadata, parameter and mapping constants."""

from __future__ import annotations

import re
from datetime import date

UNIVERSE_DEFINITION_NAME: str = "All Subjects"
UNIVERSE_DEFINITION_DESCRIPTION: str = "Every subject known to the subject store"

# Base fields that describe a definition rather than configure it.
METADATA_FIELDS: frozenset[str] = frozenset({"name", "description", "uuid", "parameters"})

KIND_PATTERN: re.Pattern[str] = re.compile(r"^[a-z][a-z0-9_]*$")
MAPPING_EXPRESSION_PATTERN: re.Pattern[str] = re.compile(r"^\$\{\s*([A-Za-z_][A-Za-z0-9_]*)\s*\}$")

PARAMETER_TYPES: dict[str, type] = {
    "str": str,
    "int": int,
    "float": float,
    "bool": bool,
    "date": date,
    "list": list,
    "frozenset": frozenset,
}
PARAMETER_TYPE_NAMES: dict[type, str] = {value: key for key, value in PARAMETER_TYPES.items()}

VALID_COMPOSITION_OPERATORS: frozenset[str] = frozenset({"and", "or", "minus"})
VALID_GENDERS: frozenset[str] = frozenset({"F", "M", "U"})
