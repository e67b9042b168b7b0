"""Handler capability names."""

from __future__ import annotations

from typing import Final

EVALUATOR: Final = "evaluator"
PERSISTER: Final = "persister"

VALID_CAPABILITIES: frozenset[str] = frozenset({EVALUATOR, PERSISTER})
