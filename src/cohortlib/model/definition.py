"""Base class for all cohort definition variants."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import TYPE_CHECKING, Any, ClassVar
from uuid import uuid4

from cohortlib.constants.definitions import KIND_PATTERN, METADATA_FIELDS
from cohortlib.exceptions import DefinitionError
from cohortlib.model.parameter import Parameter

if TYPE_CHECKING:
    from cohortlib.evaluation.caching import CachingStrategy

_KINDS: dict[str, type[CohortDefinition]] = {}


def _new_uuid() -> str:
    return str(uuid4())


@dataclass
class CohortDefinition:
    """Declarative, parameterized description of a set of subjects.

    Concrete variants are dataclasses that declare a unique ``kind`` tag and
    their configuration fields. A declared parameter binds onto the
    configuration field of the same name.
    """

    kind: ClassVar[str]
    caching: ClassVar[CachingStrategy | None] = None

    name: str = ""
    description: str = ""
    uuid: str = field(default_factory=_new_uuid)
    parameters: tuple[Parameter, ...] = ()

    def __init_subclass__(cls, **kwargs: object) -> None:
        """Register concrete variants by their ``kind`` tag."""
        super().__init_subclass__(**kwargs)
        kind = cls.__dict__.get("kind")
        if not isinstance(kind, str) or not KIND_PATTERN.match(kind):
            raise TypeError(f"{cls.__name__} must define its own lower_snake_case class attribute `kind` (got {kind!r})")
        existing = _KINDS.get(kind)
        if existing is not None and existing.__qualname__ != cls.__qualname__:
            raise TypeError(f"Definition kind {kind!r} already registered by {existing.__qualname__}")
        _KINDS[kind] = cls

    def __post_init__(self) -> None:
        self.parameters = tuple(self.parameters)
        seen: set[str] = set()
        for parameter in self.parameters:
            if parameter.name in seen:
                raise DefinitionError(f"Duplicate parameter {parameter.name!r} on definition {self.name!r}")
            seen.add(parameter.name)

    def configuration_fields(self) -> tuple[str, ...]:
        """Names of the variant-specific configuration fields."""
        return tuple(f.name for f in fields(self) if f.name not in METADATA_FIELDS)

    def configuration(self) -> dict[str, Any]:
        """Return the current configuration field values."""
        return {name: getattr(self, name) for name in self.configuration_fields()}

    def __str__(self) -> str:
        return self.name or f"{type(self).__name__}({self.uuid})"


def definition_type_for(kind: str) -> type[CohortDefinition]:
    """Return the definition class registered under *kind*."""
    try:
        return _KINDS[kind]
    except KeyError:
        raise DefinitionError(f"Unknown definition kind {kind!r}") from None

