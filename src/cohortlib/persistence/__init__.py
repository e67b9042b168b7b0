"""Definition persisters."""

from .memory import InMemoryDefinitionPersister
from .yaml_store import YamlDefinitionPersister

__all__ = ["InMemoryDefinitionPersister", "YamlDefinitionPersister"]
