"""Tests for definition persisters and document encoding."""

from __future__ import annotations

from datetime import date
from pathlib import Path

import pytest

from cohortlib.definitions import CharacteristicCohortDefinition, CompositionCohortDefinition, StaticCohortDefinition
from cohortlib.exceptions import DefinitionError, PersistenceError
from cohortlib.model import Mapped, Parameter
from cohortlib.model.serialize import definition_from_document, definition_to_document, encode_value
from cohortlib.persistence import InMemoryDefinitionPersister, YamlDefinitionPersister


def _composition() -> CompositionCohortDefinition:
    adults = CharacteristicCohortDefinition(
        name="Adults",
        parameters=(Parameter("min_age", int, default=18, label="Minimum age"),),
        effective_date=date(2024, 1, 1),
    )
    listed = StaticCohortDefinition(name="Listed", member_ids=frozenset({3, 1}))
    return CompositionCohortDefinition(
        name="Listed adults",
        operator="and",
        children=(Mapped.map(adults, min_age="${age}"), Mapped.map(listed)),
    )


def test_encode_value_tags_dates_and_sets() -> None:
    assert encode_value(date(2024, 2, 29)) == {"$date": "2024-02-29"}
    assert encode_value(frozenset({2, 1})) == {"$set": [1, 2]}
    assert encode_value((1, "a")) == [1, "a"]


def test_encode_value_rejects_unknown_types() -> None:
    with pytest.raises(TypeError):
        encode_value(object())


def test_unknown_kind_raises() -> None:
    document = definition_to_document(StaticCohortDefinition())
    document["kind"] = "no_such_kind"
    with pytest.raises(DefinitionError, match="Unknown definition kind"):
        definition_from_document(document)


def test_unknown_config_field_raises() -> None:
    document = definition_to_document(StaticCohortDefinition())
    document["config"] = {"bogus": 1}
    with pytest.raises(DefinitionError):
        definition_from_document(document)


def test_in_memory_persister_stores_copies() -> None:
    persister = InMemoryDefinitionPersister()
    definition = StaticCohortDefinition(name="Listed", member_ids=frozenset({1}))
    persister.save(definition)

    definition.name = "Renamed"
    stored = persister.get(definition.uuid)

    assert stored is not None
    assert stored.name == "Listed"
    assert persister.get("missing") is None


def test_yaml_persister_rebuilds_nested_definitions(tmp_path: Path) -> None:
    persister = YamlDefinitionPersister(tmp_path)
    composition = _composition()

    persister.save(composition)
    loaded = persister.get(composition.uuid)

    assert loaded == composition
    assert isinstance(loaded, CompositionCohortDefinition)
    assert loaded.children[0].parameter_mappings == {"min_age": "${age}"}
    assert loaded.children[0].definition.parameters[0].default == 18


def test_yaml_persister_get_all_and_purge(tmp_path: Path) -> None:
    persister = YamlDefinitionPersister(tmp_path / "defs")
    assert persister.get_all() == []

    first = StaticCohortDefinition(name="First")
    second = StaticCohortDefinition(name="Second")
    persister.save(first)
    persister.save(second)
    assert {d.uuid for d in persister.get_all()} == {first.uuid, second.uuid}

    persister.purge(first)
    assert [d.uuid for d in persister.get_all()] == [second.uuid]
    persister.purge(first)


def test_yaml_persister_rejects_invalid_yaml(tmp_path: Path) -> None:
    (tmp_path / "broken.yaml").write_text("kind: [", encoding="utf-8")
    with pytest.raises(PersistenceError, match="Invalid YAML"):
        YamlDefinitionPersister(tmp_path).get("broken")


def test_yaml_persister_rejects_schema_violations(tmp_path: Path) -> None:
    (tmp_path / "odd.yaml").write_text("version: 1\nkind: static\n", encoding="utf-8")
    with pytest.raises(PersistenceError, match="document schema"):
        YamlDefinitionPersister(tmp_path).get("odd")


def test_yaml_persister_rejects_path_like_uuid(tmp_path: Path) -> None:
    with pytest.raises(PersistenceError, match="Invalid definition uuid"):
        YamlDefinitionPersister(tmp_path).get("../escape")


def test_yaml_persister_overwrites_in_place_without_temp_files(tmp_path: Path) -> None:
    persister = YamlDefinitionPersister(tmp_path / "defs")
    definition = StaticCohortDefinition(name="Before", member_ids=frozenset({1}))
    persister.save(definition)

    definition.name = "After"
    persister.save(definition)

    assert sorted(path.name for path in (tmp_path / "defs").iterdir()) == [f"{definition.uuid}.yaml"]
    stored = persister.get(definition.uuid)
    assert stored is not None
    assert stored.name == "After"


def test_yaml_persister_write_failure_leaves_previous_document(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    persister = YamlDefinitionPersister(tmp_path)
    definition = StaticCohortDefinition(name="Kept")
    persister.save(definition)

    def fail_replace(src: object, dst: object) -> None:
        raise OSError("disk full")

    monkeypatch.setattr("cohortlib.persistence.yaml_store.os.replace", fail_replace)
    definition.name = "Lost"
    with pytest.raises(PersistenceError, match="Failed to write definition file"):
        persister.save(definition)

    assert [path.name for path in tmp_path.iterdir()] == [f"{definition.uuid}.yaml"]
    stored = persister.get(definition.uuid)
    assert stored is not None
    assert stored.name == "Kept"
