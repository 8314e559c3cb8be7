"""Unit tests for per-entity field configuration and the entity catalog."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest
from bson import ObjectId

from admin_search.application.search import (
    INDEX_DEFAULTS,
    STORE_DEFAULTS,
    ConfigurationRegistry,
    FieldConfiguration,
    index_registry,
    mapping_for,
    store_registry,
)
from admin_search.application.search.entities import (
    DEFAULT_BACKENDS,
    DEFAULT_INDEX_MAPPING,
    ENTITIES,
    INDEX_FIELDS,
    INDEX_MAPPINGS,
    STORE_FIELDS,
)


class TestFieldConfiguration:
    def test_merged_over_fills_undeclared(self) -> None:
        config = FieldConfiguration(searchable_fields=("name",)).merged_over(STORE_DEFAULTS)
        assert config.searchable_fields == ("name",)
        assert config.sortable_fields == ("created_at", "updated_at", "_id")
        assert config.default_sort == ("created_at:desc",)

    def test_empty_tuple_is_a_declaration(self) -> None:
        config = FieldConfiguration(sortable_fields=()).merged_over(STORE_DEFAULTS)
        assert config.sortable_fields == ()


class TestConfigurationRegistry:
    def test_override_wins(self) -> None:
        registry = ConfigurationRegistry({"banks": FieldConfiguration(default_sort=("name:asc",))})
        assert registry.get("banks", "default_sort") == ("name:asc",)

    def test_unknown_entity_gets_defaults(self) -> None:
        registry = ConfigurationRegistry({})
        assert registry.resolve("widgets") == STORE_DEFAULTS
        assert "widgets" not in registry

    def test_unknown_key_is_empty(self) -> None:
        assert ConfigurationRegistry({}).get("banks", "not_a_key") == ()

    def test_index_defaults(self) -> None:
        registry = ConfigurationRegistry({}, defaults=INDEX_DEFAULTS)
        assert registry.get("anything", "searchable_fields") == ("title", "name", "description")
        assert registry.get("anything", "keyword_fields") == ("title", "name", "status")
        assert "_score" in registry.get("anything", "sortable_fields")

    def test_partial_defaults_rejected(self) -> None:
        with pytest.raises(ValueError):
            ConfigurationRegistry({}, defaults=FieldConfiguration())

    def test_entities_sorted(self) -> None:
        registry = ConfigurationRegistry({"b": FieldConfiguration(), "a": FieldConfiguration()})
        assert registry.entities() == ["a", "b"]


class TestCatalog:
    def test_every_entity_has_store_fields(self) -> None:
        assert set(STORE_FIELDS) == set(ENTITIES)

    @pytest.mark.parametrize("entity", sorted(STORE_FIELDS))
    def test_store_default_sort_is_sortable(self, entity: str) -> None:
        config = store_registry().resolve(entity)
        for token in config.default_sort:
            assert token.split(":")[0] in config.sortable_fields

    @pytest.mark.parametrize("entity", sorted(INDEX_FIELDS))
    def test_index_keyword_fields_have_keyword_sibling(self, entity: str) -> None:
        config = index_registry().resolve(entity)
        properties = mapping_for(entity).properties
        for field in config.keyword_fields:
            assert "keyword" in properties[field].get("fields", {}), field

    @pytest.mark.parametrize("entity", sorted(INDEX_MAPPINGS))
    def test_mappings_carry_timestamps(self, entity: str) -> None:
        assert {"created_at", "updated_at"} <= set(INDEX_MAPPINGS[entity].properties)

    def test_default_backends(self) -> None:
        assert DEFAULT_BACKENDS["events"] == "index"
        assert DEFAULT_BACKENDS["banks"] == "store"

    def test_unmapped_entity_uses_default_mapping(self) -> None:
        assert mapping_for("banks") is DEFAULT_INDEX_MAPPING


class TestIndexMapping:
    def test_mappings_are_strict(self) -> None:
        assert mapping_for("roles").mappings["dynamic"] is False

    def test_normalizer_declared(self) -> None:
        normalizers = mapping_for("roles").settings["analysis"]["normalizer"]
        assert normalizers["lowercase_normalizer"]["filter"] == ["lowercase"]

    def test_document_for_copies_mapped_fields_only(self) -> None:
        oid, cat = ObjectId(), ObjectId()
        created = datetime(2024, 5, 1, tzinfo=timezone.utc)
        doc = mapping_for("events").document_for({
            "_id": oid,
            "title": "Jakarta Fair",
            "category_ids": [cat],
            "location": {"city": "Jakarta", "venue_id": oid},
            "internal_notes": "not indexed",
            "created_at": created,
        })
        assert doc == {
            "title": "Jakarta Fair",
            "category_ids": [str(cat)],
            "location": {"city": "Jakarta", "venue_id": str(oid)},
            "created_at": created,
            "id": str(oid),
        }

    def test_id_keyword_is_mapped(self) -> None:
        assert mapping_for("roles").mappings["properties"]["id"] == {"type": "keyword"}
