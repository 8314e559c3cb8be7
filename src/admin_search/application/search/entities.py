"""Application search – entity catalog.

Field tables for every searchable entity of the admin API, one per backend,
plus the index mappings used when an entity's searchable copy is built.

``STORE_FIELDS`` follows the store documents as persisted; ``INDEX_FIELDS``
follows the shape of the indexed copy, which is denormalised and may use
different field names (``title`` rather than ``name`` for events).
"""
from __future__ import annotations

import dataclasses
from datetime import date, datetime
from typing import Any, Mapping

from admin_search.application.search.fields import (
    INDEX_DEFAULTS,
    STORE_DEFAULTS,
    ConfigurationRegistry,
    FieldConfiguration,
)

__all__ = [
    "COLLECTIONS",
    "DEFAULT_BACKENDS",
    "DEFAULT_INDEX_MAPPING",
    "ENTITIES",
    "ID_FIELD",
    "INDEX",
    "INDEX_FIELDS",
    "INDEX_MAPPINGS",
    "IndexMapping",
    "STORE",
    "STORE_FIELDS",
    "index_registry",
    "mapping_for",
    "store_registry",
]

INDEX = "index"
STORE = "store"

LOWERCASE_NORMALIZER = "lowercase_normalizer"

# keyword copy of the store id; `_id` itself has no doc values to sort on
ID_FIELD = "id"


# ---------------------------------------------------------------------------
# Mapping property helpers
# ---------------------------------------------------------------------------


def _text(*, keyword: bool = False) -> dict[str, Any]:
    prop: dict[str, Any] = {"type": "text", "analyzer": "standard"}
    if keyword:
        prop["fields"] = {
            "keyword": {"type": "keyword", "ignore_above": 256, "normalizer": LOWERCASE_NORMALIZER},
        }
    return prop


def _keyword() -> dict[str, Any]:
    return {"type": "keyword", "normalizer": LOWERCASE_NORMALIZER}


def _date() -> dict[str, Any]:
    return {"type": "date"}


def _boolean() -> dict[str, Any]:
    return {"type": "boolean"}


def _integer() -> dict[str, Any]:
    return {"type": "integer"}


def _object(*, enabled: bool = True) -> dict[str, Any]:
    return {"type": "object", "enabled": enabled}


_TIMESTAMPS = {"created_at": _date(), "updated_at": _date()}


def _plain(value: Any) -> Any:
    """Reduce a store value to something the index accepts."""
    if value is None or isinstance(value, (str, int, float, bool, datetime, date)):
        return value
    if isinstance(value, Mapping):
        return {str(key): _plain(item) for key, item in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [_plain(item) for item in value]
    # ObjectId, Decimal128 and friends
    return str(value)


@dataclasses.dataclass(frozen=True)
class IndexMapping:
    """Index settings and field mapping for one entity.

    Unmapped fields are never indexed (``dynamic: false``), so
    :meth:`document_for` only copies mapped properties, plus the store id
    as the ``id`` keyword used for sorting by ``_id``.
    """

    properties: Mapping[str, Mapping[str, Any]]

    @property
    def settings(self) -> dict[str, Any]:
        return {
            "analysis": {
                "normalizer": {
                    LOWERCASE_NORMALIZER: {"type": "custom", "filter": ["lowercase"]},
                },
            },
        }

    @property
    def mappings(self) -> dict[str, Any]:
        properties = {name: dict(prop) for name, prop in self.properties.items()}
        properties[ID_FIELD] = {"type": "keyword"}
        return {"dynamic": False, "properties": properties}

    def document_for(self, record: Mapping[str, Any]) -> dict[str, Any]:
        """Serialise a store *record* into its indexed copy."""
        document = {name: _plain(record[name]) for name in self.properties if name in record}
        if "_id" in record:
            document[ID_FIELD] = str(record["_id"])
        return document


# ---------------------------------------------------------------------------
# Store backend
# ---------------------------------------------------------------------------

STORE_FIELDS: dict[str, FieldConfiguration] = {
    "banks": FieldConfiguration(
        searchable_fields=("code", "name"),
        sortable_fields=("code", "name", "sort_order", "is_active", "created_at", "updated_at", "_id"),
        boolean_fields=("is_active",),
        filterable_fields=("code", "name", "is_active", "sort_order", "created_at", "updated_at"),
        default_sort=("sort_order:asc", "name:asc"),
    ),
    "categories": FieldConfiguration(
        searchable_fields=("name", "description"),
        text_indexed_fields=("name", "description"),
        sortable_fields=("name", "description", "is_active", "parent_id", "created_at", "updated_at", "_id"),
        boolean_fields=("is_active",),
        filterable_fields=("name", "description", "is_active", "parent_id", "created_at", "updated_at"),
        default_sort=("name:asc",),
    ),
    "events": FieldConfiguration(
        searchable_fields=("name", "description", "location"),
        text_indexed_fields=("name", "description", "location"),
        sortable_fields=(
            "name", "description", "location", "start_datetime", "end_datetime",
            "is_active", "created_at", "updated_at", "_id",
        ),
        boolean_fields=("is_active", "is_featured"),
        filterable_fields=(
            "name", "description", "location", "is_active", "is_featured", "organizer_id",
            "event_type_id", "category_ids", "start_datetime", "end_datetime", "created_at", "updated_at",
        ),
        default_sort=("start_datetime:desc", "name:asc"),
    ),
    "event_types": FieldConfiguration(
        searchable_fields=("name", "description", "slug"),
        text_indexed_fields=("name", "description"),
        sortable_fields=("name", "slug", "sort_order", "is_active", "created_at", "updated_at", "_id"),
        boolean_fields=("is_active",),
        filterable_fields=("name", "slug", "is_active", "sort_order", "created_at", "updated_at"),
        default_sort=("sort_order:asc", "name:asc"),
    ),
    "organizers": FieldConfiguration(
        searchable_fields=("name", "email", "company_name"),
        text_indexed_fields=("name", "email", "company_name"),
        sortable_fields=("name", "email", "company_name", "is_active", "created_at", "updated_at", "_id"),
        boolean_fields=("is_active", "is_verified"),
        filterable_fields=(
            "name", "email", "company_name", "is_active", "is_verified", "created_at", "updated_at",
        ),
        default_sort=("name:asc",),
    ),
    "payment_methods": FieldConfiguration(
        searchable_fields=("display_name", "code", "payment_gateway"),
        sortable_fields=("display_name", "code", "payment_gateway", "enabled", "created_at", "updated_at", "_id"),
        boolean_fields=("enabled",),
        filterable_fields=("display_name", "code", "payment_gateway", "enabled", "created_at", "updated_at"),
    ),
    "permissions": FieldConfiguration(
        searchable_fields=("name", "description", "action", "resource"),
        text_indexed_fields=("name", "description", "action", "resource"),
        sortable_fields=("name", "description", "action", "resource", "created_at", "updated_at", "_id"),
        filterable_fields=("name", "description", "action", "resource", "role_id", "created_at", "updated_at"),
        default_sort=("resource:asc", "action:asc", "name:asc"),
    ),
    "roles": FieldConfiguration(
        searchable_fields=("name", "description"),
        sortable_fields=("name", "description", "created_at", "updated_at", "_id"),
        filterable_fields=("name", "created_at", "updated_at"),
        default_sort=("name:asc",),
    ),
    "ticket_types": FieldConfiguration(
        searchable_fields=("name", "description"),
        text_indexed_fields=("name", "description"),
        sortable_fields=("name", "description", "price", "quantity", "is_active", "created_at", "updated_at", "_id"),
        boolean_fields=("is_active", "is_free"),
        filterable_fields=(
            "name", "description", "price", "quantity", "is_active", "is_free", "event_id",
            "created_at", "updated_at",
        ),
        default_sort=("price:asc", "name:asc"),
    ),
    "users": FieldConfiguration(
        searchable_fields=("name", "email"),
        text_indexed_fields=("name", "email"),
        sortable_fields=("name", "email", "created_at", "updated_at", "_id"),
        filterable_fields=("name", "email", "role_id", "created_at", "updated_at"),
        default_sort=("name:asc",),
    ),
}


# ---------------------------------------------------------------------------
# Index backend
# ---------------------------------------------------------------------------

INDEX_FIELDS: dict[str, FieldConfiguration] = {
    "categories": FieldConfiguration(
        searchable_fields=("name", "description"),
        sortable_fields=("name", "created_at", "updated_at", "_score", "_id"),
        keyword_fields=("name",),
        boolean_fields=("is_active",),
    ),
    "events": FieldConfiguration(
        searchable_fields=("title", "description"),
        sortable_fields=(
            "title", "start_date", "end_date", "published_at", "status",
            "created_at", "updated_at", "_score", "_id",
        ),
        keyword_fields=("title",),
        boolean_fields=("is_paid",),
        essential_fields=("_id", "location", "cover_image", "cover_image_filename", "category_ids"),
    ),
    "organizers": FieldConfiguration(
        searchable_fields=("handle", "name", "description", "contact_phone"),
        sortable_fields=("handle", "name", "created_at", "updated_at", "_score", "_id"),
        keyword_fields=("handle", "name"),
    ),
    "payment_methods": FieldConfiguration(
        searchable_fields=("display_name", "code", "payment_gateway"),
        sortable_fields=("display_name", "code", "payment_gateway", "enabled", "created_at", "updated_at", "_id"),
        keyword_fields=("display_name",),
        boolean_fields=("enabled",),
    ),
    "permissions": FieldConfiguration(
        searchable_fields=("action", "subject_class"),
        sortable_fields=("action", "subject_class", "created_at", "updated_at", "_score", "_id"),
        keyword_fields=("action", "subject_class"),
    ),
    "roles": FieldConfiguration(
        searchable_fields=("name", "description"),
        sortable_fields=("name", "description", "created_at", "updated_at", "_score", "_id"),
        keyword_fields=("name", "description"),
        essential_fields=("_id",),
    ),
    "ticket_types": FieldConfiguration(
        searchable_fields=("name", "description"),
        sortable_fields=(
            "name", "price", "quota", "available_from", "available_until", "valid_on", "is_active",
            "sort_order", "event_id", "created_at", "updated_at", "_score", "_id",
        ),
        keyword_fields=("name",),
        boolean_fields=("is_active",),
        essential_fields=("_id", "event_id"),
    ),
    "users": FieldConfiguration(
        searchable_fields=("name", "email"),
        sortable_fields=("name", "email", "created_at", "updated_at", "_score", "_id"),
        keyword_fields=("name", "email"),
    ),
}

INDEX_MAPPINGS: dict[str, IndexMapping] = {
    "categories": IndexMapping({
        "name": _text(keyword=True),
        "description": _text(),
        "is_active": _boolean(),
        "parent_id": _keyword(),
        **_TIMESTAMPS,
    }),
    "events": IndexMapping({
        "title": _text(keyword=True),
        "slug": _keyword(),
        "short_id": _keyword(),
        "description": _text(),
        "cover_image": _keyword(),
        "cover_image_filename": _keyword(),
        "status": _keyword(),
        "location_type": _keyword(),
        "location": _object(),
        "start_date": _date(),
        "start_time": _date(),
        "end_date": _date(),
        "end_time": _date(),
        "timezone": _keyword(),
        "is_paid": _boolean(),
        "published_at": _date(),
        "canceled_at": _date(),
        "organizer_id": _keyword(),
        "event_type_id": _keyword(),
        "category_ids": _keyword(),
        **_TIMESTAMPS,
    }),
    "organizers": IndexMapping({
        "handle": _text(keyword=True),
        "name": _text(keyword=True),
        "description": _text(),
        "contact_phone": _text(),
        **_TIMESTAMPS,
    }),
    "payment_methods": IndexMapping({
        "display_name": _text(keyword=True),
        "code": _keyword(),
        "payment_gateway": _keyword(),
        "enabled": _boolean(),
        **_TIMESTAMPS,
    }),
    "permissions": IndexMapping({
        "action": _text(keyword=True),
        "subject_class": _text(keyword=True),
        "conditions": _object(enabled=False),
        **_TIMESTAMPS,
    }),
    "roles": IndexMapping({
        "name": _text(keyword=True),
        "description": _text(keyword=True),
        **_TIMESTAMPS,
    }),
    "ticket_types": IndexMapping({
        "name": _text(keyword=True),
        "description": _text(),
        "price": _integer(),
        "quota": _integer(),
        "available_from": _date(),
        "available_until": _date(),
        "valid_on": _date(),
        "is_active": _boolean(),
        "sort_order": _integer(),
        "metadata": _object(enabled=False),
        "event_id": _keyword(),
        **_TIMESTAMPS,
    }),
    "users": IndexMapping({
        "email": _text(keyword=True),
        "name": _text(keyword=True),
        "provider": _keyword(),
        "uid": _keyword(),
        **_TIMESTAMPS,
    }),
}

# Used for entities that opt into the index with no mapping of their own.
DEFAULT_INDEX_MAPPING = IndexMapping({
    "title": _text(keyword=True),
    "name": _text(keyword=True),
    "description": _text(),
    "status": _keyword(),
    "published_at": _date(),
    **_TIMESTAMPS,
})


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------

ENTITIES: tuple[str, ...] = (
    "banks",
    "categories",
    "event_types",
    "events",
    "organizers",
    "payment_methods",
    "permissions",
    "roles",
    "ticket_types",
    "users",
)

COLLECTIONS: dict[str, str] = {entity: entity for entity in ENTITIES}

DEFAULT_BACKENDS: dict[str, str] = {
    entity: INDEX if entity in ("events", "organizers", "roles", "ticket_types") else STORE
    for entity in ENTITIES
}


def mapping_for(entity: str) -> IndexMapping:
    return INDEX_MAPPINGS.get(entity, DEFAULT_INDEX_MAPPING)


def store_registry() -> ConfigurationRegistry:
    return ConfigurationRegistry(STORE_FIELDS, defaults=STORE_DEFAULTS)


def index_registry() -> ConfigurationRegistry:
    return ConfigurationRegistry(INDEX_FIELDS, defaults=INDEX_DEFAULTS)
