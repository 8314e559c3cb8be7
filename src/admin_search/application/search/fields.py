"""Application search – FieldConfiguration and ConfigurationRegistry.

Every searchable entity is described by a :class:`FieldConfiguration`
record.  Attributes left as ``None`` are "not declared" and resolve to the
registry's system defaults, so a new entity type can be searched with no
configuration at all.
"""
from __future__ import annotations

import dataclasses
from typing import Any, Mapping

from admin_search.observability.logging import get_logger

__all__ = [
    "CONFIG_KEYS",
    "ConfigurationRegistry",
    "FieldConfiguration",
    "INDEX_DEFAULTS",
    "STORE_DEFAULTS",
]

logger = get_logger(__name__)

Fields = tuple[str, ...]


@dataclasses.dataclass(frozen=True)
class FieldConfiguration:
    """Field metadata for one entity on one backend.

    ``keyword_fields`` lists analysed text fields that also carry a
    non-analysed ``<field>.keyword`` sibling (index backend sorting).
    ``default_sort`` is a sort spec of ``"field:direction"`` tokens.
    """

    searchable_fields: Fields | None = None
    sortable_fields: Fields | None = None
    boolean_fields: Fields | None = None
    filterable_fields: Fields | None = None
    text_indexed_fields: Fields | None = None
    keyword_fields: Fields | None = None
    essential_fields: Fields | None = None
    default_sort: Fields | None = None

    def merged_over(self, defaults: "FieldConfiguration") -> "FieldConfiguration":
        """Return a copy where undeclared attributes come from *defaults*."""
        return FieldConfiguration(**{
            key: value if value is not None else getattr(defaults, key)
            for key, value in dataclasses.asdict(self).items()
        })


CONFIG_KEYS: frozenset[str] = frozenset(f.name for f in dataclasses.fields(FieldConfiguration))

STORE_DEFAULTS = FieldConfiguration(
    searchable_fields=(),
    sortable_fields=("created_at", "updated_at", "_id"),
    boolean_fields=(),
    filterable_fields=("created_at", "updated_at"),
    text_indexed_fields=(),
    keyword_fields=(),
    essential_fields=("_id",),
    default_sort=("created_at:desc",),
)

INDEX_DEFAULTS = FieldConfiguration(
    searchable_fields=("title", "name", "description"),
    sortable_fields=("created_at", "updated_at", "published_at", "title", "name", "_score", "_id"),
    boolean_fields=(),
    filterable_fields=("created_at", "updated_at"),
    text_indexed_fields=(),
    keyword_fields=("title", "name", "status"),
    essential_fields=("_id",),
    default_sort=("created_at:desc",),
)


class ConfigurationRegistry:
    """Resolve per-entity field metadata, falling back to system defaults.

    Lookups never raise: an unknown entity gets the defaults and an unknown
    key gets an empty tuple.
    """

    def __init__(
        self,
        entities: Mapping[str, FieldConfiguration] | None = None,
        defaults: FieldConfiguration = STORE_DEFAULTS,
    ) -> None:
        missing = [key for key in CONFIG_KEYS if getattr(defaults, key) is None]
        if missing:
            raise ValueError(f"defaults must declare every key, missing: {sorted(missing)}")
        self._defaults = defaults
        self._resolved: dict[str, FieldConfiguration] = {
            name: config.merged_over(defaults) for name, config in (entities or {}).items()
        }

    @property
    def defaults(self) -> FieldConfiguration:
        return self._defaults

    def entities(self) -> list[str]:
        return sorted(self._resolved)

    def __contains__(self, entity: object) -> bool:
        return entity in self._resolved

    def resolve(self, entity: str) -> FieldConfiguration:
        """Return the fully populated configuration for *entity*."""
        return self._resolved.get(entity, self._defaults)

    def get(self, entity: str, key: str) -> Any:
        if key not in CONFIG_KEYS:
            logger.warning("unknown_field_configuration_key", entity=entity, key=key)
            return ()
        return getattr(self.resolve(entity), key)
