"""Application search – SearchRequest, filter classification and sort parsing.

Both backends share this module: a raw filter value is classified into a
:class:`FieldFilter` and a raw sort spec is parsed into :class:`SortField`
values here, and each backend only renders the result into its own query
language.
"""
from __future__ import annotations

import dataclasses
from enum import Enum
from typing import Any, Collection, Iterable, Mapping

from admin_search.application.pagination import DEFAULT_PER_PAGE, MAX_PER_PAGE, PageRequest
from admin_search.observability.logging import get_logger

__all__ = [
    "BOOLEAN_LITERALS",
    "EXISTS_LITERAL",
    "FieldFilter",
    "FilterKind",
    "RANGE_OPERATORS",
    "SearchRequest",
    "SortDirection",
    "SortField",
    "WILDCARD_QUERY",
    "classify_filter",
    "classify_filters",
    "is_blank",
    "parse_direction",
    "parse_sort_spec",
    "resolve_ordering",
]

logger = get_logger(__name__)

WILDCARD_QUERY = "*"
EXISTS_LITERAL = "exists"
RANGE_OPERATORS: tuple[str, ...] = ("gte", "gt", "lte", "lt")
BOOLEAN_LITERALS: dict[str, bool] = {
    "true": True,
    "1": True,
    "yes": True,
    "false": False,
    "0": False,
    "no": False,
}


def is_blank(value: Any) -> bool:
    """``None``, whitespace-only strings and empty containers are blank.

    ``False`` and ``0`` are real filter values and are not blank.
    """
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, set, frozenset, dict)) or isinstance(value, Mapping):
        return len(value) == 0
    return False


# ---------------------------------------------------------------------------
# Request
# ---------------------------------------------------------------------------


@dataclasses.dataclass(frozen=True)
class SearchRequest:
    """Normalised search parameters for one call."""

    query: str | None = None
    filter: Mapping[str, Any] = dataclasses.field(default_factory=dict)
    sort: str | tuple[str, ...] | None = None
    page: int = 1
    per_page: int = DEFAULT_PER_PAGE

    @property
    def page_request(self) -> PageRequest:
        return PageRequest(page=self.page, per_page=self.per_page)

    @classmethod
    def from_params(
        cls,
        params: "Mapping[str, Any] | SearchRequest | None" = None,
        *,
        default_per_page: int = DEFAULT_PER_PAGE,
        max_per_page: int = MAX_PER_PAGE,
    ) -> "SearchRequest":
        """Normalise untrusted request parameters; never raises."""
        if isinstance(params, SearchRequest):
            params = dataclasses.asdict(params)
        params = params or {}
        paging = PageRequest.coerce(
            params.get("page"),
            params.get("per_page"),
            default_per_page=default_per_page,
            max_per_page=max_per_page,
        )
        return cls(
            query=_normalize_query(params.get("query")),
            filter=_normalize_filter(params.get("filter")),
            sort=_normalize_sort(params.get("sort")),
            page=paging.page,
            per_page=paging.per_page,
        )


def _normalize_query(query: Any) -> str | None:
    if is_blank(query):
        return None
    return str(query).strip()


def _normalize_filter(filters: Any) -> dict[str, Any]:
    if not isinstance(filters, Mapping):
        return {}
    return {str(key): value for key, value in filters.items() if not is_blank(value)}


def _normalize_sort(sort: Any) -> str | tuple[str, ...] | None:
    if isinstance(sort, (list, tuple)):
        tokens = tuple(str(token).strip() for token in sort if not is_blank(token))
        return tokens or None
    if is_blank(sort):
        return None
    return str(sort).strip()


# ---------------------------------------------------------------------------
# Filters
# ---------------------------------------------------------------------------


class FilterKind(str, Enum):
    EXACT = "exact"
    MEMBERSHIP = "membership"
    RANGE = "range"
    BOOLEAN = "boolean"
    EXISTS = "exists"


@dataclasses.dataclass(frozen=True)
class FieldFilter:
    """A filter value whose semantics were inferred from its shape."""

    field: str
    kind: FilterKind
    value: Any


def _boolean_literal(value: Any) -> bool | None:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return BOOLEAN_LITERALS.get(value.strip().lower())
    return None


def classify_filter(field: str, value: Any, boolean_fields: Collection[str] = ()) -> FieldFilter | None:
    """Infer the filter kind for one field; ``None`` means drop the field.

    Precedence: ``"exists"`` literal, sequence (membership), mapping with
    range operators (range), declared boolean field or boolean literal
    (boolean), anything else (exact match).
    """
    if is_blank(value):
        return None
    if isinstance(value, str) and value.strip().lower() == EXISTS_LITERAL:
        return FieldFilter(field, FilterKind.EXISTS, True)
    if isinstance(value, (list, tuple, set, frozenset)):
        members = [item for item in value if item is not None]
        return FieldFilter(field, FilterKind.MEMBERSHIP, members) if members else None
    if isinstance(value, Mapping):
        bounds = {
            op: value[key]
            for key in value
            if (op := str(key).lower()) in RANGE_OPERATORS and not is_blank(value[key])
        }
        if not bounds:
            logger.debug("filter_dropped", field=field, reason="mapping_without_range_operator")
            return None
        return FieldFilter(field, FilterKind.RANGE, {op: bounds[op] for op in RANGE_OPERATORS if op in bounds})

    flag = _boolean_literal(value)
    if field in boolean_fields and flag is None and isinstance(value, int) and value in (0, 1):
        flag = bool(value)
    if field in boolean_fields or flag is not None:
        if flag is None:
            logger.debug("filter_dropped", field=field, reason="not_a_boolean")
            return None
        return FieldFilter(field, FilterKind.BOOLEAN, flag)
    return FieldFilter(field, FilterKind.EXACT, value)


def classify_filters(
    filters: Mapping[str, Any] | None,
    boolean_fields: Collection[str] = (),
    allowed_fields: Collection[str] | None = None,
) -> list[FieldFilter]:
    """Classify every field of *filters*, keeping input order.

    When *allowed_fields* is given, fields outside it are dropped.
    """
    classified: list[FieldFilter] = []
    for raw_field, value in (filters or {}).items():
        field = str(raw_field)
        if allowed_fields is not None and field not in allowed_fields:
            logger.debug("filter_dropped", field=field, reason="not_filterable")
            continue
        clause = classify_filter(field, value, boolean_fields)
        if clause is not None:
            classified.append(clause)
    return classified


# ---------------------------------------------------------------------------
# Sorting
# ---------------------------------------------------------------------------


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


_DIRECTIONS: dict[str, SortDirection] = {
    "desc": SortDirection.DESC,
    "descending": SortDirection.DESC,
    "down": SortDirection.DESC,
    "asc": SortDirection.ASC,
    "ascending": SortDirection.ASC,
    "up": SortDirection.ASC,
}


def parse_direction(raw: Any) -> SortDirection:
    """Map a direction word to :class:`SortDirection`; unknown words sort ascending."""
    if raw is None:
        return SortDirection.ASC
    return _DIRECTIONS.get(str(raw).strip().lower(), SortDirection.ASC)


@dataclasses.dataclass(frozen=True)
class SortField:
    field: str
    direction: SortDirection = SortDirection.ASC

    @property
    def descending(self) -> bool:
        return self.direction is SortDirection.DESC


def _tokens(spec: Any) -> list[str]:
    if spec is None:
        return []
    if isinstance(spec, (list, tuple)):
        raw = [str(token) for token in spec if token is not None]
    else:
        raw = [str(spec)]
    return [part.strip() for token in raw for part in token.split(",") if part.strip()]


def parse_sort_spec(spec: str | Iterable[str] | None) -> list[SortField]:
    """Parse ``"field:direction"`` tokens (comma-separated string or list).

    Tokens with an empty field are skipped; no field validation happens here.
    """
    fields: list[SortField] = []
    for token in _tokens(spec):
        parts = token.split(":")
        field = parts[0].strip()
        if not field:
            continue
        fields.append(SortField(field, parse_direction(parts[1] if len(parts) > 1 else None)))
    return fields


def resolve_ordering(
    spec: str | Iterable[str] | None,
    sortable_fields: Collection[str],
    default_sort: str | Iterable[str],
) -> list[SortField]:
    """Validated ordering for *spec*, or the parsed *default_sort*.

    Unknown fields are dropped silently and a repeated field keeps its first
    token.  The result is never empty as long as *default_sort* is not.
    """
    ordering: list[SortField] = []
    seen: set[str] = set()
    for sort_field in parse_sort_spec(spec):
        if sort_field.field not in sortable_fields:
            logger.debug("sort_token_dropped", field=sort_field.field)
            continue
        if sort_field.field in seen:
            continue
        seen.add(sort_field.field)
        ordering.append(sort_field)
    return ordering or parse_sort_spec(default_sort)
