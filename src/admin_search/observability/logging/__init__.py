"""Observability – structured logging helpers."""
from admin_search.observability.logging.factory import JsonLoggerFactory
from admin_search.observability.logging.filters import (
    DEFAULT_SENSITIVE_FIELDS,
    SensitiveFieldsFilter,
    mask_url_credentials,
)
from admin_search.observability.logging.processors import get_logger

__all__ = [
    "DEFAULT_SENSITIVE_FIELDS",
    "JsonLoggerFactory",
    "SensitiveFieldsFilter",
    "mask_url_credentials",
    "get_logger",
]
