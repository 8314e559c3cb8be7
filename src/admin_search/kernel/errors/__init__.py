"""Kernel error hierarchy – public re-export surface.

Hierarchy::

    BaseError
    ├── ApplicationError          (application.py)
    │   ├── UnknownEntityError
    │   └── ConfigError           (config/validation/errors.py)
    └── InfrastructureError       (infrastructure.py)
        ├── BackendUnavailableError
        └── IndexPopulationError
"""

from admin_search.kernel.errors.application import ApplicationError, UnknownEntityError
from admin_search.kernel.errors.base import BaseError
from admin_search.kernel.errors.infrastructure import (
    BackendUnavailableError,
    IndexPopulationError,
    InfrastructureError,
)

__all__ = [
    "ApplicationError",
    "BackendUnavailableError",
    "BaseError",
    "IndexPopulationError",
    "InfrastructureError",
    "UnknownEntityError",
]
