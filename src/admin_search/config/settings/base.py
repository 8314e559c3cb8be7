"""Config settings – Settings base class."""
from __future__ import annotations

import dataclasses
from typing import Any, ClassVar


@dataclasses.dataclass
class Settings:
    """Base class for 12-factor settings.

    Subclasses set ``_prefix`` to namespace their environment variables and
    list credential fields in ``_secret_fields`` so :meth:`describe` never
    leaks them.
    """

    _prefix: ClassVar[str] = ""
    _secret_fields: ClassVar[frozenset[str]] = frozenset()

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        """Override to add cross-field validation."""

    def describe(self) -> dict[str, Any]:
        """Field values with secrets masked, for startup logging."""
        return {
            f.name: "***" if f.name in self._secret_fields and getattr(self, f.name) else getattr(self, f.name)
            for f in dataclasses.fields(self)
        }


__all__ = ["Settings"]
