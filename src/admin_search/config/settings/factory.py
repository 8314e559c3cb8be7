"""Config settings – SettingsFactory."""
from __future__ import annotations

import dataclasses
from typing import Any, Sequence, TypeVar

from admin_search.config.settings.base import Settings
from admin_search.config.settings.loaders import SettingsLoader
from admin_search.config.validation.errors import (
    ConfigError,
    MissingRequiredSettingError,
)
from admin_search.observability.logging import get_logger

T = TypeVar("T", bound=Settings)

logger = get_logger(__name__)


class SettingsFactory:
    """Merge outputs from multiple loaders, apply overrides, and construct
    a settings dataclass in one step.

    Loaders are applied in order; later loaders override earlier ones for
    overlapping fields.  *overrides* (if provided) take the highest priority.
    A loader that raises is skipped (and logged) so that the remaining
    loaders may still contribute values.
    """

    @staticmethod
    def create(
        settings_cls: type[T],
        loaders: Sequence[SettingsLoader] | None = None,
        overrides: dict[str, Any] | None = None,
    ) -> T:
        """
        Parameters
        ----------
        settings_cls:
            The :class:`~admin_search.config.settings.base.Settings` subclass
            to construct.
        loaders:
            Ordered sequence of :class:`~admin_search.config.settings.loaders.\
SettingsLoader` instances.  Later loaders win on field conflicts.
        overrides:
            Explicit key-value pairs applied after all loaders, useful for
            tests and local development.

        Returns
        -------
        T
            Populated settings instance.

        Raises
        ------
        MissingRequiredSettingError
            When a required field (no default) is absent after all sources
            have been merged.
        InvalidSettingValueError
            When the merged values fail the settings' own validation.
        ConfigError
            On any other construction failure.
        """
        merged: dict[str, Any] = {}
        defaults = {
            f.name: f.default
            for f in dataclasses.fields(settings_cls)  # type: ignore[arg-type]
            if f.default is not dataclasses.MISSING
        }

        for loader in loaders or []:
            try:
                instance = loader.load(settings_cls)
            except Exception as exc:  # noqa: BLE001 – skip failing loaders
                logger.debug("settings_loader_skipped", loader=type(loader).__name__, error=str(exc))
                continue
            for field in dataclasses.fields(instance):  # type: ignore[arg-type]
                value = getattr(instance, field.name)
                # only explicit values override what an earlier loader produced
                if field.name not in merged or value != defaults.get(field.name, dataclasses.MISSING):
                    merged[field.name] = value

        if overrides:
            merged.update(overrides)

        for field in dataclasses.fields(settings_cls):  # type: ignore[arg-type]
            if field.name in merged:
                continue
            if (
                field.default is dataclasses.MISSING
                and field.default_factory is dataclasses.MISSING  # type: ignore[misc]
            ):
                raise MissingRequiredSettingError(field.name)

        try:
            settings = settings_cls(**merged)
        except ConfigError:
            raise
        except Exception as exc:
            raise ConfigError(f"Failed to construct {settings_cls.__name__}: {exc}") from exc
        logger.debug("settings_loaded", settings=settings_cls.__name__, values=settings.describe())
        return settings


__all__ = ["SettingsFactory"]
