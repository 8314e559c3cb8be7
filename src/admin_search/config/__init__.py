"""Config – 12-factor settings and loaders."""

from admin_search.config.settings import (
    DotenvSettingsLoader,
    EnvSettingsLoader,
    SearchSettings,
    Settings,
    SettingsFactory,
    SettingsLoader,
)
from admin_search.config.validation import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)

__all__ = [
    "ConfigError",
    "DotenvSettingsLoader",
    "EnvSettingsLoader",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "SearchSettings",
    "Settings",
    "SettingsFactory",
    "SettingsLoader",
]
