"""Config settings – 12-factor env-based configuration."""
from admin_search.config.settings.base import Settings
from admin_search.config.settings.factory import SettingsFactory
from admin_search.config.settings.loaders import DotenvSettingsLoader, EnvSettingsLoader, SettingsLoader
from admin_search.config.settings.search import SearchSettings

__all__ = [
    "DotenvSettingsLoader",
    "EnvSettingsLoader",
    "SearchSettings",
    "Settings",
    "SettingsFactory",
    "SettingsLoader",
]
