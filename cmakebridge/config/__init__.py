"""Configuration for cmakebridge."""

from .models import BridgeSettings
from .user_config import config_search_paths, load_settings


__all__ = ["BridgeSettings", "config_search_paths", "load_settings"]
