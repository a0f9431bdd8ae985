from .core.env import Env, get_env, is_prod, pick
from .core.logging import JsonFormatter, setup_logging
from .settings import AppSettings, LibrarySettings, get_app_settings, get_library_settings

__all__ = [
    "Env",
    "get_env",
    "is_prod",
    "pick",
    "JsonFormatter",
    "setup_logging",
    "AppSettings",
    "LibrarySettings",
    "get_app_settings",
    "get_library_settings",
]
