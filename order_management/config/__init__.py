from .settings import Settings, build_database_url, get_settings, load_settings

__all__ = ["Settings", "build_database_url", "get_settings", "load_settings"]
