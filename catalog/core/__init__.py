from catalog.core.config import Settings, get_settings

__all__ = ["Settings", "get_settings"]
