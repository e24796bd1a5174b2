"""Core configuration, provider registry and document catalog."""

from docgen.core.config import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
