"""Core configuration for the Server Manager."""

from .settings import ServerManagerSettings, get_settings

__all__ = ["ServerManagerSettings", "get_settings"]
