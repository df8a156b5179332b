"""Configuration module for PlayReign."""

from .settings import ObservabilitySettings, Settings, TimelineSettings, get_settings

__all__ = ["ObservabilitySettings", "Settings", "TimelineSettings", "get_settings"]
