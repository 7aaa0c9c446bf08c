"""Configuration module for Wallet Worth Tracker."""

from .settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
