"""Configuration management for keyteleop.

Loads and validates YAML-based configuration with Pydantic models.
Supports environment variable overrides for the controller gains.
"""

from keyteleop.config.settings import Settings, load_settings

__all__ = ["Settings", "load_settings"]
