"""Configuration loader helpers."""

from .settings import PipelineSettings, load_settings, settings_from_env  # noqa: F401

__all__ = ["PipelineSettings", "load_settings", "settings_from_env"]
