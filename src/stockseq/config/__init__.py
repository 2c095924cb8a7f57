"""Configuration helpers."""

from .settings import (
    PROJECT_ROOT,
    PipelineConfig,
    Settings,
    get_settings,
    load_config_section,
)

__all__ = [
    "PROJECT_ROOT",
    "PipelineConfig",
    "Settings",
    "get_settings",
    "load_config_section",
]
