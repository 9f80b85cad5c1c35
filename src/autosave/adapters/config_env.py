"""Env configuration adapter producing a structured AutosaveConfig."""

from __future__ import annotations

from ..config import config as env_config
from ..core.config_model import AutosaveConfig


def load_autosave_config() -> AutosaveConfig:
    return AutosaveConfig(
        path=env_config.resolved_path(),
        indent=env_config.INDENT,
        ordered_writes=env_config.ORDERED_WRITES,
        debug=env_config.DEBUG,
    )
