"""Configuration for autosave"""
import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() == "true"


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except ValueError:
        return default


class Config:
    """Minimal configuration"""

    # Snapshot location, relative paths resolve against the working directory
    SETTINGS_PATH = Path(os.getenv("AUTOSAVE_PATH", "settings.json"))

    # JSON formatting
    INDENT = max(1, _env_int("AUTOSAVE_INDENT", 2))

    # Serialize overlapping writes instead of last-completion-wins
    ORDERED_WRITES = _env_bool("AUTOSAVE_ORDERED_WRITES")

    DEBUG = _env_bool("DEBUG")

    @classmethod
    def resolved_path(cls) -> Path:
        path = cls.SETTINGS_PATH
        if not path.is_absolute():
            path = Path.cwd() / path
        return path


config = Config()
