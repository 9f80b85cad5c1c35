"""Core configuration model (structured view)."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class AutosaveConfig:
    path: Path
    indent: int
    ordered_writes: bool
    debug: bool
