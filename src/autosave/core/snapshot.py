"""JSON snapshot encoding for settings objects."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, Mapping

if TYPE_CHECKING:
    from .observable import ObservableSettings

logger = logging.getLogger(__name__)


def encode_snapshot(values: Mapping[str, Any], indent: int = 2) -> bytes:
    """Encode a snapshot as indented UTF-8 JSON.

    Keys keep their mapping order (declaration order for ``snapshot()``), so
    equal state always produces identical bytes. NaN and infinities are
    rejected with ValueError since JSON has no spelling for them.
    """
    txt = json.dumps(dict(values), indent=indent, ensure_ascii=False, allow_nan=False)
    return txt.encode("utf-8")


def decode_snapshot(data: bytes | str) -> Dict[str, Any]:
    if isinstance(data, bytes):
        data = data.decode("utf-8")
    parsed = json.loads(data)
    if not isinstance(parsed, dict):
        raise ValueError("snapshot root is not an object")
    return parsed


def load_snapshot(settings: "ObservableSettings", path: Path) -> bool:
    """Restore settings from an existing snapshot file.

    Returns False and keeps the current values when the file is missing or
    cannot be parsed.
    """
    path = Path(path)
    if not path.exists():
        return False

    try:
        values = decode_snapshot(path.read_bytes())
    except (OSError, ValueError) as e:
        logger.warning("Ignoring unreadable settings snapshot %s: %s", path, e)
        return False

    settings.restore(values)
    logger.debug("Loaded settings from %s", path)
    return True
