"""Settings base class that persists itself whenever a field changes."""

from __future__ import annotations

from concurrent.futures import Future
from pathlib import Path

from .adapters.config_env import load_autosave_config
from .adapters.file_writer import AiofilesSnapshotWriter
from .async_bridge import AsyncBridge, get_async_bridge
from .core.config_model import AutosaveConfig
from .core.observable import ObservableSettings
from .core.persistence import PersistenceTrigger
from .core.ports import SnapshotWriter
from .core.snapshot import load_snapshot


class AutosavingSettings(ObservableSettings):
    """Observable settings wired to a PersistenceTrigger at construction.

    Subclasses declare ``Field`` attributes; every change to one of them
    rewrites the snapshot file at ``path``.
    """

    def __init__(
        self,
        path: str | Path | None = None,
        *,
        config: AutosaveConfig | None = None,
        writer: SnapshotWriter | None = None,
        bridge: AsyncBridge | None = None,
        ordered: bool | None = None,
        load: bool = False,
    ):
        super().__init__()
        cfg = config or load_autosave_config()
        self._path = Path(path) if path is not None else cfg.path

        if load:
            load_snapshot(self, self._path)

        self._persistence = PersistenceTrigger(
            self._path,
            writer or AiofilesSnapshotWriter(),
            bridge or get_async_bridge(),
            indent=cfg.indent,
            ordered=cfg.ordered_writes if ordered is None else ordered,
        )
        self._persistence.attach(self)

    @property
    def path(self) -> Path:
        return self._path

    @property
    def persistence(self) -> PersistenceTrigger:
        return self._persistence

    def save(self) -> Future:
        """Persist the current state now, as a change notification would."""
        return self._persistence.save()
