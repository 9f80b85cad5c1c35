"""File storage adapter for encoded snapshots."""

from __future__ import annotations

from pathlib import Path

import aiofiles


class AiofilesSnapshotWriter:
    """Truncate and rewrite the whole file on every save.

    No temp file, rename or lock is involved: overlapping writes each open the
    path independently.
    """

    async def write(self, path: Path, data: bytes) -> None:
        async with aiofiles.open(path, "wb") as f:
            await f.write(data)
