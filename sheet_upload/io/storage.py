import asyncio
import logging
import shutil
import time
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator

from fastapi import UploadFile

logger = logging.getLogger(__name__)

def _stamp() -> int:
    return time.time_ns()

class StorageService:
    """Holds uploads on local disk for exactly as long as a request needs them."""

    def __init__(self, base_dir: Path):
        self.base_dir = Path(base_dir)

    def _reserve(self, suffix: str):
        # Exclusive create; a taken name gets a fresh timestamp
        while True:
            dest = self.base_dir / f"{_stamp()}{suffix}"
            try:
                return dest, open(dest, "xb")
            except FileExistsError:
                continue

    def store_file(self, file: UploadFile) -> Path:
        self.base_dir.mkdir(parents=True, exist_ok=True)
        dest, out = self._reserve(Path(file.filename or "").suffix.lower())
        try:
            with out:
                file.file.seek(0)
                shutil.copyfileobj(file.file, out, 1024 * 1024)
        except OSError:
            dest.unlink(missing_ok=True)
            raise
        logger.debug(f"Stored upload {file.filename!r} at {dest}")
        return dest

    @staticmethod
    def remove(path: Path) -> None:
        path.unlink(missing_ok=True)
        logger.debug(f"Removed temporary file {path}")

    @asynccontextmanager
    async def stored(self, file: UploadFile) -> AsyncIterator[Path]:
        path = await asyncio.to_thread(self.store_file, file)
        try:
            yield path
        finally:
            self.remove(path)
