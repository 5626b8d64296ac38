"""Upload-and-parse flow behind ``POST /api/upload``."""

import asyncio
import logging
from typing import Optional

from fastapi import UploadFile

from sheet_upload.core.errors import SUCCESS_MESSAGE, NoFileProvided, ParseFailure, UploadError
from sheet_upload.core.metrics import increment_counter, observe
from sheet_upload.io.readers import SheetReader
from sheet_upload.io.schemas import UploadConfig, UploadSuccess
from sheet_upload.io.storage import StorageService
from sheet_upload.security.upload_guard import UploadGuard

logger = logging.getLogger(__name__)

class UploadHandler:
    """Validates one spreadsheet upload, parses its first sheet and discards the file.

    Each call is independent; the only thing shared between requests is the
    configuration passed in here.
    """

    def __init__(self, config: UploadConfig):
        self.config = config
        self.guard = UploadGuard(config)
        self.storage = StorageService(config.upload_dir)
        self.reader = SheetReader(include_blank_cells=config.include_blank_cells)

    async def handle(self, file: Optional[UploadFile]) -> UploadSuccess:
        try:
            result = await self._process(file)
        except UploadError as e:
            increment_counter("uploads_total", {"outcome": e.outcome})
            raise
        increment_counter("uploads_total", {"outcome": "success"})
        observe("upload_rows", len(result.resultado))
        return result

    async def _process(self, file: Optional[UploadFile]) -> UploadSuccess:
        if file is None or not file.filename:
            raise NoFileProvided()

        size = self.guard.validate_file(file)
        logger.info(f"Accepted upload {file.filename!r} ({file.content_type}, {size} bytes)")

        try:
            async with self.storage.stored(file) as path:
                result = await asyncio.to_thread(self.reader.parse_first_sheet, path)
        except OSError:
            logger.exception(f"Could not store upload {file.filename!r}")
            raise ParseFailure()

        if not result.ok:
            logger.warning(f"Upload {file.filename!r} rejected: {result.error.message}")
            raise result.error

        logger.info(f"Parsed {len(result.rows)} rows from {file.filename!r}")
        return UploadSuccess(data=SUCCESS_MESSAGE, resultado=result.rows)
