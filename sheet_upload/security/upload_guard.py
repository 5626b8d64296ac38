import logging

from fastapi import UploadFile

from sheet_upload.core.errors import FileTooLarge, UnsupportedFileType
from sheet_upload.io.schemas import UploadConfig

logger = logging.getLogger(__name__)

class UploadGuard:
    def __init__(self, config: UploadConfig):
        self.allowed_content_types = set(config.allowed_content_types)
        self.max_size_bytes = config.max_size_bytes

    def validate_file(self, file: UploadFile) -> int:
        """Check declared type and size of an upload; returns its size in bytes."""
        if file.content_type not in self.allowed_content_types:
            logger.info(f"Rejected {file.filename!r}: unsupported content type {file.content_type!r}")
            raise UnsupportedFileType()

        # The upload is already spooled; measure it without reading it into memory
        file.file.seek(0, 2)
        size = file.file.tell()
        file.file.seek(0)

        if size > self.max_size_bytes:
            logger.info(f"Rejected {file.filename!r}: {size} bytes exceeds {self.max_size_bytes}")
            raise FileTooLarge(self.max_size_bytes)
        return size
