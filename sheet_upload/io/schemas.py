from __future__ import annotations
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field

from sheet_upload.core.config import Settings

XLS_CONTENT_TYPE = "application/vnd.ms-excel"
XLSX_CONTENT_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

DEFAULT_MAX_SIZE_BYTES = 10 * 1024 * 1024

class UploadConfig(BaseModel):
    upload_dir: Path = Path(tempfile.gettempdir()) / "uploads"
    max_size_bytes: int = Field(DEFAULT_MAX_SIZE_BYTES, gt=0)
    allowed_content_types: List[str] = [XLS_CONTENT_TYPE, XLSX_CONTENT_TYPE]
    include_blank_cells: bool = False

    @classmethod
    def from_settings(cls, settings: Settings) -> "UploadConfig":
        return cls(
            upload_dir=Path(settings.UPLOAD_DIR),
            max_size_bytes=settings.MAX_UPLOAD_MB * 1024 * 1024,
            include_blank_cells=settings.INCLUDE_BLANK_CELLS,
        )

class UploadSuccess(BaseModel):
    data: str
    resultado: List[Dict[str, Any]] = Field(default_factory=list)

class UploadErrorBody(BaseModel):
    error: str

class UploadResult(BaseModel):
    """What a caller of the endpoint ends up showing to the user."""
    ok: bool
    message: str
    rows: List[Dict[str, Any]] = Field(default_factory=list)
    status_code: Optional[int] = None
