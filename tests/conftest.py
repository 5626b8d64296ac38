"""Shared fixtures: in-memory workbooks and an app isolated to a temp upload dir."""

import io

import pytest
from fastapi.testclient import TestClient
from openpyxl import Workbook

from sheet_upload.io.schemas import XLSX_CONTENT_TYPE, UploadConfig
from sheet_upload.main import create_app


def build_xlsx(*rows, extra_sheets=None) -> bytes:
    wb = Workbook()
    ws = wb.active
    ws.title = "Dados"
    for row in rows:
        ws.append(list(row))
    for title, sheet_rows in (extra_sheets or {}).items():
        other = wb.create_sheet(title)
        for row in sheet_rows:
            other.append(list(row))
    buf = io.BytesIO()
    wb.save(buf)
    return buf.getvalue()


@pytest.fixture
def xlsx_bytes():
    return build_xlsx


@pytest.fixture
def upload_dir(tmp_path):
    return tmp_path / "uploads"


@pytest.fixture
def upload_config(upload_dir):
    return UploadConfig(upload_dir=upload_dir)


@pytest.fixture
def client(upload_config):
    return TestClient(create_app(upload_config))


@pytest.fixture
def post_file(client):
    def _post(content: bytes, filename: str = "planilha.xlsx", content_type: str = XLSX_CONTENT_TYPE):
        return client.post("/api/upload", files={"file": (filename, content, content_type)})
    return _post
