"""Tests for temporary upload storage and the upload guard."""

import io

import pytest
from starlette.datastructures import Headers, UploadFile

from sheet_upload.core.errors import FileTooLarge, UnsupportedFileType
from sheet_upload.io import storage as storage_module
from sheet_upload.io.schemas import XLSX_CONTENT_TYPE, UploadConfig
from sheet_upload.io.storage import StorageService
from sheet_upload.security.upload_guard import UploadGuard


def make_upload(content: bytes, filename: str = "planilha.xlsx", content_type: str = XLSX_CONTENT_TYPE):
    return UploadFile(
        file=io.BytesIO(content),
        filename=filename,
        headers=Headers({"content-type": content_type}),
    )


class TestStorageService:

    def test_creates_directory_and_keeps_extension(self, tmp_path):
        storage = StorageService(tmp_path / "a" / "b")

        path = storage.store_file(make_upload(b"abc", filename="Relatorio.XLSX"))

        assert path.parent == tmp_path / "a" / "b"
        assert path.suffix == ".xlsx"
        assert path.stem.isdigit()
        assert path.read_bytes() == b"abc"

    def test_colliding_timestamp_gets_new_name(self, tmp_path, monkeypatch):
        stamps = iter([1000, 1000, 1001])
        monkeypatch.setattr(storage_module, "_stamp", lambda: next(stamps))
        storage = StorageService(tmp_path)

        first = storage.store_file(make_upload(b"1"))
        second = storage.store_file(make_upload(b"2"))

        assert first.name == "1000.xlsx"
        assert second.name == "1001.xlsx"
        assert first.read_bytes() == b"1"

    def test_failed_copy_removes_reserved_file(self, tmp_path, monkeypatch):
        def broken_copy(src, dst, length=0):
            dst.write(b"partial")
            raise OSError("disk full")

        monkeypatch.setattr(storage_module.shutil, "copyfileobj", broken_copy)
        storage = StorageService(tmp_path)

        with pytest.raises(OSError):
            storage.store_file(make_upload(b"abc"))

        assert list(tmp_path.iterdir()) == []

    @pytest.mark.asyncio
    async def test_stored_removes_file_after_use(self, tmp_path):
        storage = StorageService(tmp_path)

        async with storage.stored(make_upload(b"abc")) as path:
            assert path.exists()

        assert not path.exists()

    @pytest.mark.asyncio
    async def test_stored_removes_file_on_error(self, tmp_path):
        storage = StorageService(tmp_path)
        seen = []

        with pytest.raises(RuntimeError):
            async with storage.stored(make_upload(b"abc")) as path:
                seen.append(path)
                raise RuntimeError("boom")

        assert seen and not seen[0].exists()
        assert list(tmp_path.iterdir()) == []


class TestUploadGuard:

    @pytest.fixture
    def guard(self):
        return UploadGuard(UploadConfig(max_size_bytes=10))

    def test_accepts_and_reports_size(self, guard):
        upload = make_upload(b"0123456789")

        assert guard.validate_file(upload) == 10
        assert upload.file.tell() == 0

    def test_rejects_type(self, guard):
        with pytest.raises(UnsupportedFileType):
            guard.validate_file(make_upload(b"a,b", filename="x.csv", content_type="text/csv"))

    def test_rejects_size(self, guard):
        with pytest.raises(FileTooLarge) as exc:
            guard.validate_file(make_upload(b"0" * 11))

        assert exc.value.max_size_bytes == 10
