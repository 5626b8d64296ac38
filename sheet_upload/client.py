"""Python caller of the upload endpoint, behaving like the browser form."""

import logging
from pathlib import Path
from typing import Optional

import httpx

from sheet_upload.io.schemas import XLS_CONTENT_TYPE, XLSX_CONTENT_TYPE, UploadResult

logger = logging.getLogger(__name__)

CONTENT_TYPES = {
    ".xls": XLS_CONTENT_TYPE,
    ".xlsx": XLSX_CONTENT_TYPE,
}

SEND_ERROR_MESSAGE = "Erro ao enviar o arquivo."
SENT_MESSAGE = "Arquivo enviado e processado com sucesso!"
UNSUPPORTED_MESSAGE = "Tipo de arquivo não suportado. Por favor, envie um arquivo Excel (.xls ou .xlsx)."
READ_ERROR_MESSAGE = "Não foi possível ler o arquivo:"


class UploadClientError(Exception):
    pass


class UploadClient:
    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 30.0,
    ):
        self.base_url = base_url.rstrip("/")
        self.transport = transport
        self.timeout = timeout

    @staticmethod
    def precheck(path: str | Path) -> str:
        """Return the content type to declare for ``path`` or raise if it is not a spreadsheet."""
        content_type = CONTENT_TYPES.get(Path(path).suffix.lower())
        if content_type is None:
            raise UploadClientError(UNSUPPORTED_MESSAGE)
        return content_type

    async def upload(self, path: str | Path) -> UploadResult:
        path = Path(path)
        try:
            content_type = self.precheck(path)
        except UploadClientError as e:
            return UploadResult(ok=False, message=str(e))

        try:
            async with httpx.AsyncClient(
                base_url=self.base_url, transport=self.transport, timeout=self.timeout
            ) as client:
                with open(path, "rb") as fh:
                    resp = await client.post("/api/upload", files={"file": (path.name, fh, content_type)})
        except OSError as e:
            logger.error(f"Could not read {path}: {e}")
            return UploadResult(ok=False, message=f"{READ_ERROR_MESSAGE} {path}")
        except httpx.HTTPError as e:
            logger.error(f"Upload of {path.name} failed: {e}")
            return UploadResult(ok=False, message=f"{SEND_ERROR_MESSAGE} Por favor, tente novamente.")

        return self._result(resp)

    @staticmethod
    def _result(resp: httpx.Response) -> UploadResult:
        try:
            body = resp.json()
        except ValueError:
            body = None
        if not isinstance(body, dict):
            body = {}

        if resp.is_success:
            return UploadResult(
                ok=True,
                message=body.get("data") or SENT_MESSAGE,
                rows=body.get("resultado") or [],
                status_code=resp.status_code,
            )

        logger.debug(f"Upload failed with HTTP {resp.status_code}: {resp.text[:200]}")
        return UploadResult(
            ok=False,
            message=body.get("error") or SEND_ERROR_MESSAGE,
            status_code=resp.status_code,
        )
