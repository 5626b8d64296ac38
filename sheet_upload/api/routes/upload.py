from typing import Optional

from fastapi import APIRouter, File, Request, UploadFile

from sheet_upload.core.upload import UploadHandler
from sheet_upload.io.schemas import UploadErrorBody, UploadSuccess

UPLOAD_PATH = "/api/upload"

router = APIRouter(tags=["upload"])

def get_handler(request: Request) -> UploadHandler:
    return request.app.state.upload_handler

# Other verbs on this path are answered by the app's 405 handler
@router.post(
    UPLOAD_PATH,
    response_model=UploadSuccess,
    responses={400: {"model": UploadErrorBody}, 405: {"model": UploadErrorBody}},
)
async def upload_spreadsheet(request: Request, file: Optional[UploadFile] = File(None)):
    return await get_handler(request).handle(file)
