import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from sheet_upload.api.routes import form as form_routes
from sheet_upload.api.routes import upload as upload_routes
from sheet_upload.core.config import settings
from sheet_upload.core.errors import MethodNotAllowed, NoFileProvided, UploadError
from sheet_upload.core.logging import setup_logging
from sheet_upload.core.metrics import increment_counter, render_latest
from sheet_upload.core.upload import UploadHandler
from sheet_upload.io.schemas import UploadConfig

logger = logging.getLogger(__name__)

async def upload_error_handler(request: Request, exc: UploadError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # The only input the upload route takes is the ``file`` part
    logger.info(f"Invalid upload request: {exc.errors()}")
    error = NoFileProvided()
    increment_counter("uploads_total", {"outcome": error.outcome})
    return JSONResponse(status_code=error.status_code, content={"error": error.message})

async def http_error_handler(request: Request, exc: StarletteHTTPException) -> Response:
    if exc.status_code != 405:
        return await http_exception_handler(request, exc)
    error = MethodNotAllowed(request.method)
    increment_counter("uploads_total", {"outcome": error.outcome})
    return JSONResponse(status_code=error.status_code, content={"error": error.message}, headers=exc.headers)

def create_app(config: Optional[UploadConfig] = None) -> FastAPI:
    setup_logging(settings.LOG_LEVEL)
    config = config or UploadConfig.from_settings(settings)

    app = FastAPI(title="Sheet Upload API", version="0.1.0")
    app.state.upload_handler = UploadHandler(config)

    app.add_exception_handler(UploadError, upload_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)

    app.include_router(upload_routes.router)
    app.include_router(form_routes.router)

    @app.get("/healthz")
    def healthz():
        return {"status": "ok"}

    @app.get("/metrics", include_in_schema=False)
    def metrics():
        payload, content_type = render_latest()
        return Response(content=payload, media_type=content_type)

    logger.info(f"Upload directory: {config.upload_dir} (max {config.max_size_bytes} bytes)")
    return app

app = create_app()
