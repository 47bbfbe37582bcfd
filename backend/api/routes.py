"""
API routes for the upload backend.
"""
from pathlib import Path
from typing import Optional

from fastapi import File, HTTPException, Query, Request, UploadFile
from fastapi.responses import FileResponse, JSONResponse, Response

from config import PARTIAL_MAX_AGE, PARTIAL_PREFIX, STATIC_DIR, UPLOAD_FIELD, load_upload_config
from logging_config import log_event
from models.upload import UploadConfiguration, UploadError, UploadPending, UploadSuccess
from services.file_upload import reclaim_partials, run_upload
from services.validation import effective_extensions


def register_routes(
    app,
    logger,
    upload_config: Optional[UploadConfiguration] = None,
    static_dir: Optional[Path] = None,
):
    """Register all API routes."""
    settings = upload_config or load_upload_config()
    # uploads are reported relative to the static root's parent, so the
    # route prefix is the static directory's own name
    static_root = Path(static_dir or STATIC_DIR).resolve()
    static_prefix = f"/{static_root.name}"

    @app.get("/api/upload/config")
    async def upload_policy():
        return {
            "extensions": effective_extensions(settings.extensions),
            "maxSize": settings.max_size,
            "normalize": settings.normalize,
            "name": settings.name or None,
            "sub": settings.sub or None,
        }

    @app.post("/api/cleanup/partials")
    async def cleanup_partials(max_age: int = Query(PARTIAL_MAX_AGE, ge=0)):
        removed = reclaim_partials(settings, max_age, logger)
        return {"removed": removed}

    @app.post("/api/upload")
    async def upload_slice(request: Request, file: Optional[UploadFile] = File(None)):
        """Store one slice of a chunked upload; the last slice returns the stored file."""
        log_event(
            "[upload] request",
            logger,
            upload_id=request.headers.get("X-id"),
            name=request.headers.get("X-File-Name"),
            slice=request.headers.get("X-Slice"),
            slices=request.headers.get("X-Slices"),
        )
        if file is None:
            error = UploadError(message=f"missing form field '{UPLOAD_FIELD}'", status=400)
            log_event("[upload] failed", logger, error=error.message, status=error.status)
            return JSONResponse(status_code=error.status, content=error.to_message())

        try:
            result = run_upload(request.headers, file.file, settings, logger)
        finally:
            await file.close()

        if isinstance(result, UploadPending):
            return Response(status_code=200)
        if isinstance(result, UploadSuccess):
            log_event("[upload] response", logger, file=result.file, upload_id=result.id or None)
        return JSONResponse(status_code=result.status, content=result.to_message())

    @app.get(static_prefix + "/{file_path:path}")
    async def get_static(file_path: str):
        """Serve a stored upload by its public path."""
        target = (static_root / file_path).resolve()
        try:
            target.relative_to(static_root)
        except ValueError:
            raise HTTPException(status_code=404, detail=f"File not found: {file_path}")
        if not target.is_file() or target.name.startswith(PARTIAL_PREFIX):
            raise HTTPException(status_code=404, detail=f"File not found: {file_path}")

        ext = target.suffix.lower()
        media_types = {
            ".jpg": "image/jpeg",
            ".jpeg": "image/jpeg",
            ".png": "image/png",
            ".gif": "image/gif",
            ".webp": "image/webp",
            ".bmp": "image/bmp",
        }
        media_type = media_types.get(ext, "application/octet-stream")
        return FileResponse(target, media_type=media_type)
