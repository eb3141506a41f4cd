from __future__ import annotations

from typing import Annotated
from urllib.parse import quote, urlencode

from fastapi import APIRouter, Depends, File, Form, Query, Request, UploadFile
from fastapi.responses import FileResponse
from loguru import logger
from starlette.concurrency import run_in_threadpool

from core.exceptions import InternalError, RelayError, ValidationError
from core.settings import Settings
from core.storage import VideoStore
from core.storage.addressing import normalize_identifier
from services.api.schemas import ErrorResponse, HealthResponse, UploadResponse


router = APIRouter()

VIDEO_MEDIA_TYPE = "video/mp4"

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_store(request: Request) -> VideoStore:
    return request.app.state.store


def build_download_url(base_url: str, schema: str, worker_id: str) -> str:
    """Retrieval URL for a stored video, query values percent-encoded."""
    query = urlencode({"schema": schema, "worker_id": worker_id}, quote_via=quote)
    return f"{base_url.rstrip('/')}/video?{query}"


def _require_identifiers(schema: str | None, worker_id: str | None, message: str) -> tuple[str, str]:
    if not (schema or "").strip() or not (worker_id or "").strip():
        raise ValidationError(message)
    return (
        normalize_identifier("schema", schema),
        normalize_identifier("worker_id", worker_id),
    )


@router.get("/", response_model=HealthResponse, tags=["meta"])
@router.get("/health", response_model=HealthResponse, tags=["meta"])
async def healthcheck(settings: Annotated[Settings, Depends(get_app_settings)]) -> HealthResponse:
    return HealthResponse(
        status="ok",
        service=settings.service_name,
        base_dir=str(settings.video_base_dir),
    )


@router.post("/upload", response_model=UploadResponse, responses=ERROR_RESPONSES, tags=["videos"])
async def upload_video(
    settings: Annotated[Settings, Depends(get_app_settings)],
    store: Annotated[VideoStore, Depends(get_store)],
    video: Annotated[UploadFile | None, File(description="Video payload")] = None,
    schema_: Annotated[str | None, Form(alias="schema")] = None,
    worker_id: Annotated[str | None, Form()] = None,
) -> UploadResponse:
    """Store the uploaded video under ``(schema, worker_id)``, replacing any previous one."""
    try:
        schema, worker_id = _require_identifiers(schema_, worker_id, "schema and worker_id are required")
        if video is None:
            raise ValidationError('video file (field "video") is required')

        try:
            stored = await run_in_threadpool(store.save, schema, worker_id, video.file)
        except RelayError:
            raise
        except Exception as exc:
            raise InternalError("Unexpected failure while storing upload", {"schema": schema}) from exc
    finally:
        if video is not None:
            await video.close()

    logger.info(
        "Upload stored for schema={schema} worker_id={worker_id}",
        schema=stored.schema,
        worker_id=stored.worker_id,
    )
    return UploadResponse(
        success=True,
        schema=stored.schema,
        worker_id=stored.worker_id,
        stored_path=str(stored.path),
        download_url=build_download_url(settings.base_url, stored.schema, stored.worker_id),
    )


@router.get(
    "/video",
    response_class=FileResponse,
    responses={200: {"content": {VIDEO_MEDIA_TYPE: {}}}, **ERROR_RESPONSES},
    tags=["videos"],
)
async def download_video(
    store: Annotated[VideoStore, Depends(get_store)],
    schema_: Annotated[str | None, Query(alias="schema")] = None,
    worker_id: Annotated[str | None, Query()] = None,
) -> FileResponse:
    """Send the stored video back as an attachment."""
    schema, worker_id = _require_identifiers(
        schema_, worker_id, "schema and worker_id query parameters are required"
    )
    try:
        stored = await run_in_threadpool(store.locate, schema, worker_id)
    except RelayError:
        raise
    except Exception as exc:
        raise InternalError("Unexpected failure while reading video", {"schema": schema}) from exc

    return FileResponse(
        stored.path,
        media_type=VIDEO_MEDIA_TYPE,
        filename=stored.filename,
        content_disposition_type="attachment",
    )


__all__ = ["router", "build_download_url", "get_app_settings", "get_store"]
