from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class HealthResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    status: str = "ok"
    service: str
    base_dir: str = Field(alias="baseDir")


class UploadResponse(BaseModel):
    success: bool = True
    schema_: str = Field(alias="schema")
    worker_id: str
    stored_path: str
    download_url: str

    model_config = ConfigDict(populate_by_name=True)


class ErrorResponse(BaseModel):
    error: str
    details: dict[str, str] = Field(default_factory=dict)
