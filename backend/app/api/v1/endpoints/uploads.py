"""
Uploads API - CSV research data

Endpoints:
- POST /projects/{project_id}/uploads - Upload a CSV file (multipart/form-data, field ``file``)
- GET /projects/{project_id}/uploads - List uploads of a project
- GET /uploads/{upload_id}/preview - Column names and first rows
- GET /uploads/{upload_id}/stats - Shape and numeric column statistics
- GET /uploads - Uploads across all of the user's projects
- GET /uploads/{upload_id} - One upload
- DELETE /uploads/{upload_id} - Delete an upload record
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, File, UploadFile, status

from app.core.config import Settings, get_settings
from app.core.database import RestStore, get_store
from app.modules.auth.dependencies import Identity, get_current_identity
from app.schemas.common import DataResponse
from app.schemas.upload import UploadPreview, UploadStats
from app.services.upload_service import UploadService


router = APIRouter(tags=["Uploads"])


def get_upload_service(
    store: RestStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> UploadService:
    return UploadService(store, settings.MAX_UPLOAD_SIZE)


@router.post(
    "/projects/{project_id}/uploads",
    response_model=DataResponse[Dict[str, Any]],
    status_code=status.HTTP_201_CREATED,
)
async def upload_data(
    project_id: str,
    file: UploadFile = File(..., description="CSV file with the research data"),
    identity: Identity = Depends(get_current_identity),
    uploads: UploadService = Depends(get_upload_service),
):
    """
    Upload a CSV file for a project.

    The file is profiled with pandas (shape, column types, missing values,
    numeric statistics); the profile and a short preview are stored and the
    project moves to status ``uploaded``.
    """
    content = await file.read()
    upload = await uploads.upload(
        identity.user_id,
        project_id,
        file.filename or "",
        content,
        content_type=file.content_type,
    )
    return {"data": upload}


@router.get("/projects/{project_id}/uploads", response_model=DataResponse[List[Dict[str, Any]]])
async def list_uploads(
    project_id: str,
    identity: Identity = Depends(get_current_identity),
    uploads: UploadService = Depends(get_upload_service),
):
    return {"data": await uploads.list_uploads(identity.user_id, project_id)}


@router.get("/uploads/{upload_id}/preview", response_model=DataResponse[UploadPreview])
async def preview_upload(
    upload_id: str,
    identity: Identity = Depends(get_current_identity),
    uploads: UploadService = Depends(get_upload_service),
):
    return {"data": await uploads.preview(identity.user_id, upload_id)}


@router.get("/uploads/{upload_id}/stats", response_model=DataResponse[UploadStats])
async def upload_stats(
    upload_id: str,
    identity: Identity = Depends(get_current_identity),
    uploads: UploadService = Depends(get_upload_service),
):
    return {"data": await uploads.stats(identity.user_id, upload_id)}


@router.get("/uploads", response_model=DataResponse[List[Dict[str, Any]]])
async def list_all_uploads(
    identity: Identity = Depends(get_current_identity),
    uploads: UploadService = Depends(get_upload_service),
):
    """Uploads across all projects of the current user"""
    return {"data": await uploads.list_user_uploads(identity.user_id)}


@router.get("/uploads/{upload_id}", response_model=DataResponse[Dict[str, Any]])
async def get_upload(
    upload_id: str,
    identity: Identity = Depends(get_current_identity),
    uploads: UploadService = Depends(get_upload_service),
):
    return {"data": await uploads.get_upload(identity.user_id, upload_id)}


@router.delete("/uploads/{upload_id}", response_model=DataResponse[Dict[str, Any]])
async def delete_upload(
    upload_id: str,
    identity: Identity = Depends(get_current_identity),
    uploads: UploadService = Depends(get_upload_service),
):
    return {"data": await uploads.delete_upload(identity.user_id, upload_id)}
