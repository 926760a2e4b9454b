from typing import Any, Dict, List

from fastapi import APIRouter, Depends, status

from app.core.database import RestStore, get_store
from app.modules.auth.dependencies import Identity, get_current_identity, get_user_project
from app.schemas.common import DataResponse, SuccessFlag
from app.schemas.project import ProjectCreate, ProjectUpdate
from app.services.project_service import ProjectService


router = APIRouter(prefix="/projects", tags=["Projects"])


def get_project_service(store: RestStore = Depends(get_store)) -> ProjectService:
    return ProjectService(store)


@router.get("", response_model=DataResponse[List[Dict[str, Any]]])
async def list_projects(
    identity: Identity = Depends(get_current_identity),
    projects: ProjectService = Depends(get_project_service),
):
    """Projects of the current user, newest first"""
    return {"data": await projects.list_projects(identity.user_id)}


@router.get("/{project_id}", response_model=DataResponse[Dict[str, Any]])
async def get_project(project: Dict[str, Any] = Depends(get_user_project)):
    return {"data": project}


@router.post("", response_model=DataResponse[Dict[str, Any]], status_code=status.HTTP_201_CREATED)
async def create_project(
    project_data: ProjectCreate,
    identity: Identity = Depends(get_current_identity),
    projects: ProjectService = Depends(get_project_service),
):
    project = await projects.create_project(identity.user_id, project_data.model_dump())
    return {"data": project}


@router.put("/{project_id}", response_model=DataResponse[Dict[str, Any]])
async def update_project(
    project_id: str,
    changes: ProjectUpdate,
    identity: Identity = Depends(get_current_identity),
    projects: ProjectService = Depends(get_project_service),
):
    """Partial update: only the fields present in the body are written"""
    project = await projects.update_project(
        identity.user_id, project_id, changes.model_dump(exclude_unset=True)
    )
    return {"data": project}


@router.delete("/{project_id}", response_model=DataResponse[SuccessFlag])
async def delete_project(
    project_id: str,
    identity: Identity = Depends(get_current_identity),
    projects: ProjectService = Depends(get_project_service),
):
    await projects.delete_project(identity.user_id, project_id)
    return {"data": {"success": True}}
