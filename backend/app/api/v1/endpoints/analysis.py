"""
Analysis API

Endpoints:
- POST /analysis?action=recommend - Ordered method recommendations for a research context
- POST /analysis?action=process - Run a method, persist the analysis, mark the project analyzed
- GET /analysis?id=... - One analysis
- GET /analysis?project_id=... - Analyses of a project, newest first
- PUT /analysis/{analysis_id} - Set status and/or store notes as user feedback
- DELETE /analysis/{analysis_id} - Soft delete (status becomes deleted)
- GET /analysis/{analysis_id}/export?format=pdf|json|csv - Download a completed analysis
"""

from typing import Any, Dict, Optional, Tuple, Type, TypeVar

from fastapi import APIRouter, Body, Depends, Query, Response, status
from pydantic import BaseModel, ValidationError as PydanticValidationError

from app.core.database import RestStore, get_store
from app.core.exceptions import MethodNotAllowedError, NotFoundError, ValidationError
from app.core.logging_config import logger
from app.modules.auth.dependencies import Identity, get_current_identity
from app.schemas.analysis import (
    AnalysisUpdate,
    ProcessRequest,
    RecommendationItem,
    RecommendationList,
    RecommendRequest,
)
from app.services.analysis_service import AnalysisService
from app.services.export_service import export_analysis
from app.services.project_service import ProjectService


router = APIRouter(prefix="/analysis", tags=["Analysis"])

M = TypeVar("M", bound=BaseModel)


def get_analysis_service(store: RestStore = Depends(get_store)) -> AnalysisService:
    return AnalysisService(store)


def _parse_body(model: Type[M], payload: Optional[Dict[str, Any]]) -> M:
    try:
        return model.model_validate(payload or {})
    except PydanticValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first.get("loc", ()))
        raise ValidationError(f"Data tidak valid: {field} {first.get('msg', '')}".strip(), field=field or None)


async def _owned_analysis(
    analyses: AnalysisService, projects: ProjectService, identity: Identity, analysis_id: str
) -> Tuple[Dict[str, Any], Dict[str, Any]]:
    """The analysis and its project; 404 unless the caller owns the project"""
    analysis = await analyses.get_analysis(analysis_id)
    try:
        project = await projects.get_project(identity.user_id, str(analysis.get("project_id")))
    except NotFoundError:
        raise NotFoundError("Analisis tidak ditemukan", resource_id=analysis_id)
    return analysis, project


@router.post("")
async def analysis_action(
    response: Response,
    action: Optional[str] = Query(None, description="recommend | process"),
    payload: Optional[Dict[str, Any]] = Body(None),
    identity: Identity = Depends(get_current_identity),
    analyses: AnalysisService = Depends(get_analysis_service),
    store: RestStore = Depends(get_store),
):
    """Dispatch on ``action``; anything else is rejected with 405"""
    if action == "recommend":
        body = _parse_body(RecommendRequest, payload)
        recommendations = analyses.get_recommendations(
            body.research_type,
            body.hypothesis,
            body.var_independent,
            body.var_dependent,
            body.data_summary,
        )
        result = RecommendationList(
            recommendations=[RecommendationItem(**r.to_dict()) for r in recommendations]
        )
        return {"data": result.model_dump()}

    if action == "process":
        body = _parse_body(ProcessRequest, payload)
        # Numeric (bigint) ids are carried as text from here on
        project_id = str(body.project_id) if body.project_id is not None else None
        upload_id = str(body.upload_id) if body.upload_id is not None else None
        if project_id and body.method:
            # Only the owner may analyze a project
            await ProjectService(store).get_project(identity.user_id, project_id)

        analysis = await analyses.process_analysis(
            project_id=project_id,
            method=body.method,
            upload_id=upload_id,
            params=body.params,
            data=body.data,
        )
        logger.log_analysis_event("processed", body.method, project_id=project_id)
        response.status_code = status.HTTP_201_CREATED
        return {"data": analysis}

    raise MethodNotAllowedError()


@router.get("")
async def get_analyses(
    id: Optional[str] = Query(None, description="Analysis ID"),
    project_id: Optional[str] = Query(None, description="Project ID"),
    identity: Identity = Depends(get_current_identity),
    analyses: AnalysisService = Depends(get_analysis_service),
    store: RestStore = Depends(get_store),
):
    projects = ProjectService(store)

    if id:
        analysis, _ = await _owned_analysis(analyses, projects, identity, id)
        return {"data": analysis}

    if project_id:
        await projects.get_project(identity.user_id, project_id)
        return {"data": await analyses.list_analyses(project_id)}

    raise MethodNotAllowedError()


@router.put("/{analysis_id}")
async def update_analysis(
    analysis_id: str,
    changes: AnalysisUpdate,
    identity: Identity = Depends(get_current_identity),
    analyses: AnalysisService = Depends(get_analysis_service),
    store: RestStore = Depends(get_store),
):
    await _owned_analysis(analyses, ProjectService(store), identity, analysis_id)
    analysis = await analyses.update_analysis(analysis_id, status=changes.status, notes=changes.notes)
    return {"data": analysis}


@router.delete("/{analysis_id}")
async def delete_analysis(
    analysis_id: str,
    identity: Identity = Depends(get_current_identity),
    analyses: AnalysisService = Depends(get_analysis_service),
    store: RestStore = Depends(get_store),
):
    await _owned_analysis(analyses, ProjectService(store), identity, analysis_id)
    return {"data": await analyses.delete_analysis(analysis_id)}


@router.get("/{analysis_id}/export")
async def export(
    analysis_id: str,
    format: str = Query("json", description="pdf | json | csv"),
    identity: Identity = Depends(get_current_identity),
    analyses: AnalysisService = Depends(get_analysis_service),
    store: RestStore = Depends(get_store),
):
    analysis, project = await _owned_analysis(analyses, ProjectService(store), identity, analysis_id)
    exported = export_analysis(analysis, format, project=project)
    return Response(
        content=exported.content,
        media_type=exported.media_type,
        headers={"Content-Disposition": f'attachment; filename="{exported.filename}"'},
    )
