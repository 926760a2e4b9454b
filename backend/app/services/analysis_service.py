"""
Analysis Service - orchestrates recommend / process / read for analyses.

process_analysis runs the synthesizer and the interpretation generator,
persists the analysis record, then marks the owning project ``analyzed``.
The two writes are independent: if the first fails the second is never
attempted; if the second fails the analysis record stays in place.
"""

from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Mapping, Optional

from app.core.database import RestStore
from app.core.exceptions import NotFoundError, ValidationError
from app.core.logging_config import logger, set_project_id
from app.services.interpretation import interpret
from app.services.recommendation import Recommendation, recommend
from app.services.result_synthesizer import synthesize


ANALYSES_TABLE = "research_analyses"
PROJECTS_TABLE = "research_projects"

STATUS_COMPLETED = "completed"
STATUS_DELETED = "deleted"
PROJECT_STATUS_ANALYZED = "analyzed"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class AnalysisService:
    """Recommendation, processing and retrieval of project analyses"""

    def __init__(self, store: RestStore, clock: Callable[[], datetime] = utc_now):
        self.store = store
        self.clock = clock

    def get_recommendations(
        self,
        research_type: Any,
        hypothesis: Optional[str] = None,
        independent_vars: Any = None,
        dependent_vars: Any = None,
        data_summary: Optional[Dict[str, Any]] = None,
    ) -> List[Recommendation]:
        """Pure delegation to the rule table; nothing is persisted"""
        return recommend(research_type, hypothesis, independent_vars, dependent_vars, data_summary)

    async def process_analysis(
        self,
        project_id: Any,
        method: Any,
        upload_id: Optional[str] = None,
        params: Optional[Mapping[str, Any]] = None,
        data: Any = None,
    ) -> Dict[str, Any]:
        if _is_blank(project_id) or _is_blank(method):
            raise ValidationError("Project ID dan method diperlukan")

        project_id = str(project_id)
        set_project_id(project_id)

        bundle = synthesize(method, data, params, clock=self.clock)
        interpretation = interpret(method, bundle)

        record = {
            "project_id": project_id,
            "upload_id": upload_id or None,
            "selected_method": method,
            "method_params": dict(params or {}),
            "results": bundle.to_dict(),
            "interpretation": interpretation,
            "status": STATUS_COMPLETED,
            "completed_at": self.clock().isoformat(),
        }

        # PersistenceError propagates; the project is left untouched
        analysis = await self.store.create(ANALYSES_TABLE, record)
        logger.log_analysis_event("saved", str(method), analysis_id=analysis.get("id"))

        await self.store.update(
            PROJECTS_TABLE,
            {"id": project_id},
            {"status": PROJECT_STATUS_ANALYZED, "updated_at": self.clock().isoformat()},
        )

        return analysis

    async def get_analysis(self, analysis_id: str) -> Dict[str, Any]:
        rows = await self.store.select(ANALYSES_TABLE, {"id": analysis_id})
        if not rows:
            raise NotFoundError("Analisis tidak ditemukan", resource_id=analysis_id)
        return rows[0]

    async def list_analyses(self, project_id: str) -> List[Dict[str, Any]]:
        return await self.store.select(
            ANALYSES_TABLE,
            {"project_id": project_id},
            order="created_at.desc",
        )

    async def update_analysis(
        self,
        analysis_id: str,
        status: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Set ``status`` and/or store ``notes`` as the user's feedback; blanks are ignored"""
        changes: Dict[str, Any] = {"updated_at": self.clock().isoformat()}
        if status:
            changes["status"] = status
        if notes:
            changes["user_feedback"] = notes

        rows = await self.store.update(ANALYSES_TABLE, {"id": analysis_id}, changes)
        if not rows:
            raise NotFoundError("Analisis tidak ditemukan", resource_id=analysis_id)
        logger.log_analysis_event("updated", str(rows[0].get("selected_method")), analysis_id=analysis_id)
        return rows[0]

    async def delete_analysis(self, analysis_id: str) -> Dict[str, Any]:
        """
        Soft delete: the record stays, marked ``deleted``.

        A deleted analysis is no longer ``completed`` and so can't be exported.
        """
        deleted_at = self.clock().isoformat()
        rows = await self.store.update(
            ANALYSES_TABLE,
            {"id": analysis_id},
            {"status": STATUS_DELETED, "error": "Deleted by user", "updated_at": deleted_at},
        )
        if not rows:
            raise NotFoundError("Analisis tidak ditemukan", resource_id=analysis_id)
        logger.log_analysis_event("deleted", str(rows[0].get("selected_method")), analysis_id=analysis_id)
        return {"analysis_id": analysis_id, "deleted_at": deleted_at}
