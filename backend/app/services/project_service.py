"""
Project Service - research projects scoped to their owner
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping

from app.core.database import RestStore
from app.core.exceptions import NotFoundError, ValidationError
from app.core.logging_config import logger


PROJECTS_TABLE = "research_projects"

# Lifecycle: draft -> uploaded -> analyzed
STATUS_DRAFT = "draft"
STATUS_UPLOADED = "uploaded"

# Columns a client may never overwrite
PROTECTED_FIELDS = ("id", "user_id", "created_at")

NOT_FOUND_MESSAGE = "Proyek tidak ditemukan"


class ProjectService:
    """CRUD on research_projects, always filtered by user_id"""

    def __init__(self, store: RestStore):
        self.store = store

    async def list_projects(self, user_id: str) -> List[Dict[str, Any]]:
        return await self.store.select(PROJECTS_TABLE, {"user_id": user_id}, order="created_at.desc")

    async def get_project(self, user_id: str, project_id: str) -> Dict[str, Any]:
        rows = await self.store.select(PROJECTS_TABLE, {"id": project_id, "user_id": user_id})
        if not rows:
            raise NotFoundError(NOT_FOUND_MESSAGE, resource_id=project_id)
        return rows[0]

    async def create_project(self, user_id: str, data: Mapping[str, Any]) -> Dict[str, Any]:
        if not data.get("title") or not data.get("research_type"):
            raise ValidationError("Judul dan jenis penelitian wajib diisi")

        record = {
            "user_id": user_id,
            "title": data["title"],
            "description": data.get("description"),
            "research_type": data["research_type"],
            "hypothesis": data.get("hypothesis"),
            "var_independent": data.get("var_independent"),
            "var_dependent": data.get("var_dependent"),
            "status": STATUS_DRAFT,
        }
        project = await self.store.create(PROJECTS_TABLE, record)
        logger.info(f"[Projects] User {user_id} created project {project.get('id')}")
        return project

    async def update_project(self, user_id: str, project_id: str, changes: Mapping[str, Any]) -> Dict[str, Any]:
        patch = {k: v for k, v in changes.items() if k not in PROTECTED_FIELDS}
        patch["updated_at"] = datetime.now(timezone.utc).isoformat()

        rows = await self.store.update(PROJECTS_TABLE, {"id": project_id, "user_id": user_id}, patch)
        if not rows:
            raise NotFoundError(NOT_FOUND_MESSAGE, resource_id=project_id)
        return rows[0]

    async def delete_project(self, user_id: str, project_id: str) -> None:
        if not project_id:
            raise ValidationError("Project ID diperlukan")
        await self.store.delete(PROJECTS_TABLE, {"id": project_id, "user_id": user_id})
        logger.info(f"[Projects] User {user_id} deleted project {project_id}")

    async def set_status(self, project_id: str, status: str) -> None:
        await self.store.update(
            PROJECTS_TABLE,
            {"id": project_id},
            {"status": status, "updated_at": datetime.now(timezone.utc).isoformat()},
        )
