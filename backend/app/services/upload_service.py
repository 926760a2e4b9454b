"""
Upload Service - CSV research data profiling and storage

The uploaded file is parsed with pandas once; only its profile (shape,
column types, missing counts, numeric statistics) and the first rows are
stored. That profile is what clients hand back as ``data_summary`` when
asking for method recommendations.
"""

import io
import json
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import pandas as pd

from app.core.database import RestStore
from app.core.exceptions import NotFoundError, ValidationError
from app.core.logging_config import logger
from app.services.project_service import ProjectService, STATUS_UPLOADED


UPLOADS_TABLE = "research_uploads"
MAX_PREVIEW_ROWS = 5
ALLOWED_EXTENSIONS = (".csv",)


def column_type(series: pd.Series) -> str:
    """Coarse type label for a column"""
    if pd.api.types.is_bool_dtype(series):
        return "bool"
    if pd.api.types.is_integer_dtype(series):
        return "int"
    if pd.api.types.is_float_dtype(series):
        return "float"
    return "string"


def _clean(value: Any) -> Optional[float]:
    if value is None or pd.isna(value):
        return None
    return round(float(value), 4)


def profile_csv(content: bytes) -> Dict[str, Any]:
    """
    Parse CSV content and build its data summary.

    Returns:
        dict with ``data_summary`` (rows, columns, column_names, column_types,
        missing_count, statistics) and ``preview_rows``
    Raises:
        ValidationError when the content is empty or not parseable
    """
    if not content or not content.strip():
        raise ValidationError("File kosong", field="file")

    try:
        df = pd.read_csv(io.BytesIO(content))
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
        raise ValidationError(f"File CSV tidak valid: {e}", field="file")

    if len(df.columns) == 0:
        raise ValidationError("File CSV tidak memiliki kolom", field="file")

    statistics: Dict[str, Dict[str, Optional[float]]] = {}
    for name in df.columns:
        series = df[name]
        if pd.api.types.is_numeric_dtype(series) and not pd.api.types.is_bool_dtype(series):
            statistics[str(name)] = {
                "mean": _clean(series.mean()),
                "std": _clean(series.std()),
                "min": _clean(series.min()),
                "max": _clean(series.max()),
            }

    # to_json handles NaN and numpy scalars
    preview_rows: List[Dict[str, Any]] = json.loads(
        df.head(MAX_PREVIEW_ROWS).to_json(orient="records")
    )

    return {
        "data_summary": {
            "rows": int(len(df)),
            "columns": int(len(df.columns)),
            "column_names": [str(c) for c in df.columns],
            "column_types": {str(c): column_type(df[c]) for c in df.columns},
            "missing_count": {str(c): int(df[c].isna().sum()) for c in df.columns},
            "statistics": statistics,
        },
        "preview_rows": preview_rows,
    }


class UploadService:
    def __init__(self, store: RestStore, max_upload_size: int):
        self.store = store
        self.max_upload_size = max_upload_size
        self.projects = ProjectService(store)

    async def upload(
        self,
        user_id: str,
        project_id: str,
        file_name: str,
        content: bytes,
        content_type: Optional[str] = None,
    ) -> Dict[str, Any]:
        # Ownership check first; raises NotFoundError for foreign projects
        await self.projects.get_project(user_id, project_id)

        if not file_name or not file_name.lower().endswith(ALLOWED_EXTENSIONS):
            raise ValidationError("Hanya file CSV yang didukung", field="file")
        if len(content) > self.max_upload_size:
            raise ValidationError(
                f"Ukuran file melebihi batas {self.max_upload_size // (1024 * 1024)}MB", field="file"
            )

        profile = profile_csv(content)

        upload = await self.store.create(UPLOADS_TABLE, {
            "project_id": project_id,
            "file_name": file_name,
            "file_type": content_type or "text/csv",
            "file_size": len(content),
            "data_summary": profile["data_summary"],
            "preview_rows": profile["preview_rows"],
        })
        await self.projects.set_status(project_id, STATUS_UPLOADED)

        logger.info(
            f"[Uploads] Project {project_id}: {file_name} "
            f"({profile['data_summary']['rows']} rows, {profile['data_summary']['columns']} columns)"
        )
        return upload

    async def list_uploads(self, user_id: str, project_id: str) -> List[Dict[str, Any]]:
        await self.projects.get_project(user_id, project_id)
        return await self.store.select(UPLOADS_TABLE, {"project_id": project_id}, order="created_at.desc")

    async def list_user_uploads(self, user_id: str) -> List[Dict[str, Any]]:
        """Uploads across every project the user owns, newest first"""
        projects = await self.projects.list_projects(user_id)
        if not projects:
            return []
        project_ids = [str(p["id"]) for p in projects]
        return await self.store.select(UPLOADS_TABLE, {"project_id": project_ids}, order="created_at.desc")

    async def get_upload(self, user_id: str, upload_id: str) -> Dict[str, Any]:
        rows = await self.store.select(UPLOADS_TABLE, {"id": upload_id})
        if not rows:
            raise NotFoundError("Upload tidak ditemukan", resource_id=upload_id)
        upload = rows[0]
        # Visible only through a project the caller owns
        try:
            await self.projects.get_project(user_id, str(upload["project_id"]))
        except NotFoundError:
            raise NotFoundError("Upload tidak ditemukan", resource_id=upload_id)
        return upload

    async def preview(self, user_id: str, upload_id: str) -> Dict[str, Any]:
        upload = await self.get_upload(user_id, upload_id)
        summary = upload.get("data_summary") or {}
        return {
            "upload_id": upload["id"],
            "file_name": upload.get("file_name"),
            "columns": summary.get("column_names", []),
            "sample_rows": upload.get("preview_rows") or [],
            "total_rows": summary.get("rows", 0),
        }

    async def stats(self, user_id: str, upload_id: str) -> Dict[str, Any]:
        upload = await self.get_upload(user_id, upload_id)
        summary = upload.get("data_summary") or {}
        return {
            "upload_id": upload["id"],
            "file_name": upload.get("file_name"),
            "total_rows": summary.get("rows", 0),
            "total_cols": summary.get("columns", 0),
            "file_size": upload.get("file_size", 0),
            "statistics": summary.get("statistics", {}),
        }

    async def delete_upload(self, user_id: str, upload_id: str) -> Dict[str, Any]:
        await self.get_upload(user_id, upload_id)
        await self.store.delete(UPLOADS_TABLE, {"id": upload_id})
        logger.info(f"[Uploads] User {user_id} deleted upload {upload_id}")
        return {
            "deleted_upload_id": upload_id,
            "deleted_at": datetime.now(timezone.utc).isoformat(),
        }
