from app.services.analysis_service import AnalysisService
from app.services.project_service import ProjectService
from app.services.upload_service import UploadService
from app.services.user_service import UserService

__all__ = [
    "AnalysisService",
    "ProjectService",
    "UploadService",
    "UserService",
]
