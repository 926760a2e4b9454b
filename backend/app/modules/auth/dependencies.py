from dataclasses import dataclass
from typing import Any, Dict, Optional

from fastapi import Depends, Path, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from app.core.config import Settings, get_settings
from app.core.database import RestStore, get_store
from app.core.exceptions import AuthenticationError
from app.core.logging_config import set_user_id
from app.core.security import decode_token
from app.services.project_service import ProjectService

# auto_error off: a missing header is reported in our own error envelope
security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class Identity:
    """Caller identity recovered from a verified token"""
    user_id: str
    email: str


async def get_current_identity(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    settings: Settings = Depends(get_settings),
) -> Identity:
    """Resolve the bearer token into an Identity or raise a 401 error"""
    if credentials is None or not credentials.credentials:
        raise AuthenticationError()

    payload = decode_token(credentials.credentials, settings)

    identity = Identity(user_id=str(payload["user_id"]), email=str(payload.get("email", "")))
    request.state.user_id = identity.user_id
    set_user_id(identity.user_id)
    return identity


async def get_user_project(
    project_id: str = Path(..., description="Project ID"),
    identity: Identity = Depends(get_current_identity),
    store: RestStore = Depends(get_store),
) -> Dict[str, Any]:
    """
    Get a project owned by the current user.

    Usage:
        @router.get("/projects/{project_id}")
        async def get_project(project: dict = Depends(get_user_project)):
            return project
    """
    return await ProjectService(store).get_project(identity.user_id, project_id)
