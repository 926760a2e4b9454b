from fastapi import APIRouter, Depends, Request, status

from app.core.config import Settings, get_settings
from app.core.database import RestStore, get_store
from app.core.rate_limiter import rate_limit_auth
from app.modules.auth.dependencies import Identity, get_current_identity
from app.schemas.auth import AuthPayload, UserLogin, UserProfile, UserRegister
from app.schemas.common import DataResponse
from app.services.user_service import UserService


router = APIRouter(prefix="/auth", tags=["Authentication"])


def get_user_service(
    store: RestStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> UserService:
    return UserService(store, settings)


@router.post("/register", response_model=DataResponse[AuthPayload], status_code=status.HTTP_201_CREATED)
@rate_limit_auth()
async def register(
    request: Request,
    user_data: UserRegister,
    users: UserService = Depends(get_user_service),
):
    """Create a researcher account and return it with an access token"""
    result = await users.register(
        email=user_data.email,
        password=user_data.password,
        full_name=user_data.full_name,
        institution=user_data.institution,
        research_field=user_data.research_field,
    )
    return {"data": result}


@router.post("/login", response_model=DataResponse[AuthPayload])
@rate_limit_auth()
async def login(
    request: Request,
    credentials: UserLogin,
    users: UserService = Depends(get_user_service),
):
    result = await users.login(credentials.email, credentials.password)
    return {"data": result}


@router.get("/profile", response_model=DataResponse[UserProfile])
async def profile(
    identity: Identity = Depends(get_current_identity),
    users: UserService = Depends(get_user_service),
):
    return {"data": await users.get_profile(identity.user_id)}
