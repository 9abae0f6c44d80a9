# mentor_connect/routers/auth_router.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..config import get_settings
from ..database import get_db
from ..dependencies.service_dependencies import get_profile_service
from ..schemas import UserCreate, UserLogin, AuthResponse
from ..security import authenticate_user, create_access_token
from ..services import ProfileService

settings = get_settings()
router = APIRouter(prefix=f"{settings.API_PREFIX}/auth", tags=["authentication"])

@router.post("/register", response_model=AuthResponse, status_code=201)
async def register_user(
    user: UserCreate,
    profile_service: ProfileService = Depends(get_profile_service)
):
    """Register a new user and return a bearer token"""
    db_user = profile_service.register_user(user.name, user.email, user.password, user.role)
    return AuthResponse(
        id=db_user.id,
        name=db_user.name,
        email=db_user.email,
        role=db_user.role,
        token=create_access_token(db_user.id),
    )

@router.post("/login", response_model=AuthResponse)
async def login(credentials: UserLogin, db: Session = Depends(get_db)):
    """Exchange email and password for a bearer token"""
    user = authenticate_user(db, credentials.email, credentials.password)
    return AuthResponse(
        id=user.id,
        name=user.name,
        email=user.email,
        role=user.role,
        token=create_access_token(user.id),
    )
