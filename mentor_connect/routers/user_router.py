# mentor_connect/routers/user_router.py
from typing import List, Optional
from fastapi import APIRouter, Depends, Path, Query

from ..config import get_settings
from ..dependencies.service_dependencies import get_discovery_service, get_profile_service
from ..models import User
from ..schemas import DiscoveryFilters, MessageResponse, ProfileUpdate, UserResponse
from ..security import get_current_user
from ..services import DiscoveryService, ProfileService

settings = get_settings()
router = APIRouter(prefix=f"{settings.API_PREFIX}/users", tags=["users"])

@router.get("/me", response_model=UserResponse)
async def get_my_profile(current_user: User = Depends(get_current_user)):
    """Get the current user's full profile"""
    return current_user

@router.put("/me", response_model=UserResponse)
async def update_my_profile(
    profile_data: ProfileUpdate,
    current_user: User = Depends(get_current_user),
    profile_service: ProfileService = Depends(get_profile_service)
):
    """Update name, role, bio, skills or interests of the current user"""
    return profile_service.update_profile(current_user, profile_data.model_dump(exclude_unset=True))

@router.delete("/me", response_model=MessageResponse)
async def delete_my_profile(
    current_user: User = Depends(get_current_user),
    profile_service: ProfileService = Depends(get_profile_service)
):
    """Delete the current user and every connection they are part of"""
    profile_service.delete_user(current_user)
    return MessageResponse(message="User profile and associated connections deleted successfully")

@router.get("", response_model=List[UserResponse])
async def discover_users(
    role: Optional[str] = Query(None, description="mentor or mentee"),
    skill: Optional[str] = Query(None, description="Case-insensitive match against skills"),
    interest: Optional[str] = Query(None, description="Case-insensitive match against interests"),
    search: Optional[str] = Query(None, description="Matches name, bio, skills or interests"),
    current_user: User = Depends(get_current_user),
    discovery_service: DiscoveryService = Depends(get_discovery_service)
):
    """Discover users the caller has no connection record with"""
    filters = DiscoveryFilters(role=role, skill=skill, interest=interest, search=search)
    return discovery_service.find_candidates(current_user.id, filters)

@router.get("/{user_id}", response_model=UserResponse)
async def get_user_profile(
    user_id: int = Path(..., description="The ID of the user to view"),
    current_user: User = Depends(get_current_user),
    profile_service: ProfileService = Depends(get_profile_service)
):
    """View another user's profile"""
    if user_id == current_user.id:
        return current_user
    return profile_service.get_user(user_id)
