# routes/user_routes.py
"""
FastAPI routes for signup, profiles and follows.
"""

from fastapi import APIRouter, Depends

from services.users import UserService
from .dependencies import get_current_user_id, get_user_service
from .schemas import SignUpRequest, SubscribeRequest, UpdateProfileRequest

router = APIRouter()


@router.post("/signup")
def sign_up(body: SignUpRequest, user_service: UserService = Depends(get_user_service)):
    """
    Create an account and its profile.

    Response:
    {
        "success": true,
        "userId": "uid_abc",
        "isFirstUser": false
    }
    """
    result = user_service.sign_up(body.email, body.password, body.username, body.display_name)
    return {"success": True, **result}


@router.get("/user/{user_id}")
def get_user(user_id: str, user_service: UserService = Depends(get_user_service)):
    return user_service.get_user_page(user_id)


@router.post("/update-profile")
def update_profile(
    body: UpdateProfileRequest,
    user_id: str = Depends(get_current_user_id),
    user_service: UserService = Depends(get_user_service),
):
    updates = body.model_dump(by_alias=True, exclude_none=True)
    profile = user_service.update_profile(user_id, updates)
    return {"success": True, "user": profile}


@router.post("/subscribe")
def subscribe(
    body: SubscribeRequest,
    user_id: str = Depends(get_current_user_id),
    user_service: UserService = Depends(get_user_service),
):
    """Toggle following `targetUserId`."""
    is_subscribed = user_service.toggle_subscription(user_id, body.target_user_id)
    return {"success": True, "isSubscribed": is_subscribed}
