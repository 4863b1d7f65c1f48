# routes/admin_routes.py
"""
Admin-only routes. The caller's profile must carry isAdmin.

Add to your main.py:
    from routes.admin_routes import router as admin_router
    app.include_router(admin_router, prefix="/admin", tags=["Admin"])
"""

from fastapi import APIRouter, Depends

from services.users import UserService
from .dependencies import get_current_user_id, get_user_service
from .schemas import GrantAdminRequest, VerifyUserRequest

router = APIRouter()


@router.post("/verify")
def verify_user(
    body: VerifyUserRequest,
    user_id: str = Depends(get_current_user_id),
    user_service: UserService = Depends(get_user_service),
):
    profile = user_service.set_verified(user_id, body.target_user_id, body.verified)
    return {"success": True, "user": profile}


@router.post("/grant")
def grant_admin(
    body: GrantAdminRequest,
    user_id: str = Depends(get_current_user_id),
    user_service: UserService = Depends(get_user_service),
):
    profile = user_service.set_admin(user_id, body.target_user_id, body.is_admin)
    return {"success": True, "user": profile}


@router.get("/users")
def list_users(
    user_id: str = Depends(get_current_user_id),
    user_service: UserService = Depends(get_user_service),
):
    return {"users": user_service.list_users(user_id)}
