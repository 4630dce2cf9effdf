"""
User Router
Registration/login upsert, profiles and admin role management
"""

from fastapi import APIRouter, Depends, Query

from travelio.core.deps import get_user_service, require_principal
from travelio.models.common import APIResponse, serialize_document
from travelio.models.user import RoleUpdate, UserProfileUpdate, UserUpsert
from travelio.services import UserService

router = APIRouter(prefix="/users", tags=["Users"])


@router.post("", response_model=APIResponse)
async def save_user(body: UserUpsert, service: UserService = Depends(get_user_service)):
    """
    Create or update a user by email (called on registration and on login).
    """
    result = await service.save(body)
    return APIResponse(code=0, msg="ok", data=result)


@router.get("", response_model=APIResponse)
async def list_users(
    role: str | None = Query(None, description="Filter by role"),
    principal: str = Depends(require_principal),
    service: UserService = Depends(get_user_service),
):
    """
    All users, most recently updated first. Requires a valid bearer token.
    """
    users = await service.list(role=role)
    return APIResponse(code=0, msg="ok", data=[serialize_document(u) for u in users])


@router.get("/profile/{email}", response_model=APIResponse)
async def get_profile(email: str, service: UserService = Depends(get_user_service)):
    user = await service.get_profile(email)
    return APIResponse(code=0, msg="ok", data=serialize_document(user))


@router.patch("/profile/{email}", response_model=APIResponse)
async def update_profile(
    email: str,
    body: UserProfileUpdate,
    service: UserService = Depends(get_user_service),
):
    """
    Update profile fields. email and role in the body are ignored.
    """
    user = await service.update_profile(email, body)
    return APIResponse(code=0, msg="ok", data=serialize_document(user))


@router.get("/{email}/role", response_model=APIResponse)
async def get_role(email: str, service: UserService = Depends(get_user_service)):
    role = await service.get_role(email)
    return APIResponse(code=0, msg="ok", data={"role": role})


@router.patch("/{user_id}/role", response_model=APIResponse)
async def set_role(user_id: str, body: RoleUpdate, service: UserService = Depends(get_user_service)):
    user = await service.set_role(user_id, body.role)
    return APIResponse(code=0, msg="ok", data=serialize_document(user))


@router.delete("/{user_id}", response_model=APIResponse)
async def delete_user(user_id: str, service: UserService = Depends(get_user_service)):
    await service.delete(user_id)
    return APIResponse(code=0, msg="ok", data={"deletedId": user_id})
