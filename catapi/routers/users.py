from __future__ import annotations

from fastapi import APIRouter, Depends

from catapi.db.models import User
from catapi.routers.deps import current_user, get_user_service
from catapi.schemas import UserCreate, UserModify
from catapi.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.get("")
def user_list(users: UserService = Depends(get_user_service)):
    return users.list_users()


@router.post("")
def user_create(payload: UserCreate, users: UserService = Depends(get_user_service)):
    return {"message": "User created", "data": users.create_user(payload)}


@router.put("")
def user_update_current(
    payload: UserModify,
    user: User = Depends(current_user),
    users: UserService = Depends(get_user_service),
):
    return {"message": "User updated", "data": users.update_current(user, payload)}


@router.delete("")
def user_delete_current(user: User = Depends(current_user), users: UserService = Depends(get_user_service)):
    return {"message": "User deleted", "data": users.delete_current(user)}


@router.get("/token")
def check_token(user: User = Depends(current_user), users: UserService = Depends(get_user_service)):
    return users.check_token(user)


@router.get("/{user_id}")
def user_get(user_id: str, users: UserService = Depends(get_user_service)):
    return users.get_user(user_id)


@router.put("/{user_id}")
def user_update_admin(
    user_id: str,
    payload: UserModify,
    user: User = Depends(current_user),
    users: UserService = Depends(get_user_service),
):
    return {"message": "User updated", "data": users.update_as_admin(user, user_id, payload)}


@router.delete("/{user_id}")
def user_delete_admin(user_id: str, user: User = Depends(current_user), users: UserService = Depends(get_user_service)):
    return {"message": "User deleted", "data": users.delete_as_admin(user, user_id)}
