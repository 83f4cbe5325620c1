from __future__ import annotations

from fastapi import APIRouter, Depends

from catapi.routers.deps import get_auth_service
from catapi.schemas import Credentials
from catapi.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login")
def login(payload: Credentials, auth: AuthService = Depends(get_auth_service)):
    result = auth.login(payload)
    return {"message": result.message, "token": result.token, "user": result.user}
