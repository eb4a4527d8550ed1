from fastapi import APIRouter, HTTPException, Response
from pydantic import BaseModel

from storefront.api.deps import ROLE_COOKIE
from storefront.services.auth_service import authenticate
from storefront.services.exceptions import AuthenticationError

router = APIRouter(prefix="/api/auth", tags=["auth"])


class LoginIn(BaseModel):
    username: str
    password: str


@router.post("/login")
def login(payload: LoginIn, response: Response):
    try:
        role = authenticate(payload.username, payload.password)
    except AuthenticationError as e:
        raise HTTPException(status_code=401, detail=str(e))
    response.set_cookie(ROLE_COOKIE, role.value, httponly=True, samesite="Lax")
    return {"role": role.value}


@router.post("/logout")
def logout(response: Response):
    response.delete_cookie(ROLE_COOKIE)
    return {"ok": True}
