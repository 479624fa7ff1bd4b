"""Auth API — registration, login, logout, current user.

Learn: register and login both answer with the token in the body AND set
it as an HTTP-only cookie, so browser clients never handle the raw token
while API clients can send it as a Bearer header.

- POST /auth/register → create account, 201 {token, user}
- POST /auth/login    → username/password, 200 {token, user}
- POST /auth/logout   → clear the cookie
- GET  /auth/me       → the account behind the presented credential
"""

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from bazaar.auth.dependencies import RequesterContext, get_requester
from bazaar.auth.tokens import Role, issue_token
from bazaar.config import settings
from bazaar.db.engine import get_db
from bazaar.db.models import User
from bazaar.schemas.auth import AuthResponse, LoginRequest, RegisterRequest, UserRead
from bazaar.schemas.community import MessageResponse
from bazaar.services.user_service import UserService

router = APIRouter(prefix="/auth")


def _svc(db: AsyncSession = Depends(get_db)) -> UserService:
    return UserService(db)


def _issue(response: Response, user: User) -> AuthResponse:
    token = issue_token(str(user.id), Role.for_user(user.is_seller))
    response.set_cookie(
        settings.auth_cookie_name,
        token,
        max_age=settings.token_expire_days * 24 * 3600,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="strict",
    )
    return AuthResponse(token=token, user=UserRead.model_validate(user))


@router.post("/register", response_model=AuthResponse, status_code=201)
async def register(
    body: RegisterRequest,
    response: Response,
    svc: UserService = Depends(_svc),
):
    user = await svc.register(body)
    return _issue(response, user)


@router.post("/login", response_model=AuthResponse)
async def login(
    body: LoginRequest,
    response: Response,
    svc: UserService = Depends(_svc),
):
    user = await svc.authenticate(body.username, body.password)
    return _issue(response, user)


@router.post("/logout", response_model=MessageResponse)
async def logout(response: Response):
    response.delete_cookie(
        settings.auth_cookie_name,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="strict",
    )
    return {"message": "User has been logged out."}


@router.get("/me", response_model=UserRead)
async def get_me(
    requester: RequesterContext = Depends(get_requester),
    svc: UserService = Depends(_svc),
):
    return await svc.get_user(requester.user_uuid)
