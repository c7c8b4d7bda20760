# app/api/v1/auth.py

from typing import Optional
from fastapi import APIRouter, Body, Cookie, Depends, Request
from sqlalchemy.orm import Session
from app.database import get_db
from app.schemas.user import (
    PasswordChange,
    RefreshRequest,
    User,
    UserLogin,
    UserProfileUpdate,
    UserSignup,
)
from app.services.auth_service import AuthService
from app.services.user_service import UserService
from app.core.dependencies import get_current_user, get_user_service
from app.core.response import send_response

router = APIRouter()


def get_auth_service(db: Session = Depends(get_db)) -> AuthService:
    return AuthService(db)


@router.post(
    "/signup",
    summary="Sign up",
    description="Create an account and return a token pair.",
)
def signup(
    request: Request,
    user_data: UserSignup,
    auth_service: AuthService = Depends(get_auth_service),
):
    result = auth_service.signup(user_data)
    return send_response(request, 201, "Account created", result)


@router.post("/login", summary="Log in")
def login(
    request: Request,
    login_data: UserLogin,
    auth_service: AuthService = Depends(get_auth_service),
):
    result = auth_service.login(login_data)
    return send_response(request, 200, "Logged in", result)


@router.post(
    "/refresh",
    summary="Refresh tokens",
    description="Exchange a refresh token (body or refresh_token cookie) for a new pair.",
)
def refresh(
    request: Request,
    body: Optional[RefreshRequest] = Body(default=None),
    refresh_token: Optional[str] = Cookie(default=None),
    auth_service: AuthService = Depends(get_auth_service),
):
    token = body.refresh_token if body and body.refresh_token else refresh_token
    tokens = auth_service.refresh(token)
    return send_response(request, 200, "Token refreshed", tokens)


@router.post("/logout", summary="Log out", description="Revoke every refresh session of the user.")
def logout(
    request: Request,
    current_user: User = Depends(get_current_user),
    auth_service: AuthService = Depends(get_auth_service),
):
    auth_service.logout(current_user.user_id)
    return send_response(request, 200, "Logged out")


@router.get("/me", summary="Current user")
def me(request: Request, current_user: User = Depends(get_current_user)):
    return send_response(request, 200, "Current user", current_user)


@router.put("/profile", summary="Update profile")
def update_profile(
    request: Request,
    profile_data: UserProfileUpdate,
    current_user: User = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service),
):
    user = user_service.update_profile(current_user.user_id, profile_data)
    return send_response(request, 200, "Profile updated", user)


@router.put("/password", summary="Change password")
def change_password(
    request: Request,
    password_data: PasswordChange,
    current_user: User = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service),
):
    user_service.change_password(current_user.user_id, password_data)
    return send_response(request, 200, "Password changed")
