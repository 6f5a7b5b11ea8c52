"""FastAPI endpoints for the Identity domain: registration, login and profile."""

from fastapi import APIRouter, Depends

from identity.api.dependencies import get_current_user
from identity.api.schemas import (
    AuthResponse,
    ChangePasswordRequest,
    LoginRequest,
    MessageResponse,
    ProfileResponse,
    RegisterRequest,
    UpdateProfileRequest,
)
from identity.user.authentication import AuthenticationHandler
from identity.user.profile import UpdateProfileHandler
from identity.user.registration import RegisterUserHandler
from identity.user.user import User
from shared.database import get_database

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", status_code=201, response_model=AuthResponse)
def register(body: RegisterRequest, database=Depends(get_database)) -> AuthResponse:
    user, token = RegisterUserHandler(database).register_user(body)
    return AuthResponse(message="User registered successfully", token=token, user=user.public_profile())


@router.post("/login", response_model=AuthResponse)
def login(body: LoginRequest, database=Depends(get_database)) -> AuthResponse:
    user, token = AuthenticationHandler(database).login(body)
    return AuthResponse(message="Login successful", token=token, user=user.public_profile())


@router.get("/profile", response_model=ProfileResponse)
def get_profile(user: User = Depends(get_current_user)) -> ProfileResponse:
    return ProfileResponse(message="Profile retrieved", user=user.public_profile())


@router.put("/profile", response_model=ProfileResponse)
def update_profile(
    body: UpdateProfileRequest,
    user: User = Depends(get_current_user),
    database=Depends(get_database),
) -> ProfileResponse:
    user = UpdateProfileHandler(database).update_profile(user.id, body)
    return ProfileResponse(message="Profile updated successfully", user=user.public_profile())


@router.put("/change-password", response_model=MessageResponse)
def change_password(
    body: ChangePasswordRequest,
    user: User = Depends(get_current_user),
    database=Depends(get_database),
) -> MessageResponse:
    AuthenticationHandler(database).change_password(user.id, body)
    return MessageResponse(message="Password changed successfully")
