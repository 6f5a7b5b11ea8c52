"""Pydantic request/response schemas for the Identity API."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from identity.user.authentication import ChangePassword, Login
from identity.user.profile import UpdateProfile
from identity.user.registration import RegisterUser
from identity.user.user import Address

# --- Request Schemas ---


class RegisterRequest(RegisterUser):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "first_name": "Jane",
                    "last_name": "Doe",
                    "email": "jane.doe@example.com",
                    "password": "s3cret-pass",
                    "phone": "+1-555-0123",
                }
            ]
        }
    }


class LoginRequest(Login):
    model_config = {"json_schema_extra": {"examples": [{"email": "jane.doe@example.com", "password": "s3cret-pass"}]}}


class UpdateProfileRequest(UpdateProfile):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "first_name": "Jane",
                    "last_name": "Smith",
                    "phone": "+1-555-0456",
                    "addresses": [
                        {
                            "label": "Home",
                            "street": "123 Elm Street",
                            "city": "Springfield",
                            "state": "IL",
                            "zip_code": "62701",
                            "country": "US",
                        }
                    ],
                }
            ]
        }
    }


class ChangePasswordRequest(ChangePassword):
    model_config = {
        "json_schema_extra": {"examples": [{"current_password": "s3cret-pass", "new_password": "n3w-s3cret"}]}
    }


# --- Response Schemas ---


class UserResponse(BaseModel):
    id: str
    first_name: str
    last_name: str
    email: str
    phone: str | None = None
    addresses: list[Address] = Field(default_factory=list)
    role: str
    is_active: bool
    email_verified: bool
    last_login_at: datetime | None = None
    created_at: datetime
    updated_at: datetime


class AuthResponse(BaseModel):
    message: str
    token: str
    user: UserResponse


class ProfileResponse(BaseModel):
    message: str
    user: UserResponse


class MessageResponse(BaseModel):
    message: str
