"""Pydantic request/response schemas for the canteen API.

These are external contracts, kept separate from the Protean commands.
Request fields that the domain validates with its own messages are optional
here so the domain gets to report them.
"""

from typing import Any

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Response envelope
# ---------------------------------------------------------------------------
class Envelope(BaseModel):
    success: bool = True
    message: str | None = None
    data: Any = None


class PagedEnvelope(Envelope):
    count: int = 0
    total: int = 0
    page: int = 1
    pages: int = 0


class AuthEnvelope(Envelope):
    token: str


class OrderListEnvelope(PagedEnvelope):
    stats: dict[str, Any] = Field(default_factory=dict)


# ---------------------------------------------------------------------------
# Auth / users
# ---------------------------------------------------------------------------
class RegisterRequest(BaseModel):
    name: str | None = None
    email: str | None = None
    student_id: str | None = None
    phone: str | None = None
    password: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Asha Rao",
                    "email": "asha@campus.edu",
                    "student_id": "STU-1001",
                    "phone": "9876543210",
                    "password": "correct-horse",
                }
            ]
        }
    }


class LoginRequest(BaseModel):
    email: str | None = None
    password: str | None = None


class ForgotPasswordRequest(BaseModel):
    email: str | None = None


class ResetPasswordRequest(BaseModel):
    password: str | None = None


class UpdateProfileRequest(BaseModel):
    name: str | None = Field(default=None, max_length=100)
    phone: str | None = Field(default=None, max_length=20)


class ChangePasswordRequest(BaseModel):
    current_password: str | None = None
    new_password: str | None = None


class ChangeRoleRequest(BaseModel):
    role: str


# ---------------------------------------------------------------------------
# Catalogue
# ---------------------------------------------------------------------------
class CategoryRequest(BaseModel):
    name: str | None = None
    description: str | None = Field(default=None, max_length=200)


# ---------------------------------------------------------------------------
# Cart / orders
# ---------------------------------------------------------------------------
class AddToCartRequest(BaseModel):
    menu_item_id: str | None = None
    quantity: int = 1


class UpdateCartItemRequest(BaseModel):
    quantity: int | None = None


class PlaceOrderRequest(BaseModel):
    special_instructions: str | None = Field(default=None, max_length=200)


class UpdateOrderStatusRequest(BaseModel):
    status: str | None = None
