"""Authentication endpoints: register, login, password recovery, current user."""

from fastapi import APIRouter, Depends
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from canteen.api.deps import get_current_user
from canteen.api.schemas import (
    AuthEnvelope,
    Envelope,
    ForgotPasswordRequest,
    LoginRequest,
    RegisterRequest,
    ResetPasswordRequest,
)
from canteen.api.serializers import user_to_dict
from canteen.identity.password_reset import ResetPassword, request_password_reset
from canteen.identity.registration import RegisterUser, authenticate
from canteen.identity.security import create_access_token, hash_password, hash_reset_token
from canteen.identity.user import User

router = APIRouter(prefix="/auth", tags=["auth"])

_REGISTER_FIELDS = ("name", "email", "student_id", "phone", "password")


def _auth_response(user: User, message: str) -> AuthEnvelope:
    token = create_access_token(str(user.id), user.email, user.role)
    return AuthEnvelope(message=message, token=token, data={"user": user_to_dict(user)})


@router.post("/register", status_code=201, response_model=AuthEnvelope)
async def register(body: RegisterRequest) -> AuthEnvelope:
    missing = [f for f in _REGISTER_FIELDS if not getattr(body, f)]
    if missing:
        raise ValidationError({f: ["Please provide all required fields"] for f in missing})

    command = RegisterUser(
        name=body.name,
        email=body.email,
        student_id=body.student_id,
        phone=body.phone,
        password_hash=hash_password(body.password),
    )
    user_id = current_domain.process(command, asynchronous=False)
    user = current_domain.repository_for(User).get(user_id)
    return _auth_response(user, "User registered successfully")


@router.post("/login", response_model=AuthEnvelope)
async def login(body: LoginRequest) -> AuthEnvelope:
    if not body.email or not body.password:
        raise ValidationError({"credentials": ["Please provide email and password"]})
    user = authenticate(body.email, body.password)
    return _auth_response(user, "Login successful")


@router.post("/forgot-password", response_model=Envelope)
async def forgot_password(body: ForgotPasswordRequest) -> Envelope:
    if not body.email:
        raise ValidationError({"email": ["Please provide an email"]})
    request_password_reset(body.email)
    return Envelope(message="Password reset email sent")


@router.post("/reset-password/{token}", response_model=AuthEnvelope)
async def reset_password(token: str, body: ResetPasswordRequest) -> AuthEnvelope:
    command = ResetPassword(
        token_hash=hash_reset_token(token),
        password_hash=hash_password(body.password),
    )
    user_id = current_domain.process(command, asynchronous=False)
    user = current_domain.repository_for(User).get(user_id)
    return _auth_response(user, "Password reset successful")


@router.get("/me", response_model=Envelope)
async def me(user: User = Depends(get_current_user)) -> Envelope:
    return Envelope(data={"user": user_to_dict(user)})
