"""User self-service and admin user management endpoints."""

from fastapi import APIRouter, Depends, File, Query, UploadFile
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from canteen.api.deps import get_current_user, require_admin
from canteen.api.schemas import ChangePasswordRequest, ChangeRoleRequest, Envelope, PagedEnvelope, UpdateProfileRequest
from canteen.api.serializers import paginate, user_to_dict
from canteen.exceptions import AuthError
from canteen.identity.account import ChangePassword, ChangeUserRole, RemoveAvatar, SetAvatar, UpdateProfile
from canteen.identity.queries import search_users
from canteen.identity.security import hash_password, verify_password
from canteen.identity.user import User
from canteen.media.images import AVATARS_FOLDER, discard_image, upload_image
from canteen.utils.lookup import get_or_not_found

router = APIRouter(prefix="/users", tags=["users"])


def _reload(user_id) -> User:
    return current_domain.repository_for(User).get(str(user_id))


@router.put("/profile", response_model=Envelope)
async def update_profile(body: UpdateProfileRequest, user: User = Depends(get_current_user)) -> Envelope:
    current_domain.process(
        UpdateProfile(user_id=str(user.id), name=body.name, phone=body.phone),
        asynchronous=False,
    )
    return Envelope(message="Profile updated successfully", data={"user": user_to_dict(_reload(user.id))})


@router.put("/change-password", response_model=Envelope)
async def change_password(body: ChangePasswordRequest, user: User = Depends(get_current_user)) -> Envelope:
    if not body.current_password or not body.new_password:
        raise ValidationError({"password": ["Please provide current and new password"]})
    if not verify_password(body.current_password, user.password_hash):
        raise AuthError({"current_password": ["Current password is incorrect"]})

    current_domain.process(
        ChangePassword(user_id=str(user.id), password_hash=hash_password(body.new_password)),
        asynchronous=False,
    )
    return Envelope(message="Password changed successfully")


@router.post("/avatar", response_model=Envelope)
async def upload_avatar(image: UploadFile | None = File(None), user: User = Depends(get_current_user)) -> Envelope:
    data = await image.read() if image is not None else b""
    if not data:
        raise ValidationError({"image": ["Please upload an image"]})

    discard_image(user.avatar_public_id)
    stored = upload_image(data, AVATARS_FOLDER, filename=image.filename)
    current_domain.process(
        SetAvatar(user_id=str(user.id), avatar_url=stored.url, avatar_public_id=stored.public_id),
        asynchronous=False,
    )
    return Envelope(message="Avatar uploaded successfully", data={"avatar_url": stored.url})


@router.delete("/avatar", response_model=Envelope)
async def delete_avatar(user: User = Depends(get_current_user)) -> Envelope:
    if not user.avatar_public_id:
        raise ValidationError({"avatar": ["No avatar to delete"]})

    discard_image(user.avatar_public_id)
    current_domain.process(RemoveAvatar(user_id=str(user.id)), asynchronous=False)
    return Envelope(message="Avatar deleted successfully")


# ---------------------------------------------------------------------------
# Admin
# ---------------------------------------------------------------------------
@router.get("/admin/all", response_model=PagedEnvelope)
async def list_users(
    role: str | None = None,
    search: str | None = None,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    admin: User = Depends(require_admin),
) -> PagedEnvelope:
    users, meta = paginate(search_users(role=role, search=search), page, limit)
    return PagedEnvelope(data=[user_to_dict(u) for u in users], **meta)


@router.put("/admin/{user_id}/role", response_model=Envelope)
async def change_role(user_id: str, body: ChangeRoleRequest, admin: User = Depends(require_admin)) -> Envelope:
    get_or_not_found(User, user_id, "User not found")
    current_domain.process(ChangeUserRole(user_id=user_id, role=body.role), asynchronous=False)
    return Envelope(message="User role updated successfully", data={"user": user_to_dict(_reload(user_id))})
