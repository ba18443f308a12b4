"""User aggregate: students who order food and admins who run the canteen."""

import re
from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, String

from canteen.domain import canteen

_EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class UserRole(Enum):
    STUDENT = "student"
    ADMIN = "admin"


@canteen.aggregate
class User:
    name: String(required=True, max_length=100)
    email: String(required=True, max_length=254, unique=True)
    student_id: String(required=True, max_length=50, unique=True)
    phone: String(required=True, max_length=20)
    password_hash: String(required=True, max_length=255)
    role: String(choices=UserRole, default=UserRole.STUDENT.value)
    is_verified: Boolean(default=False)
    reset_password_token: String(max_length=64)
    reset_password_expire: DateTime()
    avatar_url: String(max_length=500)
    avatar_public_id: String(max_length=255)
    created_at: DateTime()
    updated_at: DateTime()

    @invariant.post
    def email_must_be_well_formed(self):
        if self.email and not _EMAIL_PATTERN.match(self.email):
            raise ValidationError({"email": ["Please provide a valid email"]})

    @classmethod
    def register(cls, name, email, student_id, phone, password_hash, role=UserRole.STUDENT.value):
        now = datetime.now(UTC)
        return cls(
            name=name.strip(),
            email=email.strip().lower(),
            student_id=student_id.strip(),
            phone=phone.strip(),
            password_hash=password_hash,
            role=role,
            created_at=now,
            updated_at=now,
        )

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value

    def update_profile(self, name=None, phone=None):
        if name is not None:
            self.name = name.strip()
        if phone is not None:
            self.phone = phone.strip()
        self.updated_at = datetime.now(UTC)

    def change_password(self, password_hash):
        self.password_hash = password_hash
        self.updated_at = datetime.now(UTC)

    def change_role(self, role):
        if role not in [r.value for r in UserRole]:
            raise ValidationError({"role": ["Invalid role"]})
        self.role = role
        self.updated_at = datetime.now(UTC)

    # -------------------------------------------------------------------
    # Password reset
    # -------------------------------------------------------------------
    def start_password_reset(self, token_hash, expires_at):
        self.reset_password_token = token_hash
        self.reset_password_expire = expires_at

    def clear_password_reset(self):
        self.reset_password_token = None
        self.reset_password_expire = None

    def reset_token_matches(self, token_hash, now=None) -> bool:
        if not self.reset_password_token or self.reset_password_expire is None:
            return False
        now = now or datetime.now(UTC)
        expires_at = self.reset_password_expire
        if expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=UTC)
        return self.reset_password_token == token_hash and expires_at > now

    def complete_password_reset(self, password_hash):
        self.change_password(password_hash)
        self.clear_password_reset()

    # -------------------------------------------------------------------
    # Avatar
    # -------------------------------------------------------------------
    def set_avatar(self, url, public_id):
        self.avatar_url = url
        self.avatar_public_id = public_id
        self.updated_at = datetime.now(UTC)

    def remove_avatar(self):
        if not self.avatar_public_id:
            raise ValidationError({"avatar": ["No avatar to delete"]})
        self.avatar_url = None
        self.avatar_public_id = None
        self.updated_at = datetime.now(UTC)
