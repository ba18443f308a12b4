"""Forgotten-password flow.

A random token is generated per request. Only its sha256 digest is stored on
the user together with an expiry; the raw token travels to the user by email
and must be presented back to ``ResetPassword``.
"""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, String
from protean.utils.globals import current_domain

from canteen.config import get_settings
from canteen.domain import canteen
from canteen.exceptions import DependencyError, NotFoundError
from canteen.identity.queries import find_user_by_email, find_user_by_reset_token
from canteen.identity.security import generate_reset_token, reset_token_expiry
from canteen.identity.user import User
from canteen.notifications.channel.email_port import SENT, failed
from canteen.notifications.mailer import send_templated_email

logger = structlog.get_logger(__name__)


@canteen.command(part_of="User")
class StartPasswordReset:
    user_id = Identifier(required=True)
    token_hash = String(required=True, max_length=64)
    expires_at = DateTime(required=True)


@canteen.command(part_of="User")
class CancelPasswordReset:
    user_id = Identifier(required=True)


@canteen.command(part_of="User")
class ResetPassword:
    token_hash = String(required=True, max_length=64)
    password_hash = String(required=True, max_length=255)


@canteen.command_handler(part_of=User)
class PasswordResetHandler:
    @handle(StartPasswordReset)
    def start_password_reset(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.start_password_reset(command.token_hash, command.expires_at)
        repo.add(user)

    @handle(CancelPasswordReset)
    def cancel_password_reset(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.clear_password_reset()
        repo.add(user)

    @handle(ResetPassword)
    def reset_password(self, command):
        user = find_user_by_reset_token(command.token_hash)
        if user is None or not user.reset_token_matches(command.token_hash):
            raise ValidationError({"token": ["Invalid or expired reset token"]})

        user.complete_password_reset(command.password_hash)
        current_domain.repository_for(User).add(user)

        logger.info("Password reset completed", user_id=str(user.id))
        return str(user.id)


def request_password_reset(email):
    """Issue a reset token for ``email`` and mail it to the user.

    Raises:
        NotFoundError: no account uses the email.
        DependencyError: the email could not be sent; the stored token is
            cleared so it cannot be used.
    """
    user = find_user_by_email(email)
    if user is None:
        raise NotFoundError({"email": ["No user found with that email"]})

    raw_token, token_hash = generate_reset_token()
    current_domain.process(
        StartPasswordReset(user_id=str(user.id), token_hash=token_hash, expires_at=reset_token_expiry()),
        asynchronous=False,
    )

    settings = get_settings()
    context = {
        "name": user.name,
        "reset_url": f"{settings.frontend_url}/reset-password/{raw_token}",
        "expires_in_minutes": settings.reset_token_ttl_minutes,
    }
    try:
        result = send_templated_email(user.email, "password_reset", context)
    except Exception as exc:
        result = failed(str(exc))

    if result.get("status") != SENT:
        logger.error("Password reset email failed", user_id=str(user.id), error=result.get("error"))
        current_domain.process(CancelPasswordReset(user_id=str(user.id)), asynchronous=False)
        raise DependencyError({"email": ["Email could not be sent"]})

    return raw_token
