"""User registration and login."""

import structlog
from protean import handle
from protean.fields import String
from protean.utils.globals import current_domain

from canteen.domain import canteen
from canteen.exceptions import AuthError, ConflictError
from canteen.identity.queries import find_user_by_email, find_user_by_student_id
from canteen.identity.security import verify_password
from canteen.identity.user import User, UserRole

logger = structlog.get_logger(__name__)


@canteen.command(part_of="User")
class RegisterUser:
    """Create a student account. The password arrives already hashed."""

    name: String(required=True, max_length=100)
    email: String(required=True, max_length=254)
    student_id: String(required=True, max_length=50)
    phone: String(required=True, max_length=20)
    password_hash: String(required=True, max_length=255)
    role: String(choices=UserRole, default=UserRole.STUDENT.value)


@canteen.command_handler(part_of=User)
class RegisterUserHandler:
    @handle(RegisterUser)
    def register_user(self, command):
        if find_user_by_email(command.email):
            raise ConflictError({"email": ["Email already registered"]})
        if find_user_by_student_id(command.student_id):
            raise ConflictError({"student_id": ["Student ID already registered"]})

        user = User.register(
            name=command.name,
            email=command.email,
            student_id=command.student_id,
            phone=command.phone,
            password_hash=command.password_hash,
            role=command.role,
        )
        current_domain.repository_for(User).add(user)

        logger.info("User registered", user_id=str(user.id), role=user.role)
        return str(user.id)


def authenticate(email, password):
    """Return the user whose credentials match.

    Unknown email and wrong password fail identically.
    """
    user = find_user_by_email(email)
    if user is None or not verify_password(password, user.password_hash):
        logger.info("Login rejected")
        raise AuthError({"credentials": ["Invalid credentials"]})
    return user
