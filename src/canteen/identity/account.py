"""Account maintenance: profile, password, role and avatar changes."""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from canteen.domain import canteen
from canteen.identity.user import User


@canteen.command(part_of="User")
class UpdateProfile:
    user_id = Identifier(required=True)
    name = String(max_length=100)
    phone = String(max_length=20)


@canteen.command(part_of="User")
class ChangePassword:
    user_id = Identifier(required=True)
    password_hash = String(required=True, max_length=255)


@canteen.command(part_of="User")
class ChangeUserRole:
    user_id = Identifier(required=True)
    role = String(required=True, max_length=20)


@canteen.command(part_of="User")
class SetAvatar:
    user_id = Identifier(required=True)
    avatar_url = String(required=True, max_length=500)
    avatar_public_id = String(required=True, max_length=255)


@canteen.command(part_of="User")
class RemoveAvatar:
    user_id = Identifier(required=True)


@canteen.command_handler(part_of=User)
class ManageAccountHandler:
    @handle(UpdateProfile)
    def update_profile(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.update_profile(name=command.name, phone=command.phone)
        repo.add(user)

    @handle(ChangePassword)
    def change_password(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.change_password(command.password_hash)
        repo.add(user)

    @handle(ChangeUserRole)
    def change_role(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.change_role(command.role)
        repo.add(user)

    @handle(SetAvatar)
    def set_avatar(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.set_avatar(command.avatar_url, command.avatar_public_id)
        repo.add(user)

    @handle(RemoveAvatar)
    def remove_avatar(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.remove_avatar()
        repo.add(user)
