"""User directory administration — commands and handler.

Admins add, edit and delete accounts. An admin can never delete the account
they are signed in with.
"""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from easyorder.domain import easyorder
from easyorder.identity.user import User, UserRole
from easyorder.utils.logging import get_logger

logger = get_logger(__name__)


@easyorder.command(part_of="User")
class AddUser:
    username = String(max_length=255)
    email = String(max_length=254)
    password = String(max_length=255)
    role = String(max_length=10, default=UserRole.USER.value)
    region_id = Identifier()
    cnpj = String(max_length=20)
    address = String(max_length=255)
    city = String(max_length=100)
    state = String(max_length=50)
    cep = String(max_length=10)
    user_id = Identifier()


@easyorder.command(part_of="User")
class UpdateUser:
    user_id = Identifier(required=True)
    username = String(max_length=255)
    email = String(max_length=254)
    password = String(max_length=255)
    role = String(max_length=10)
    region_id = Identifier()
    cnpj = String(max_length=20)
    city = String(max_length=100)
    state = String(max_length=50)


@easyorder.command(part_of="User")
class DeleteUser:
    """Remove an account. ``requested_by`` is the signed-in admin."""

    user_id = Identifier(required=True)
    requested_by = Identifier()


def _require_credentials(command):
    if not command.username or not command.email or not command.password:
        raise ValidationError({"user": ["Username, email and password are required"]})


@easyorder.command_handler(part_of=User)
class ManageUsersHandler:
    @handle(AddUser)
    def add_user(self, command):
        _require_credentials(command)

        user = User.register(
            username=command.username,
            email=command.email,
            password=command.password,
            role=command.role,
            region_id=command.region_id,
            cnpj=command.cnpj,
            address=command.address,
            city=command.city,
            state=command.state,
            cep=command.cep,
            user_id=command.user_id,
        )
        current_domain.repository_for(User).add(user)
        logger.info("User added", user_id=str(user.id), role=user.role)
        return str(user.id)

    @handle(UpdateUser)
    def update_user(self, command):
        _require_credentials(command)

        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.update_details(
            username=command.username,
            email=command.email,
            password=command.password,
            role=command.role,
            region_id=command.region_id,
            cnpj=command.cnpj,
            city=command.city,
            state=command.state,
        )
        repo.add(user)
        logger.info("User updated", user_id=str(user.id))

    @handle(DeleteUser)
    def delete_user(self, command):
        if command.requested_by and str(command.requested_by) == str(command.user_id):
            logger.warning("Refused self-deletion", user_id=str(command.user_id))
            raise ValidationError({"user_id": ["You cannot delete your own user while logged in"]})

        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.mark_deleted(deleted_by=command.requested_by)
        repo.add(user)
        repo._dao.delete(user)
        logger.info("User deleted", user_id=str(user.id))
