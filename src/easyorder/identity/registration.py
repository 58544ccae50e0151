"""Self-service registration — command and handler.

Every field on the registration form is mandatory, the password must be typed
twice and be at least ``MIN_PASSWORD_LENGTH`` characters. New accounts always
get the ``user`` role.
"""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from easyorder.domain import easyorder
from easyorder.identity.user import User, UserRole
from easyorder.utils.logging import get_logger

logger = get_logger(__name__)

MIN_PASSWORD_LENGTH = 3

_REQUIRED_FIELDS = (
    "username",
    "cnpj",
    "email",
    "address",
    "city",
    "cep",
    "state",
    "password",
    "confirm_password",
    "region_id",
)


@easyorder.command(part_of="User")
class RegisterUser:
    """Create a customer account from the public registration form."""

    username = String(max_length=255)
    cnpj = String(max_length=20)
    email = String(max_length=254)
    address = String(max_length=255)
    city = String(max_length=100)
    cep = String(max_length=10)
    state = String(max_length=50)
    password = String(max_length=255)
    confirm_password = String(max_length=255)
    region_id = Identifier()


def validate_registration(command):
    """Raise ``ValidationError`` for the first rule the form data breaks."""
    if any(not str(getattr(command, field) or "").strip() for field in _REQUIRED_FIELDS):
        raise ValidationError({"registration": ["All fields are required"]})

    if command.password != command.confirm_password:
        raise ValidationError({"password": ["Passwords do not match"]})

    if len(command.password) < MIN_PASSWORD_LENGTH:
        raise ValidationError({"password": [f"Password must be at least {MIN_PASSWORD_LENGTH} characters"]})


@easyorder.command_handler(part_of=User)
class RegisterUserHandler:
    @handle(RegisterUser)
    def register_user(self, command):
        validate_registration(command)

        user = User.register(
            username=command.username,
            email=command.email,
            password=command.password,
            role=UserRole.USER.value,
            region_id=command.region_id,
            cnpj=command.cnpj,
            address=command.address,
            city=command.city,
            state=command.state,
            cep=command.cep,
        )
        current_domain.repository_for(User).add(user)
        logger.info("User registered", user_id=str(user.id))
        return str(user.id)
