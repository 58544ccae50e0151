"""Credential checks and password-reset requests against the user directory."""

from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from easyorder.identity.user import User
from easyorder.utils.logging import get_logger

logger = get_logger(__name__)


def list_users():
    return current_domain.repository_for(User)._dao.query.all().items


def find_user(user_id):
    """Return the user with ``user_id``, or ``None`` when it is not in the directory."""
    if not user_id:
        return None
    try:
        return current_domain.repository_for(User).get(user_id)
    except ObjectNotFoundError:
        return None


def authenticate(identifier, password):
    """Return the user whose username or email and password match.

    Raises:
        ValidationError: when a field is blank or no user matches.
    """
    if not identifier or not password:
        raise ValidationError({"credentials": ["Please fill in all fields"]})

    user = next((u for u in list_users() if u.matches_credentials(identifier, password)), None)
    if user is None:
        logger.info("Login rejected", identifier=identifier)
        raise ValidationError({"credentials": ["Invalid username or password"]})

    logger.info("User authenticated", user_id=str(user.id))
    return user


def request_password_reset(email):
    """Record a password-reset request. No message is actually sent."""
    if not email:
        raise ValidationError({"email": ["Email is required"]})

    logger.info("Password reset link requested", email=email)
