"""Domain events for the User aggregate."""

from protean.fields import DateTime, Identifier, String

from easyorder.domain import easyorder


@easyorder.event(part_of="User")
class UserRegistered:
    """A user account was created, by self-registration or by an admin."""

    __version__ = 1

    user_id = Identifier(required=True)
    username = String(required=True)
    email = String(required=True)
    role = String(required=True)
    region_id = Identifier()
    registered_at = DateTime(required=True)


@easyorder.event(part_of="User")
class UserDetailsUpdated:
    """An admin changed a user's profile, role, region or credentials."""

    __version__ = 1

    user_id = Identifier(required=True)
    username = String(required=True)
    email = String(required=True)
    role = String(required=True)
    region_id = Identifier()
    updated_at = DateTime(required=True)


@easyorder.event(part_of="User")
class UserDeleted:
    """A user account was removed from the directory."""

    __version__ = 1

    user_id = Identifier(required=True)
    deleted_by = Identifier()
    deleted_at = DateTime(required=True)
