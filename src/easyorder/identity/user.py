"""User aggregate — an account in the storefront's user directory.

``username`` doubles as the company name on orders and exports. Credentials
are an opaque string compared by equality; there is no hashing and no security
model behind them.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.fields import DateTime, Identifier, String

from easyorder.domain import easyorder
from easyorder.identity.events import UserDeleted, UserDetailsUpdated, UserRegistered


class UserRole(Enum):
    ADMIN = "admin"
    USER = "user"


@easyorder.aggregate
class User:
    username = String(required=True, max_length=255)
    email = String(required=True, max_length=254)
    password = String(max_length=255)
    role = String(choices=UserRole, default=UserRole.USER.value)
    region_id = Identifier()
    cnpj = String(max_length=20)
    address = String(max_length=255)
    city = String(max_length=100)
    state = String(max_length=50)
    cep = String(max_length=10)
    registered_at = DateTime()
    updated_at = DateTime()

    @property
    def is_admin(self):
        return self.role == UserRole.ADMIN.value

    @classmethod
    def register(
        cls,
        username,
        email,
        password,
        role=UserRole.USER.value,
        region_id=None,
        cnpj=None,
        address=None,
        city=None,
        state=None,
        cep=None,
        user_id=None,
    ):
        now = datetime.now(UTC)
        attributes = {
            "username": username,
            "email": email,
            "password": password,
            "role": role or UserRole.USER.value,
            "region_id": region_id or None,
            "cnpj": cnpj,
            "address": address,
            "city": city,
            "state": state,
            "cep": cep,
            "registered_at": now,
            "updated_at": now,
        }
        if user_id is not None:
            attributes["id"] = user_id

        user = cls(**attributes)
        user.raise_(
            UserRegistered(
                user_id=str(user.id),
                username=user.username,
                email=user.email,
                role=user.role,
                region_id=user.region_id,
                registered_at=now,
            )
        )
        return user

    def update_details(self, username, email, password, role=None, region_id=None, cnpj=None, city=None, state=None):
        """Replace the admin-editable fields; address and CEP are kept as registered.

        A missing ``role`` keeps the current one.
        """
        self.username = username
        self.email = email
        self.password = password
        self.role = role or self.role
        self.region_id = region_id or None
        self.cnpj = cnpj
        self.city = city
        self.state = state
        now = datetime.now(UTC)
        self.updated_at = now

        self.raise_(
            UserDetailsUpdated(
                user_id=str(self.id),
                username=self.username,
                email=self.email,
                role=self.role,
                region_id=self.region_id,
                updated_at=now,
            )
        )

    def matches_credentials(self, identifier, password):
        """Username or email (case-insensitive) plus an exact password match."""
        if not identifier or password is None:
            return False

        identifier = identifier.lower()
        known = {self.username.lower(), (self.email or "").lower()}
        return identifier in known and self.password == password

    def mark_deleted(self, deleted_by=None):
        self.raise_(
            UserDeleted(
                user_id=str(self.id),
                deleted_by=deleted_by,
                deleted_at=datetime.now(UTC),
            )
        )
