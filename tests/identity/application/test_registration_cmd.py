"""Application tests for self-service registration."""

import pytest
from easyorder.identity.authentication import list_users
from easyorder.identity.registration import RegisterUser
from easyorder.identity.user import User, UserRole
from protean import current_domain
from protean.exceptions import ValidationError


def _form(**overrides):
    form = {
        "username": "Acme Ltda",
        "cnpj": "12.345.678/0001-99",
        "email": "buyer@acme.com",
        "address": "Rua XV, 10",
        "city": "Curitiba",
        "cep": "80000-000",
        "state": "PR",
        "password": "secret",
        "confirm_password": "secret",
        "region_id": "route-001",
    }
    form.update(overrides)
    return form


def _register(**overrides):
    return current_domain.process(RegisterUser(**_form(**overrides)), asynchronous=False)


class TestRegisterUserCommand:
    def test_register_persists_user(self):
        user_id = _register()
        user = current_domain.repository_for(User).get(user_id)
        assert user.username == "Acme Ltda"
        assert user.cnpj == "12.345.678/0001-99"
        assert str(user.region_id) == "route-001"

    def test_registered_users_are_never_admins(self):
        user_id = _register()
        assert current_domain.repository_for(User).get(user_id).role == UserRole.USER.value

    @pytest.mark.parametrize("field", ["username", "cnpj", "email", "address", "city", "cep", "state", "region_id"])
    def test_every_field_is_required(self, field):
        with pytest.raises(ValidationError) as exc:
            _register(**{field: None})
        assert "All fields are required" in exc.value.messages["registration"]
        assert list_users() == []

    def test_whitespace_only_field_counts_as_missing(self):
        with pytest.raises(ValidationError):
            _register(city="   ")

    def test_password_confirmation_must_match(self):
        with pytest.raises(ValidationError) as exc:
            _register(confirm_password="different")
        assert "Passwords do not match" in exc.value.messages["password"]

    def test_password_minimum_length(self):
        with pytest.raises(ValidationError) as exc:
            _register(password="ab", confirm_password="ab")
        assert "Password must be at least 3 characters" in exc.value.messages["password"]
        assert list_users() == []
