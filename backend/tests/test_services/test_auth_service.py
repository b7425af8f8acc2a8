"""
Tests for AuthService and the security collaborators
"""
import uuid

import pytest

from finance_api.core.security import TokenIssuer
from finance_api.domain.entities import User, UserRole
from finance_api.services.auth import AuthService


@pytest.fixture
def service(user_store, hasher, tokens):
    return AuthService(user_store, hasher, tokens)


class TestRegister:
    def test_register_then_duplicate(self, service):
        first = service.register("a@b.com", "Passw0rd!", "Alice")
        second = service.register("a@b.com", "Other1234!", "Alice Again")

        assert first is not None
        assert first.email == "a@b.com"
        assert first.full_name == "Alice"
        assert second is None

    def test_duplicate_check_ignores_case(self, service):
        service.register("a@b.com", "Passw0rd!", "Alice")

        assert service.register("  A@B.COM ", "Passw0rd!", "Alice") is None

    def test_password_is_hashed(self, service, user_store, hasher):
        service.register("a@b.com", "Passw0rd!", "Alice")

        stored = user_store.get_by_email("a@b.com")
        assert stored.password_hash != "Passw0rd!"
        assert hasher.verify("Passw0rd!", stored.password_hash)

    def test_unique_constraint_race_reports_duplicate(self, user_store, hasher, tokens):
        user_store.add(User.create("a@b.com", hasher.hash("Passw0rd!"), "Alice"))

        class StaleStore:
            """Store whose existence check misses the concurrent insert."""

            def email_exists(self, email):
                return False

            def add(self, user):
                user_store.add(user)

        service = AuthService(StaleStore(), hasher, tokens)

        assert service.register("a@b.com", "Passw0rd!", "Alice") is None


class TestLogin:
    def test_login_success(self, service, user_store, tokens):
        registered = service.register("a@b.com", "Passw0rd!", "Alice")

        result = service.login("a@b.com", "Passw0rd!")

        assert result is not None
        assert result.user_id == registered.user_id
        assert result.access_token
        assert result.refresh_token
        assert result.expires_in == 3600
        assert result.token_type == "Bearer"
        assert user_store.get_by_email("a@b.com").last_login_at is not None

        claims = tokens.validate(result.access_token)
        assert claims["sub"] == str(registered.user_id)
        assert claims["email"] == "a@b.com"
        assert claims["role"] == UserRole.USER.value

    def test_wrong_password(self, service, user_store):
        service.register("a@b.com", "Passw0rd!", "Alice")

        assert service.login("a@b.com", "wrong") is None
        assert user_store.get_by_email("a@b.com").last_login_at is None

    def test_unknown_email(self, service):
        assert service.login("nobody@b.com", "Passw0rd!") is None

    @pytest.mark.parametrize("email,password", [("", "Passw0rd!"), ("a@b.com", ""), ("  ", "  ")])
    def test_blank_input(self, service, email, password):
        service.register("a@b.com", "Passw0rd!", "Alice")

        assert service.login(email, password) is None

    def test_inactive_user(self, service, user_store):
        registered = service.register("a@b.com", "Passw0rd!", "Alice")
        user = user_store.get_by_id(registered.user_id)
        user.is_active = False
        user_store.update(user)

        assert service.login("a@b.com", "Passw0rd!") is None


class TestSecurity:
    def test_verify_rejects_blank_and_malformed(self, hasher):
        assert not hasher.verify("", "hash")
        assert not hasher.verify("Passw0rd!", "")
        assert not hasher.verify("Passw0rd!", "not-a-bcrypt-hash")

    def test_token_signed_with_other_secret_is_rejected(self, tokens):
        foreign = TokenIssuer("other-secret").issue_access_token(uuid.uuid4(), "a@b.com", UserRole.USER)

        assert tokens.validate(foreign) is None
        assert tokens.validate("garbage") is None

    def test_expired_token_is_rejected(self):
        issuer = TokenIssuer("test-secret", expire_seconds=-10)
        token = issuer.issue_access_token(uuid.uuid4(), "a@b.com", UserRole.USER)

        assert issuer.validate(token) is None

    def test_refresh_tokens_are_random(self, tokens):
        assert tokens.issue_refresh_token() != tokens.issue_refresh_token()
