"""Unit tests for pagination, tokens, ownership and mail."""

from datetime import UTC, datetime, timedelta
from types import SimpleNamespace

import pytest

from cookbook.config import Settings
from cookbook.exceptions import Forbidden, InternalError, NotFound
from cookbook.services.auth import InvalidTokenError, TokenService
from cookbook.services.images import safe_file_stem
from cookbook.services.mailer import MailerService
from cookbook.services.ownership import authorize_delete, authorize_read, require_found
from cookbook.services.pagination import MAX_VALUE, Pagination, total_pages


class TestPagination:
    def test_defaults(self):
        pagination = Pagination.parse()
        assert pagination.page == 1
        assert pagination.limit == 4
        assert pagination.offset == 0

    def test_invalid_values_fall_back(self):
        assert Pagination.parse("0", "x") == Pagination(1, 4)
        assert Pagination.parse("-2", "0") == Pagination(1, 4)

    def test_offset(self):
        assert Pagination.parse("3", "5").offset == 10

    def test_total_pages(self):
        assert total_pages(0, 4) == 0
        assert total_pages(4, 4) == 1
        assert total_pages(5, 4) == 2

    def test_huge_values_are_clamped(self):
        pagination = Pagination.parse("99999999999999999999", "99999999999999999999")
        assert pagination.page == MAX_VALUE
        assert pagination.limit == MAX_VALUE
        assert pagination.offset < 2**63

    def test_is_past_end(self):
        assert Pagination(1, 4).is_past_end(0)
        assert not Pagination(1, 4).is_past_end(1)
        assert Pagination(3, 4).is_past_end(8)


class TestTokenService:
    def test_round_trip(self):
        tokens = TokenService("secret")
        assert tokens.verify(tokens.issue(42)) == 42

    def test_tokens_are_unique(self):
        tokens = TokenService("secret")
        now = datetime.now(UTC)
        assert tokens.issue(1, now=now) != tokens.issue(1, now=now)

    def test_expired(self):
        tokens = TokenService("secret", expires_minutes=60)
        token = tokens.issue(1, now=datetime.now(UTC) - timedelta(minutes=61))
        with pytest.raises(InvalidTokenError):
            tokens.verify(token)

    def test_foreign_signature(self):
        token = TokenService("other-secret").issue(1)
        with pytest.raises(InvalidTokenError):
            TokenService("secret").verify(token)

    def test_garbage(self):
        with pytest.raises(InvalidTokenError):
            TokenService("secret").verify("garbage")


class TestOwnership:
    def test_require_found(self):
        with pytest.raises(NotFound):
            require_found(None)

    def test_catalog_resource_readable_not_deletable(self):
        resource = SimpleNamespace(owner_id=None)
        authorize_read(resource, 1)
        with pytest.raises(Forbidden):
            authorize_delete(resource, 1)

    def test_owned_resource(self):
        resource = SimpleNamespace(owner_id=7)
        authorize_read(resource, 7)
        authorize_delete(resource, 7)
        with pytest.raises(Forbidden):
            authorize_read(resource, 8)
        with pytest.raises(Forbidden):
            authorize_delete(resource, 8)

    def test_missing_resource_is_a_programming_error(self):
        with pytest.raises(InternalError):
            authorize_read(None, 1)
        with pytest.raises(InternalError):
            authorize_delete(None, 1)


class TestMailer:
    def test_disabled_without_smtp_host(self):
        mailer = MailerService(Settings(smtp_host=None))
        assert mailer.enabled is False
        assert mailer.send_verification("a@example.com", "abc") is False

    def test_verification_message(self):
        mailer = MailerService(Settings(public_base_url="https://yummy.example.com/"))
        message = mailer.build_verification_message("a@example.com", "abc123")
        assert message["To"] == "a@example.com"
        assert message["Subject"] == "So Yummy - Verify your account"
        assert "https://yummy.example.com/users/verify/abc123" in message.get_body(
            ("plain",)
        ).get_content()


def test_safe_file_stem():
    assert safe_file_stem("Apple pie!") == "Apple_pie"
    assert safe_file_stem("../../etc") == "etc"
    assert safe_file_stem("!!!") == "untitled"


def test_production_settings_require_secret():
    with pytest.raises(ValueError):
        Settings(environment="production", database_url="postgresql://db/cookbook")


def test_default_database_url_names_driver():
    default = Settings.model_fields["database_url"].default
    assert default.startswith("postgresql+psycopg2://")
