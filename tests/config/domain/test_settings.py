"""Tests for environment-driven settings and adapter selection."""

import pytest
from canteen.config import DEFAULT_JWT_SECRET, get_settings
from canteen.media import get_image_store, reset_image_store
from canteen.media.fake_store import FakeImageStore
from canteen.notifications.channel import get_channel, reset_channels
from canteen.notifications.channel.fake_email import FakeEmailAdapter


@pytest.fixture()
def fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestSettings:
    def test_reads_environment(self, monkeypatch, fresh_settings):
        monkeypatch.setenv("JWT_SECRET", "s3cret")
        monkeypatch.setenv("JWT_EXPIRE_HOURS", "2")
        monkeypatch.setenv("PROTEAN_ENV", "Production")

        settings = get_settings()
        assert settings.jwt_secret == "s3cret"
        assert settings.jwt_expire_hours == 2
        assert settings.is_production

    def test_defaults(self, monkeypatch, fresh_settings):
        monkeypatch.delenv("JWT_SECRET", raising=False)
        monkeypatch.delenv("RESET_TOKEN_TTL_MINUTES", raising=False)
        settings = get_settings()
        assert settings.jwt_secret == DEFAULT_JWT_SECRET
        assert settings.reset_token_ttl_minutes == 60


class TestAdapterSelection:
    def test_fake_adapters_by_default(self, monkeypatch):
        monkeypatch.delenv("EMAIL_BACKEND", raising=False)
        monkeypatch.delenv("IMAGE_STORE", raising=False)
        reset_channels()
        reset_image_store()

        assert isinstance(get_channel(), FakeEmailAdapter)
        assert isinstance(get_image_store(), FakeImageStore)
        assert get_channel() is get_channel()
