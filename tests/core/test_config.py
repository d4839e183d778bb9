"""Tests for DuplexCopyConfig validation."""

import logging

import pytest
from pydantic import ValidationError

from duplex_copy.core.config import DuplexCopyConfig
from duplex_copy.core.constants import DEFAULT_BASE_URL, DEFAULT_PAGE_SIZE
from duplex_copy.core.exceptions import DuplexCopyConfigurationError


class TestDuplexCopyConfig:
    def test_defaults(self):
        config = DuplexCopyConfig()
        assert config.base_url == DEFAULT_BASE_URL
        assert config.page_size == DEFAULT_PAGE_SIZE
        assert config.request_timeout == 30.0
        assert config.logging_level == logging.WARNING
        assert config.app_id is None

    def test_base_url_trailing_slash_removed(self):
        config = DuplexCopyConfig(base_url="https://open.example.test/open-apis/")
        assert config.base_url == "https://open.example.test/open-apis"

    @pytest.mark.parametrize("page_size", [0, -1])
    def test_rejects_non_positive_page_size(self, page_size):
        with pytest.raises(ValidationError, match="page_size"):
            DuplexCopyConfig(page_size=page_size)

    def test_rejects_non_positive_timeout(self):
        with pytest.raises(ValidationError, match="request_timeout"):
            DuplexCopyConfig(request_timeout=0)


class TestRequireCredentials:
    def test_complete(self):
        DuplexCopyConfig(app_id="cli_app", app_secret="secret", app_token="bascnAPP").require_credentials()

    def test_lists_every_missing_value(self):
        with pytest.raises(DuplexCopyConfigurationError) as exc_info:
            DuplexCopyConfig(app_secret="secret").require_credentials()
        assert str(exc_info.value) == "Missing configuration values: app_id, app_token"

    def test_empty_strings_count_as_missing(self):
        with pytest.raises(DuplexCopyConfigurationError, match="app_id"):
            DuplexCopyConfig(app_id="", app_secret="secret", app_token="bascnAPP").require_credentials()
