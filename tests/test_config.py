"""
Unit tests for core/config.py
"""

import pytest

from core.config import MagentoConfig
from core.errors import ConfigError
from core.pagination import DEFAULT_FETCH_PAGE_SIZE


class TestFromEnv:

    def test_defaults(self):
        config = MagentoConfig.from_env({})
        assert config.base_url == ""
        assert config.api_token == ""
        assert config.verify_ssl is True
        assert config.timeout == 30.0
        assert config.fetch_page_size == DEFAULT_FETCH_PAGE_SIZE
        assert config.max_pages == 0
        assert config.log_level == "INFO"

    def test_reads_values(self):
        config = MagentoConfig.from_env({
            "MAGENTO_BASE_URL": "https://shop.example.com/rest/V1/",
            "MAGENTO_API_TOKEN": " abc123 ",
            "MAGENTO_TIMEOUT": "12.5",
            "MAGENTO_FETCH_PAGE_SIZE": "250",
            "MAGENTO_MAX_PAGES": "40",
            "MAGENTO_LOG_LEVEL": "debug",
        })
        assert config.base_url == "https://shop.example.com/rest/V1"
        assert config.api_token == "abc123"
        assert config.timeout == 12.5
        assert config.fetch_page_size == 250
        assert config.max_pages == 40
        assert config.log_level == "DEBUG"

    @pytest.mark.parametrize("value", ["false", "0", "no", "OFF"])
    def test_verify_ssl_can_be_disabled(self, value):
        assert MagentoConfig.from_env({"MAGENTO_VERIFY_SSL": value}).verify_ssl is False

    def test_node_tls_flag_disables_verification(self):
        assert MagentoConfig.from_env({"NODE_TLS_REJECT_UNAUTHORIZED": "0"}).verify_ssl is False
        assert MagentoConfig.from_env({"NODE_TLS_REJECT_UNAUTHORIZED": "1"}).verify_ssl is True

    def test_invalid_number(self):
        with pytest.raises(ConfigError, match="MAGENTO_TIMEOUT"):
            MagentoConfig.from_env({"MAGENTO_TIMEOUT": "soon"})

    def test_page_size_must_be_positive(self):
        with pytest.raises(ConfigError):
            MagentoConfig.from_env({"MAGENTO_FETCH_PAGE_SIZE": "0"})

    def test_negative_max_pages_rejected(self):
        with pytest.raises(ConfigError):
            MagentoConfig.from_env({"MAGENTO_MAX_PAGES": "-1"})

    def test_reads_os_environ_by_default(self, monkeypatch):
        monkeypatch.setenv("MAGENTO_BASE_URL", "https://env.example.com/rest/V1")
        monkeypatch.setenv("MAGENTO_API_TOKEN", "from-env")
        config = MagentoConfig.from_env()
        assert config.base_url == "https://env.example.com/rest/V1"
        assert config.api_token == "from-env"

    def test_config_is_frozen(self):
        config = MagentoConfig()
        with pytest.raises(AttributeError):
            config.base_url = "x"
