"""Tests for environment configuration loading."""

import pytest

from talks_indexer.config import Mode, SearchBackend, load_config
from talks_indexer.errors import ConfigError


class TestLoadConfig:
    """Config is read from a mapping of environment variables."""

    def test_defaults(self):
        config = load_config({})
        assert config.mode == Mode.PRODUCTION
        assert not config.is_development
        assert config.http.addr == "0.0.0.0:8080"
        assert config.moresleep.url == "http://localhost:8082"
        assert config.elasticsearch.url == "http://localhost:9200"
        assert config.index.private == "javazone_private"
        assert config.index.public == "javazone_public"
        assert config.search_backend == SearchBackend.ELASTICSEARCH
        assert not config.moresleep.has_credentials
        assert config.moresleep.auth is None
        assert not config.algolia.is_configured

    def test_custom_values(self):
        config = load_config({
            "MODE": "development",
            "HTTP_HOST": "127.0.0.1",
            "HTTP_PORT": "9090",
            "MORESLEEP_URL": "https://sleepingpill.javazone.no",
            "MORESLEEP_USER": "indexer",
            "MORESLEEP_PASSWORD": "secret",
            "ELASTICSEARCH_URL": "https://es.example.com",
            "PRIVATE_INDEX": "talks_private",
            "PUBLIC_INDEX": "talks_public",
            "SEARCH_BACKEND": "algolia",
            "ALGOLIA_APP_ID": "APPID",
            "ALGOLIA_API_KEY": "search-key",
        })
        assert config.is_development
        assert config.http.addr == "127.0.0.1:9090"
        assert config.moresleep.has_credentials
        assert config.moresleep.user == "indexer"
        assert config.elasticsearch.url == "https://es.example.com"
        assert not config.elasticsearch.has_credentials
        assert (config.index.private, config.index.public) == ("talks_private", "talks_public")
        assert config.search_backend == SearchBackend.ALGOLIA
        assert config.algolia.is_configured
        assert config.algolia.app_id == "APPID"
        assert config.moresleep.auth == ("indexer", "secret")

    def test_empty_values_fall_back_to_defaults(self):
        config = load_config({"HTTP_PORT": "", "PRIVATE_INDEX": "", "MODE": ""})
        assert config.http.port == 8080
        assert config.index.private == "javazone_private"
        assert config.mode == Mode.PRODUCTION

    def test_user_without_password_has_no_credentials(self):
        config = load_config({"ELASTICSEARCH_USER": "elastic"})
        assert not config.elasticsearch.has_credentials

    @pytest.mark.parametrize("env", [
        {"HTTP_PORT": "not-a-port"},
        {"HTTP_PORT": "0"},
        {"HTTP_PORT": "70000"},
        {"MODE": "staging"},
        {"SEARCH_BACKEND": "solr"},
    ])
    def test_invalid_values_raise_config_error(self, env: dict):
        with pytest.raises(ConfigError, match="invalid configuration"):
            load_config(env)
