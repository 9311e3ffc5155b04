"""
Unit tests for environment-based configuration.
"""

import pytest

from core.config import DEFAULT_BASE_URL, N8nConfig, load_config
from core.errors import ConfigurationError


def test_missing_api_key_is_fatal():
    """No API key means no server"""
    with pytest.raises(ConfigurationError, match="N8N_API_KEY"):
        load_config({"N8N_URL": "https://n8n.example.com"})


def test_blank_api_key_is_treated_as_missing():
    with pytest.raises(ConfigurationError):
        load_config({"N8N_API_KEY": "   "})


def test_defaults():
    config = load_config({"N8N_API_KEY": "secret"})

    assert config.base_url == DEFAULT_BASE_URL
    assert config.timeout == 30
    assert config.debug is False


def test_api_url_strips_trailing_slash():
    config = load_config({"N8N_API_KEY": "secret", "N8N_URL": "https://n8n.example.com/"})

    assert config.api_url == "https://n8n.example.com/api/v1"


@pytest.mark.parametrize("value", ["1", "true", "TRUE", "yes", "on"])
def test_debug_flag_truthy_values(value):
    assert load_config({"N8N_API_KEY": "k", "N8N_DEBUG": value}).debug is True


def test_debug_flag_off_for_other_values():
    assert load_config({"N8N_API_KEY": "k", "N8N_DEBUG": "nope"}).debug is False


def test_custom_timeout():
    assert load_config({"N8N_API_KEY": "k", "N8N_TIMEOUT": "12.5"}).timeout == 12.5


@pytest.mark.parametrize("value", ["abc", "0", "-3"])
def test_invalid_timeout_rejected(value):
    with pytest.raises(ConfigurationError, match="N8N_TIMEOUT"):
        load_config({"N8N_API_KEY": "k", "N8N_TIMEOUT": value})


def test_config_is_immutable():
    config = N8nConfig(base_url="http://x", api_key="k")
    with pytest.raises(AttributeError):
        config.api_key = "other"
