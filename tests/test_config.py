import pytest

from mcp_telegram_bot.client import DEFAULT_API_BASE
from mcp_telegram_bot.config import AppConfig, load_config
from mcp_telegram_bot.errors import ConfigurationError


def test_defaults():
    config = load_config({"TELEGRAM_BOT_TOKEN": "abc:123"})

    assert config == AppConfig(telegram_token="abc:123")
    assert config.api_base == DEFAULT_API_BASE
    assert config.request_timeout == 30.0
    assert config.long_poll_grace == 10.0
    assert (config.transport, config.host, config.port, config.log_level) == ("stdio", "127.0.0.1", 8000, "INFO")


@pytest.mark.parametrize("env", [{}, {"TELEGRAM_BOT_TOKEN": ""}, {"TELEGRAM_BOT_TOKEN": "  "}])
def test_token_required(env):
    with pytest.raises(ConfigurationError, match="TELEGRAM_BOT_TOKEN"):
        load_config(env)


def test_environment_values():
    config = load_config(
        {
            "TELEGRAM_BOT_TOKEN": "abc:123",
            "TELEGRAM_API_BASE": "http://localhost:8081/",
            "TELEGRAM_REQUEST_TIMEOUT": "12.5",
            "TELEGRAM_LONG_POLL_GRACE": "3",
            "MCP_TRANSPORT": "SSE",
            "MCP_HOST": "0.0.0.0",
            "MCP_PORT": "9000",
            "LOG_LEVEL": "debug",
        }
    )

    assert config.api_base == "http://localhost:8081"
    assert config.request_timeout == 12.5
    assert config.long_poll_grace == 3.0
    assert config.transport == "sse"
    assert config.host == "0.0.0.0"
    assert config.port == 9000
    assert config.log_level == "DEBUG"


@pytest.mark.parametrize(
    "name, value",
    [
        ("TELEGRAM_REQUEST_TIMEOUT", "soon"),
        ("TELEGRAM_REQUEST_TIMEOUT", "0"),
        ("MCP_PORT", "80.5"),
        ("MCP_PORT", "-1"),
        ("MCP_TRANSPORT", "websocket"),
        ("LOG_LEVEL", "LOUD"),
    ],
)
def test_invalid_values(name, value):
    with pytest.raises(ConfigurationError):
        load_config({"TELEGRAM_BOT_TOKEN": "abc:123", name: value})


def test_repr_hides_token():
    config = AppConfig(telegram_token="secret-token")
    assert "secret-token" not in repr(config)


def test_overrides_skip_none_and_validate():
    config = AppConfig(telegram_token="abc:123")

    updated = config.with_overrides(transport="streamable-http", host=None, port=9100)
    assert updated.transport == "streamable-http"
    assert updated.host == "127.0.0.1"
    assert updated.port == 9100

    with pytest.raises(ConfigurationError):
        config.with_overrides(transport="carrier-pigeon")


def test_reads_process_environment(monkeypatch):
    monkeypatch.setenv("TELEGRAM_BOT_TOKEN", "from-env")
    assert load_config(dotenv=False).telegram_token == "from-env"
