import pytest

from salesforce.config import ApiConfig, connection_from_env, load_api_config
from salesforce.errors import ConfigurationError
from salesforce.model import Connection


def test_connection_strips_whitespace_and_hides_token():
    conn = Connection(instance_url=" https://na1.salesforce.com ", access_token=" secret ")

    assert conn.instance_url == "https://na1.salesforce.com"
    assert conn.access_token == "secret"
    assert "secret" not in repr(conn)


@pytest.mark.parametrize(
    "payload",
    [
        {"instance_url": "", "access_token": "secret"},
        {"instance_url": "https://na1.salesforce.com", "access_token": "   "},
        {"instance_url": "https://na1.salesforce.com"},
    ],
)
def test_connection_requires_url_and_token(payload):
    with pytest.raises(ValueError):
        Connection(**payload)


def test_connection_is_immutable():
    conn = Connection(instance_url="https://na1.salesforce.com", access_token="secret")

    with pytest.raises(ValueError):
        conn.access_token = "other"


def test_api_prefix_defaults_and_normalization():
    assert ApiConfig().api_prefix == "/services/data/v29.0/"
    assert ApiConfig(api_root="services/data/", api_version="/v58.0/").api_prefix == "/services/data/v58.0/"
    assert ApiConfig().api_path("chatter/groups") == "/services/data/v29.0/chatter/groups"


def test_load_api_config_from_env(monkeypatch):
    monkeypatch.setenv("SALESFORCE_API_VERSION", "v60.0")
    monkeypatch.setenv("SALESFORCE_TIMEOUT_SECONDS", "12.5")
    monkeypatch.setenv("SALESFORCE_FEED_PAGE_SIZE", "25")

    config = load_api_config()

    assert config.api_prefix == "/services/data/v60.0/"
    assert config.timeout_seconds == pytest.approx(12.5)
    assert config.feed_page_size == 25
    assert config.feed_sort == "LastModifiedDateDesc"


def test_load_api_config_rejects_bad_numbers(monkeypatch):
    monkeypatch.setenv("SALESFORCE_TIMEOUT_SECONDS", "soon")

    with pytest.raises(ConfigurationError):
        load_api_config()


def test_connection_from_env(monkeypatch):
    monkeypatch.setenv("SALESFORCE_INSTANCE_URL", "https://na1.salesforce.com")
    monkeypatch.setenv("SALESFORCE_ACCESS_TOKEN", "secret")

    conn = connection_from_env()

    assert conn == Connection(instance_url="https://na1.salesforce.com", access_token="secret")


def test_connection_from_env_reports_missing_values(monkeypatch):
    monkeypatch.delenv("SALESFORCE_INSTANCE_URL", raising=False)
    monkeypatch.setenv("SALESFORCE_ACCESS_TOKEN", "secret")

    with pytest.raises(ConfigurationError, match="SALESFORCE_INSTANCE_URL"):
        connection_from_env()
