import pytest

from address_finder.config import Settings, load_dotenv_if_present
from address_finder.distance import DEFAULT_BASE_URL, DistanceMatrixClient


def test_defaults_without_environment() -> None:
    settings = Settings.from_env()

    assert settings.google_maps_api_key is None
    assert settings.distance_matrix_url == DEFAULT_BASE_URL
    assert settings.max_addresses == 20
    assert settings.max_input_chars == 20_000
    assert settings.distance_client() is None


def test_environment_overrides(monkeypatch) -> None:
    monkeypatch.setenv("GOOGLE_MAPS_API_KEY", "abc")
    monkeypatch.setenv("ADDRESS_FINDER_MAX_ADDRESSES", "5")
    monkeypatch.setenv("ADDRESS_FINDER_HTTP_TIMEOUT", "2.5")
    monkeypatch.setenv("ADDRESS_FINDER_LOG_LEVEL", "debug")

    settings = Settings.from_env()
    assert settings.max_addresses == 5
    assert settings.http_timeout == 2.5
    assert settings.log_level == "DEBUG"

    client = settings.distance_client()
    assert isinstance(client, DistanceMatrixClient)
    assert client.api_key == "abc"
    assert client.timeout == 2.5


def test_invalid_numbers_raise(monkeypatch) -> None:
    monkeypatch.setenv("ADDRESS_FINDER_MAX_ADDRESSES", "twenty")
    with pytest.raises(RuntimeError, match="ADDRESS_FINDER_MAX_ADDRESSES"):
        Settings.from_env()


def test_out_of_range_values_raise(monkeypatch) -> None:
    monkeypatch.setenv("ADDRESS_FINDER_MAX_ADDRESSES", "0")
    with pytest.raises(RuntimeError):
        Settings.from_env()


def test_dotenv_fills_only_missing_variables(monkeypatch, tmp_path) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text(
        "# comment\n"
        "GOOGLE_MAPS_API_KEY='from-file'\n"
        "ADDRESS_FINDER_MAX_ADDRESSES=7\n"
        "not a pair\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("ADDRESS_FINDER_MAX_ADDRESSES", "3")
    monkeypatch.setenv("ADDRESS_FINDER_ENV_FILE", str(env_file))

    assert load_dotenv_if_present() == env_file

    settings = Settings.from_env(load_dotenv=False)
    assert settings.google_maps_api_key == "from-file"
    assert settings.max_addresses == 3


def test_missing_dotenv_is_ignored(tmp_path) -> None:
    assert load_dotenv_if_present(tmp_path / "nope.env") is None


def test_api_host_and_port_defaults() -> None:
    settings = Settings.from_env()
    assert settings.api_host == "0.0.0.0"
    assert settings.api_port == 8000


def test_api_host_and_port_from_environment(monkeypatch) -> None:
    monkeypatch.setenv("ADDRESS_FINDER_API_HOST", "127.0.0.1")
    monkeypatch.setenv("ADDRESS_FINDER_API_PORT", "9001")

    settings = Settings.from_env()
    assert settings.api_host == "127.0.0.1"
    assert settings.api_port == 9001


@pytest.mark.parametrize("raw", ["0", "70000", "http"])
def test_invalid_api_port_raises(monkeypatch, raw) -> None:
    monkeypatch.setenv("ADDRESS_FINDER_API_PORT", raw)
    with pytest.raises(RuntimeError, match="ADDRESS_FINDER_API_PORT"):
        Settings.from_env()
