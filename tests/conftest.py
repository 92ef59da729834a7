import pytest

_ENV_VARS = [
    "GOOGLE_MAPS_API_KEY",
    "ADDRESS_FINDER_DISTANCE_MATRIX_URL",
    "ADDRESS_FINDER_HTTP_TIMEOUT",
    "ADDRESS_FINDER_MAX_ADDRESSES",
    "ADDRESS_FINDER_MAX_INPUT_CHARS",
    "ADDRESS_FINDER_LOG_LEVEL",
    "ADDRESS_FINDER_API_HOST",
    "ADDRESS_FINDER_API_PORT",
]


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    """Keep a developer's real environment and `.env` out of the tests."""
    for name in _ENV_VARS:
        # setenv first so monkeypatch restores the original state afterwards,
        # even for variables that were unset and later filled from a `.env`.
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    monkeypatch.setenv("ADDRESS_FINDER_ENV_FILE", str(tmp_path / "missing.env"))
    yield
