import pytest
from pydantic import ValidationError

from config import Settings
from services.engine import build_engine_client
from services.engine_cli import CliEngineClient
from services.engine_socket import SocketEngineClient

_ENV_VARS = (
    "HOST", "PORT", "ENGINE_MODE", "DOCKER_HOST", "ENGINE_BINARY", "ENGINE_TIMEOUT",
    "INSPECT_WORKERS", "REQUEST_TIMEOUT", "RATE_LIMIT", "LOG_LEVEL",
)


@pytest.fixture
def clean_env(monkeypatch):
    for var in _ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    return monkeypatch


def test_defaults(clean_env):
    settings = Settings.from_env()

    assert settings.host == "0.0.0.0"
    assert settings.port == 9066
    assert settings.engine_mode == "socket"
    assert settings.docker_host == "unix:///var/run/docker.sock"
    assert settings.engine_timeout == 5.0
    assert settings.request_timeout == 10.0
    assert settings.rate_limit == "2/second"


def test_reads_environment(clean_env):
    clean_env.setenv("PORT", "8080")
    clean_env.setenv("ENGINE_MODE", "cli")
    clean_env.setenv("ENGINE_BINARY", "podman")
    clean_env.setenv("ENGINE_TIMEOUT", "2.5")
    clean_env.setenv("INSPECT_WORKERS", "8")

    settings = Settings.from_env()

    assert settings.port == 8080
    assert settings.engine_mode == "cli"
    assert settings.engine_binary == "podman"
    assert settings.engine_timeout == 2.5
    assert settings.inspect_workers == 8


def test_empty_port_falls_back_to_default(clean_env):
    clean_env.setenv("PORT", "")

    assert Settings.from_env().port == 9066


@pytest.mark.parametrize("var, value", [
    ("PORT", "not-a-port"),
    ("PORT", "70000"),
    ("ENGINE_MODE", "ssh"),
    ("ENGINE_TIMEOUT", "0"),
])
def test_invalid_values_are_rejected(clean_env, var, value):
    clean_env.setenv(var, value)

    with pytest.raises(ValidationError):
        Settings.from_env()


def test_builds_socket_client():
    engine = build_engine_client(Settings(docker_host="unix:///run/podman/podman.sock"))

    assert isinstance(engine, SocketEngineClient)
    assert engine.base_url == "unix:///run/podman/podman.sock"


def test_builds_cli_client():
    engine = build_engine_client(Settings(engine_mode="cli", engine_binary="podman", engine_timeout=3))

    assert isinstance(engine, CliEngineClient)
    assert engine.binary == "podman"
    assert engine.timeout == 3


def test_unknown_mode_raises():
    with pytest.raises(ValueError):
        build_engine_client(Settings.model_construct(engine_mode="ssh"))
