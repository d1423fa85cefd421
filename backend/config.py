import os
from typing import Literal

from dotenv import load_dotenv
from pydantic import BaseModel, Field

# Load environment variables (PORT, ENGINE_MODE, etc.) from a local .env
load_dotenv()

DEFAULT_PORT = 9066
DEFAULT_DOCKER_HOST = "unix:///var/run/docker.sock"


class Settings(BaseModel):
    host: str = "0.0.0.0"
    port: int = Field(default=DEFAULT_PORT, ge=1, le=65535)

    # "socket" talks to the engine API, "cli" shells out to ENGINE_BINARY
    engine_mode: Literal["socket", "cli"] = "socket"
    docker_host: str = DEFAULT_DOCKER_HOST
    engine_binary: str = "docker"
    engine_timeout: float = Field(default=5.0, gt=0)
    inspect_workers: int = Field(default=4, ge=1)

    request_timeout: float = Field(default=10.0, gt=0)
    rate_limit: str = "2/second"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        """
        Build settings from environment variables. Unset or empty variables
        fall back to the field defaults.
        """
        env_map = {
            "host": "HOST",
            "port": "PORT",
            "engine_mode": "ENGINE_MODE",
            "docker_host": "DOCKER_HOST",
            "engine_binary": "ENGINE_BINARY",
            "engine_timeout": "ENGINE_TIMEOUT",
            "inspect_workers": "INSPECT_WORKERS",
            "request_timeout": "REQUEST_TIMEOUT",
            "rate_limit": "RATE_LIMIT",
            "log_level": "LOG_LEVEL",
        }
        values = {}
        for field_name, var in env_map.items():
            raw = os.getenv(var)
            if raw:
                values[field_name] = raw.strip()
        return cls(**values)
