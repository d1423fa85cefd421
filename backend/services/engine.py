from typing import List, Protocol

from config import Settings
from models.status import ContainerState, ContainerSummary


class EngineClient(Protocol):
    """
    Read-only queries against the container engine.
    Implementations raise errors.EngineError subclasses, nothing else.
    """

    def list_containers(self) -> List[ContainerSummary]:
        """
        All containers, stopped ones included.
        """
        ...

    def inspect_container(self, container_id: str) -> ContainerState:
        ...


def build_engine_client(settings: Settings) -> EngineClient:
    """
    Pick the engine binding configured by ENGINE_MODE.
    """
    if settings.engine_mode == "socket":
        from services.engine_socket import SocketEngineClient

        return SocketEngineClient(
            base_url=settings.docker_host,
            timeout=settings.engine_timeout,
        )

    if settings.engine_mode == "cli":
        from services.engine_cli import CliEngineClient

        return CliEngineClient(
            binary=settings.engine_binary,
            timeout=settings.engine_timeout,
        )

    raise ValueError(f"Unknown engine mode: {settings.engine_mode!r}")
