import logging
import threading
from typing import List, Optional

import docker
import requests
from docker.errors import APIError, DockerException, NotFound
from pydantic import TypeAdapter, ValidationError

from errors import (
    ContainerNotFound,
    EngineProtocolError,
    EngineUnavailable,
)
from models.status import ContainerState, ContainerSummary

log = logging.getLogger(__name__)

_SUMMARY_LIST = TypeAdapter(List[ContainerSummary])


class SocketEngineClient:
    """
    Engine binding over the management API socket
    (GET /containers/json?all=true, GET /containers/{id}/json).

    The low-level docker.APIClient is created on first use and then shared
    by every request; requests' connection pool handles concurrent calls.
    """

    def __init__(
        self,
        base_url: str = "unix:///var/run/docker.sock",
        timeout: float = 5.0,
        api_client: Optional[docker.APIClient] = None,
    ):
        self.base_url = base_url
        self.timeout = timeout
        self._api = api_client
        self._api_lock = threading.Lock()

    def _get_api(self) -> docker.APIClient:
        with self._api_lock:
            if self._api is None:
                try:
                    # version="auto" asks the daemon which API version it speaks
                    self._api = docker.APIClient(
                        base_url=self.base_url,
                        version="auto",
                        timeout=self.timeout,
                    )
                except DockerException as e:
                    raise EngineUnavailable(
                        f"cannot connect to engine at {self.base_url}: {e}"
                    ) from e
                log.info("connected to container engine at %s", self.base_url)
            return self._api

    def list_containers(self) -> List[ContainerSummary]:
        try:
            payload = self._get_api().containers(all=True)
        except requests.exceptions.JSONDecodeError as e:
            raise EngineProtocolError(f"failed to parse containers list: {e}") from e
        except APIError as e:
            raise EngineProtocolError(f"failed to list containers: {e}") from e
        except (DockerException, requests.exceptions.RequestException) as e:
            raise EngineUnavailable(f"failed to list containers: {e}") from e

        try:
            return _SUMMARY_LIST.validate_python(payload)
        except ValidationError as e:
            raise EngineProtocolError(f"failed to parse containers list: {e}") from e

    def inspect_container(self, container_id: str) -> ContainerState:
        try:
            info = self._get_api().inspect_container(container_id)
        except requests.exceptions.JSONDecodeError as e:
            raise EngineProtocolError(f"failed to parse container info: {e}") from e
        except NotFound as e:
            raise ContainerNotFound(f"container {container_id} not found") from e
        except APIError as e:
            raise EngineProtocolError(f"failed to inspect container: {e}") from e
        except (DockerException, requests.exceptions.RequestException) as e:
            raise EngineUnavailable(f"failed to inspect container: {e}") from e

        if not isinstance(info, dict):
            raise EngineProtocolError(
                f"failed to parse container info: expected object, got {type(info).__name__}"
            )
        try:
            return ContainerState.model_validate(info.get("State"))
        except ValidationError as e:
            raise EngineProtocolError(f"failed to parse container info: {e}") from e
