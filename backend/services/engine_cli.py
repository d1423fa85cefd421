import json
import logging
import subprocess
from typing import List

from pydantic import ValidationError

from errors import (
    ContainerNotFound,
    EngineProtocolError,
    EngineUnavailable,
)
from models.status import ContainerState, ContainerSummary

log = logging.getLogger(__name__)

# stderr fragments the docker/podman CLIs print for a missing inspect target
_NOT_FOUND_MARKERS = ("no such object", "no such container")
# and the ones they print when the daemon behind them is unreachable
_UNAVAILABLE_MARKERS = ("cannot connect to", "is the docker daemon running")


class CliEngineClient:
    """
    Engine binding that shells out to the docker (or podman) CLI.
    `ps --format {{.Names}}` gives no ids, so the name doubles as the id.
    """

    def __init__(self, binary: str = "docker", timeout: float = 5.0):
        self.binary = binary
        self.timeout = timeout

    def _run(self, args: List[str]) -> str:
        cmd = [self.binary, *args]
        log.debug("running %s", " ".join(cmd))
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                check=True,
                timeout=self.timeout,
            )
        except OSError as e:
            raise EngineUnavailable(f"cannot run {self.binary}: {e}") from e
        except subprocess.TimeoutExpired as e:
            raise EngineUnavailable(
                f"{self.binary} {args[0]} timed out after {self.timeout}s"
            ) from e
        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or "").strip()
            if any(marker in stderr.lower() for marker in _NOT_FOUND_MARKERS):
                raise ContainerNotFound(stderr) from e
            if any(marker in stderr.lower() for marker in _UNAVAILABLE_MARKERS):
                raise EngineUnavailable(stderr) from e
            raise EngineProtocolError(
                f"{self.binary} {args[0]} exited with status {e.returncode}: {stderr}"
            ) from e
        return result.stdout

    def list_containers(self) -> List[ContainerSummary]:
        output = self._run(["ps", "-a", "--format", "{{.Names}}"])

        summaries: List[ContainerSummary] = []
        for line in output.splitlines():
            name = line.strip()
            if not name:
                continue
            summaries.append(ContainerSummary(id=name, names=[name]))
        return summaries

    def inspect_container(self, container_id: str) -> ContainerState:
        output = self._run(["inspect", "--format", "{{json .State}}", container_id])

        try:
            return ContainerState.model_validate(json.loads(output))
        except json.JSONDecodeError as e:
            raise EngineProtocolError(f"failed to parse container state: {e}") from e
        except ValidationError as e:
            raise EngineProtocolError(f"failed to parse container state: {e}") from e
