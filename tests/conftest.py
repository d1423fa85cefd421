"""Shared fixtures: an in-memory engine client and app factories."""
import threading
from typing import Dict, Iterable, List, Optional

import pytest
from fastapi.testclient import TestClient

from app import create_app
from config import Settings
from errors import EngineError
from models.status import ContainerState, ContainerSummary


class FakeEngine:
    """
    In-memory EngineClient. `states` maps container id -> State payload
    (or an EngineError instance to raise on inspect).
    """

    def __init__(
        self,
        summaries: Iterable[ContainerSummary] = (),
        states: Optional[Dict[str, object]] = None,
        list_error: Optional[Exception] = None,
    ):
        self.summaries = list(summaries)
        self.states = states or {}
        self.list_error = list_error
        self.inspected: List[str] = []
        self._lock = threading.Lock()

    def list_containers(self) -> List[ContainerSummary]:
        if self.list_error is not None:
            raise self.list_error
        return list(self.summaries)

    def inspect_container(self, container_id: str) -> ContainerState:
        with self._lock:
            self.inspected.append(container_id)
        state = self.states[container_id]
        if isinstance(state, EngineError):
            raise state
        return ContainerState.model_validate(state)


def summary(container_id: str, *names: str) -> ContainerSummary:
    return ContainerSummary(id=container_id, names=list(names))


@pytest.fixture
def settings() -> Settings:
    # high ceiling so tests are never throttled unless they ask for it
    return Settings(rate_limit="1000/second", request_timeout=5.0)


@pytest.fixture
def make_client(settings):
    def _make(engine, **overrides) -> TestClient:
        app_settings = settings.model_copy(update=overrides)
        return TestClient(create_app(app_settings, engine=engine), raise_server_exceptions=False)

    return _make
