import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Tuple

from errors import AggregationFailed, EngineError
from models.status import ContainerSummary, StatusReport
from services.engine import EngineClient
from services.normalizer import normalize_state

log = logging.getLogger(__name__)

_MAX_WORKERS = 4  # max parallel inspect calls per pass


def display_name(summary: ContainerSummary) -> Optional[str]:
    """
    First engine name with one leading "/" removed.
    ["/web-1"] -> "web-1", [] -> None, ["/"] -> None
    """
    if not summary.names:
        return None

    name = summary.names[0]
    if name.startswith("/"):
        name = name[1:]
    return name or None


class StatusCollector:
    """
    Runs one aggregation pass: list every container, inspect each one in
    parallel and normalize its state. Containers whose inspect fails are left
    out of the report; only a failed list aborts the pass.
    """

    def __init__(self, engine: EngineClient, max_workers: int = _MAX_WORKERS):
        self.engine = engine
        self.max_workers = max_workers

    def collect_all(self) -> StatusReport:
        try:
            summaries = self.engine.list_containers()
        except EngineError as e:
            log.error("container list failed: %s", e)
            raise AggregationFailed(str(e)) from e

        targets: List[Tuple[str, str]] = []
        for summary in summaries:
            name = display_name(summary)
            if name is None:
                log.debug("skipping unnamed container %s", summary.id)
                continue
            targets.append((name, summary.id))

        report: StatusReport = {}
        if not targets:
            return report

        report_lock = threading.Lock()
        skipped = 0

        def _inspect_one(name: str, container_id: str) -> None:
            nonlocal skipped
            try:
                state = self.engine.inspect_container(container_id)
            except EngineError as e:
                log.debug("skipping container %s: %s", name, e)
                with report_lock:
                    skipped += 1
                return

            label = normalize_state(state)
            with report_lock:
                report[name] = label

        workers = min(self.max_workers, len(targets))
        with ThreadPoolExecutor(max_workers=workers) as ex:
            futures = [ex.submit(_inspect_one, name, cid) for name, cid in targets]
            for fut in futures:
                # engine errors are handled inside _inspect_one
                fut.result()

        if skipped:
            log.warning(
                "skipped %d of %d containers whose inspect failed",
                skipped, len(targets),
            )
        return report
