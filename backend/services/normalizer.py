from models.status import CanonicalStatus, ContainerState


def normalize_state(state: ContainerState) -> CanonicalStatus:
    """
    Collapse the engine's run/health state into one of four labels:
    - not "running" -> exited (stale health info is ignored)
    - running, no healthcheck -> running
    - running, health "healthy" -> healthy
    - running, any other health status ("starting", "unhealthy", ...) -> unhealthy
    """
    if state.status != "running":
        return CanonicalStatus.EXITED

    if state.health is None:
        return CanonicalStatus.RUNNING

    if state.health.status == "healthy":
        return CanonicalStatus.HEALTHY

    return CanonicalStatus.UNHEALTHY
