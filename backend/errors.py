class EngineError(Exception):
    """
    Base class for failures talking to the container engine.
    """


class EngineUnavailable(EngineError):
    """
    Engine could not be reached (socket refused, CLI missing, timeout).
    """


class EngineProtocolError(EngineError):
    """
    Engine answered, but with a non-success status or a body we can't parse.
    """


class ContainerNotFound(EngineError):
    """
    Inspect target vanished between list and inspect.
    """


class AggregationFailed(Exception):
    """
    The list step failed, so no report can be built for this request.
    """
