import uuid

import structlog


def bind_request(request):
    """
    Bind the request id (plus method and path) to the structlog context.
    An incoming `X-Request-ID` header is reused, otherwise a new one is generated.
    Returns the tokens needed by `reset_request`.
    """
    request.request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
    return structlog.contextvars.bind_contextvars(
        request_id=request.request_id,
        method=request.method,
        path=request.path,
    )


def reset_request(tokens):
    """Restore the log context that was active before `bind_request`."""
    structlog.contextvars.reset_contextvars(**tokens)
