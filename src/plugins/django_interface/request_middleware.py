from medtrack_core.adapters.context.request_context import bind_request, reset_request


class RequestContextMiddleware:
    """Binds a request id to every log line emitted while serving the request."""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        tokens = bind_request(request)
        try:
            response = self.get_response(request)
        finally:
            reset_request(tokens)
        response["X-Request-ID"] = request.request_id
        return response
