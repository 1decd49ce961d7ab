from .queues import RenderState

STATE_ATTR = "pack_tags"


class PackRenderStateMiddleware:
    """Fresh pack tag queues for each request."""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        setattr(request, STATE_ATTR, RenderState())
        return self.get_response(request)
