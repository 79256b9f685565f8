from django.utils.deprecation import MiddlewareMixin
from rest_framework.renderers import JSONRenderer

from apps.api.validation import validate_request_context
from apps.common import get_logger

logger = get_logger(__name__).bind(component='api', layer='middleware')


class RequestValidationMiddleware(MiddlewareMixin):
    """
    Runs the per-view request checks (bearer token for customer endpoints,
    positive integer identifiers, catalog query flags) before the view is
    dispatched, so rejected requests never reach a service.
    """

    def process_view(self, request, view_func, view_args, view_kwargs):
        view_class = getattr(view_func, 'view_class', None)
        if view_class is None:
            # Function views (health, admin) are not validated here.
            return None
        view_name = view_class.__name__
        response = validate_request_context(request, view_class, view_kwargs)
        if response is None:
            return None
        logger.info(
            'Request rejected before dispatch',
            view=view_name,
            method=request.method,
            path=request.path,
            status=response.status_code,
        )
        # The envelope is a DRF Response; it needs a renderer outside of an APIView.
        return _render(response)


def _render(response):
    response.accepted_renderer = JSONRenderer()
    response.accepted_media_type = 'application/json'
    response.renderer_context = {}
    response.render()
    return response
