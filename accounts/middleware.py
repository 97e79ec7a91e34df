"""
Classify each request as coming from a browser or an API client.

The result is stored on ``request.caller_kind`` and read by
`accounts.boundary.exception_handler` to decide between a redirect and a
JSON error.
"""

from .constants import CallerKind

FORMAT_HEADER_VALUES = {
    "html": CallerKind.INTERACTIVE,
    "json": CallerKind.PROGRAMMATIC,
}


def resolve_caller_kind(request):
    """
    Interactive callers accept ``text/html`` and are not XHR requests.

    An explicit ``X-Response-Format: html|json`` header wins.
    """

    explicit = request.headers.get("X-Response-Format", "").strip().lower()
    if explicit in FORMAT_HEADER_VALUES:
        return FORMAT_HEADER_VALUES[explicit]

    accepts_html = "text/html" in request.headers.get("Accept", "")
    is_xhr = request.headers.get("X-Requested-With") == "XMLHttpRequest"
    if accepts_html and not is_xhr:
        return CallerKind.INTERACTIVE
    return CallerKind.PROGRAMMATIC


class CallerKindMiddleware:
    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        request.caller_kind = resolve_caller_kind(request)
        return self.get_response(request)
