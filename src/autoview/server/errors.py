"""Error mapping for autoview requests.

Every per-request failure (bad path, missing record, failing getter or
search, render or template error) answers the same way: status 500 with a
plain-text ``"500 - ERROR: <message>"`` body. Not-found records included.
Router errors keep their own status so unknown paths still answer 404/405.

The policy lives in ``error_response`` alone; handlers never build error
responses themselves.
"""

import logging

from autoview.errors import HTTPError
from autoview.http.request import Request
from autoview.http.response import PLAIN_TEXT, Response

logger = logging.getLogger("autoview.server")

INTERNAL_ERROR = 500


def error_body(status: int, message: str) -> str:
    return f"{status} - ERROR: {message}"


def error_response(exc: Exception, request: Request) -> Response:
    """Map any exception raised while handling *request* to a Response."""
    if isinstance(exc, HTTPError):
        logger.debug("%d %s %s: %s", exc.status, request.method, request.path, exc.detail)
        status, message, headers = exc.status, exc.detail or str(exc.status), exc.headers
    else:
        logger.exception("%d %s %s", INTERNAL_ERROR, request.method, request.path)
        status, message, headers = INTERNAL_ERROR, str(exc), ()
    return Response(
        body=error_body(status, message),
        status=status,
        content_type=PLAIN_TEXT,
        headers=headers,
    )
