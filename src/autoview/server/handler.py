"""ASGI handler — the one place that speaks raw ASGI.

Turns the scope into a ``Request``, finds the getter's route, and writes the
``Response`` back as two ASGI messages. Whatever goes wrong on the way is
answered by ``error_response``; nothing escapes to the server.
"""

from autoview._internal.asgi import Scope, Send
from autoview._internal.invoke import invoke
from autoview.http.request import Request
from autoview.http.response import Response
from autoview.routing.router import Router
from autoview.server.errors import error_response


async def handle_request(scope: Scope, send: Send, *, router: Router) -> None:
    """Answer one HTTP request."""
    request = Request.from_asgi(scope)
    try:
        response = await dispatch(request, router)
    except Exception as exc:
        response = error_response(exc, request)
    await send_response(response, send, head=request.method == "HEAD")


async def dispatch(request: Request, router: Router) -> Response:
    """Call the getter route matching *request* with its path parameters."""
    match = router.match(request.method, request.raw_path)
    return await invoke(match.route.handler, request.with_path_params(match.path_params))


async def send_response(response: Response, send: Send, *, head: bool = False) -> None:
    """Send *response*; for HEAD only the headers, with the full content-length."""
    body = response.body.encode("utf-8")
    headers = [
        (b"content-type", response.content_type.encode("latin-1")),
        (b"content-length", str(len(body)).encode("latin-1")),
    ]
    headers.extend(
        (name.lower().encode("latin-1"), value.encode("latin-1"))
        for name, value in response.headers
    )
    await send({"type": "http.response.start", "status": response.status, "headers": headers})
    await send({"type": "http.response.body", "body": b"" if head else body})
