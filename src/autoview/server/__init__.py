"""Server — ASGI request handling, error mapping and the dev server."""
