"""Development server on pounce (``pip install autoview[server]``)."""

import logging

logger = logging.getLogger("autoview.server")


def run_dev_server(
    app: object,
    host: str,
    port: int,
    *,
    reload: bool = False,
    app_path: str | None = None,
) -> None:
    """Serve *app* with a single pounce worker until interrupted.

    With *reload*, pounce re-imports ``app_path`` (``"module:attr"``) when
    sources change; without an import string only the live object is served.
    """
    from pounce.config import ServerConfig
    from pounce.server import Server

    logger.info("serving autoview on http://%s:%d", host, port)
    config = ServerConfig(host=host, port=port, workers=1, reload=reload)
    Server(config, app, app_path=app_path).run()
