"""Serve a live ``App`` with pounce (``pip install roost[server]``)."""

import logging

from roost.config import AppConfig

logger = logging.getLogger("roost.server")


def serve(
    app: object,
    config: AppConfig,
    *,
    host: str | None = None,
    port: int | None = None,
) -> None:
    """Block serving *app* on one worker; reload on change when ``config.debug``.

    pounce's ``run()`` wants an import string, so the server is built
    from the ASGI object directly.
    """
    try:
        from pounce.config import ServerConfig
        from pounce.server import Server
    except ImportError as exc:
        msg = "Serving needs pounce: pip install roost[server]"
        raise RuntimeError(msg) from exc

    host = host or config.host
    port = port or config.port
    server_config = ServerConfig(
        host=host,
        port=port,
        workers=1,
        reload=config.debug,
        reload_dirs=config.reload_dirs,
    )
    logger.info("serving on http://%s:%d", host, port)
    Server(server_config, app).run()
