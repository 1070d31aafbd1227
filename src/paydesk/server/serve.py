"""Serve a paydesk App with pounce.

``pounce.run()`` wants an import string; the app is usually already
built, so a ``pounce.Server`` is driven with it directly.
"""


def run_server(
    app: object,
    host: str,
    port: int,
    *,
    workers: int = 1,
    reload: bool = False,
    log_level: str = "info",
    log_format: str = "json",
    app_path: str | None = None,
) -> None:
    """Run *app* under pounce until interrupted.

    Args:
        app: The ASGI callable.
        host: Bind address.
        port: Bind port.
        workers: Worker count; forced to one when reloading.
        reload: Restart on source changes.
        log_level: Level pounce configures logging with.
        log_format: ``"json"`` or ``"text"`` log records.
        app_path: ``"module:attribute"`` for pounce to re-import on reload.
    """
    from pounce.config import ServerConfig
    from pounce.server import Server

    config = ServerConfig(
        host=host,
        port=port,
        workers=1 if reload else workers,
        reload=reload,
        log_level=log_level,
        log_format=log_format,
    )
    Server(config, app, app_path=app_path).run()
