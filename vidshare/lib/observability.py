"""Optional Pydantic Logfire integration.

Logfire is an extra (``pip install vidshare[logfire]``) and is off unless
``logfire.enabled`` is set in app.yaml. Until :func:`configure` succeeds every
helper here does nothing.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from vidshare.config import Settings

_logfire = None
_configured = False


def is_available() -> bool:
    return _configured and _logfire is not None


def configure(settings: Settings) -> None:
    global _logfire, _configured

    options = settings.logfire
    if not options.enabled:
        return

    try:
        import logfire
    except ImportError:
        return

    kwargs: dict[str, Any] = {"service_name": options.service_name, "send_to_logfire": "if-token-present"}
    if options.environment:
        kwargs["environment"] = options.environment
    if options.sample_rate != 1.0:
        kwargs["trace_sample_rate"] = options.sample_rate
    if options.console:
        kwargs["console"] = logfire.ConsoleOptions()

    logfire.configure(**kwargs)
    _logfire = logfire
    _configured = True


def instrument_app(app):
    """Wrap the ASGI app in logfire request spans when logfire is on."""
    return _logfire.instrument_asgi(app) if is_available() else app


def instrument_sqlalchemy(engine) -> None:
    if is_available():
        _logfire.instrument_sqlalchemy(engine=engine)


def exception(msg: str, **kwargs: Any) -> bool:
    """Record the active exception in logfire; False means the caller should log it."""
    if not is_available():
        return False
    _logfire.exception(msg, **kwargs)
    return True
