"""Rendering of contained values for failed extractions.

``expect``/``unwrap`` on the wrong variant raise ``UnwrapError``. The message
is the caller's text followed by the best available description of what the
container actually held: the failure's traceback when it was raised
somewhere, otherwise its message, otherwise its type name. Success values
are described by ``repr``.
"""

from __future__ import annotations

import logging
import traceback

from ferrous.config import Settings, get_settings
from ferrous.errors import ConfigurationError

__all__ = ["describe", "extraction_message"]

log = logging.getLogger(__name__)


def _indent(text: str) -> str:
    return "\n\t" + "\n\t".join(text.rstrip("\n").split("\n"))


def _active_settings() -> Settings:
    # A broken environment must not change which error an extraction raises.
    try:
        return get_settings()
    except ConfigurationError as e:
        log.debug("Ignoring invalid settings for diagnostics: %s", e)
        return Settings()


def describe(value: object) -> str:
    """Return the diagnostic text for *value* under the active settings.

    An empty string means the settings ask for no diagnostic at all. Invalid
    environment settings fall back to the defaults here.
    """
    settings = _active_settings()
    if settings.expect_diagnostics == "none":
        return ""
    if not isinstance(value, BaseException):
        return repr(value)
    if settings.expect_diagnostics == "auto" and value.__traceback__ is not None:
        rendered = traceback.format_exception(value, limit=settings.traceback_limit)
        return _indent("".join(rendered))
    return str(value) or type(value).__name__


def extraction_message(message: str, value: object) -> str:
    """Join the caller's *message* with the description of *value*."""
    detail = describe(value)
    if not detail:
        return message
    return f"{message}: {detail}"
