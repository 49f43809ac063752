"""Library settings: pydantic schema, environment resolution and scoped overrides.

Resolution order is defaults, then ``FERROUS_*`` environment variables (a
``.env`` file is loaded once beforehand), then explicit overrides. The
resolved ``Settings`` object is frozen. Code that needs a different
behaviour for a limited region uses ``settings_scope``, which is task-local
and thread-local through ``contextvars``.
"""

from __future__ import annotations

from contextlib import contextmanager
import contextvars
from functools import cache
import logging
import os
from typing import TYPE_CHECKING, Any, Literal

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

from ferrous.errors import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Generator, Mapping

__all__ = [
    "ENV_PREFIX",
    "Settings",
    "get_settings",
    "reset_settings_cache",
    "resolve_settings",
    "settings_scope",
]

log = logging.getLogger(__name__)

ENV_PREFIX = "FERROUS_"

ExpectDiagnostics = Literal["auto", "message", "none"]


class Settings(BaseModel):
    """Validated library settings.

    Attributes:
        expect_diagnostics: How ``expect``/``unwrap`` describe the contained
            value when they fail. ``"auto"`` renders the failure's traceback
            when it has one and falls back to its message; ``"message"``
            always uses the message; ``"none"`` keeps only the caller's text.
        traceback_limit: Maximum number of stack entries rendered by
            ``"auto"``. ``None`` renders the whole traceback.
    """

    model_config = {"frozen": True, "extra": "forbid"}

    expect_diagnostics: ExpectDiagnostics = Field(default="auto")
    traceback_limit: int | None = Field(default=None, ge=1)

    @field_validator("expect_diagnostics", mode="before")
    @classmethod
    def normalize_diagnostics(cls, v: Any) -> Any:
        """Accept any casing and surrounding whitespace."""
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("traceback_limit", mode="before")
    @classmethod
    def normalize_limit(cls, v: Any) -> Any:
        """Map empty strings (unset env values) to ``None``."""
        if isinstance(v, str) and not v.strip():
            return None
        return v


_AMBIENT: contextvars.ContextVar[Settings | None] = contextvars.ContextVar(
    "ferrous_settings", default=None
)

_DOTENV_LOADED: bool = False


def _load_dotenv_once() -> None:
    global _DOTENV_LOADED
    if _DOTENV_LOADED:
        return
    load_dotenv()
    _DOTENV_LOADED = True


def _env_layer() -> dict[str, Any]:
    layer: dict[str, Any] = {}
    for field in Settings.model_fields:
        key = f"{ENV_PREFIX}{field.upper()}"
        value = os.environ.get(key)
        if value is not None:
            log.debug("Applying %s from environment", key)
            layer[field] = value
    return layer


def resolve_settings(overrides: Mapping[str, Any] | None = None) -> Settings:
    """Resolve settings from defaults, the environment and overrides.

    Args:
        overrides: Field values that take precedence over the environment.

    Returns:
        A frozen ``Settings`` instance.

    Raises:
        ConfigurationError: If a value fails validation or an unknown field
            is given.
    """
    _load_dotenv_once()
    return _validate({**_env_layer(), **(overrides or {})})


def _validate(values: Mapping[str, Any]) -> Settings:
    try:
        return Settings.model_validate(values)
    except ValidationError as e:
        fields = ", ".join(
            str(err["loc"][0]) for err in e.errors() if err.get("loc")
        )
        raise ConfigurationError(
            f"Invalid ferrous settings: {fields or 'unknown field'}",
            hint=(
                f"Check {ENV_PREFIX}EXPECT_DIAGNOSTICS (auto|message|none) and "
                f"{ENV_PREFIX}TRACEBACK_LIMIT (positive integer)."
            ),
        ) from e


@cache
def _env_settings() -> Settings:
    return resolve_settings()


def reset_settings_cache() -> None:
    """Forget the cached environment resolution.

    The next ``get_settings()`` call outside a scope re-reads the environment.
    """
    _env_settings.cache_clear()


def get_settings() -> Settings:
    """Return the settings in effect for the current context."""
    scoped = _AMBIENT.get()
    if scoped is not None:
        return scoped
    return _env_settings()


@contextmanager
def settings_scope(
    settings: Settings | Mapping[str, Any] | None = None,
    **overrides: Any,
) -> Generator[Settings]:
    """Run a block with different settings.

    Args:
        settings: Either a complete ``Settings`` to use as-is, or a mapping of
            overrides applied on top of the environment.
        **overrides: Additional overrides, merged over ``settings`` when it is
            a mapping.

    Yields:
        The ``Settings`` active inside the block.

    Example:
        with settings_scope(expect_diagnostics="message"):
            Err("boom").expect("loading profile")
    """
    if isinstance(settings, Settings):
        active = (
            _validate({**settings.model_dump(), **overrides}) if overrides else settings
        )
    else:
        active = resolve_settings({**(settings or {}), **overrides})

    token = _AMBIENT.set(active)
    try:
        yield active
    finally:
        _AMBIENT.reset(token)
