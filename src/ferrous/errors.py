"""Exception hierarchy for ferrous."""

from __future__ import annotations

from typing import Any


class FerrousError(Exception):
    """Base exception for all ferrous errors."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint


class UnwrapError(FerrousError):
    """An unchecked extraction was called on a container in the wrong state.

    Raised by ``unwrap``/``expect`` on ``Nothing``/``Err`` and by
    ``unwrap_err``/``expect_err`` on ``Ok``. The offending container is kept
    on ``container`` so callers that do catch it can still inspect it.
    """

    def __init__(
        self,
        message: str,
        *,
        container: Any = None,
        hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.container = container


class ConfigurationError(FerrousError):
    """Settings validation or resolution failed."""
