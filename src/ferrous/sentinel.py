"""The absence marker held by an empty ``Option``.

``None`` is a perfectly good domain value in Python, so ``Option`` cannot use
it to mean "nothing here". ``NONE`` is a dedicated single-member enum instead:
it compares by identity, survives ``copy`` and ``pickle`` unchanged, and can
never collide with anything a caller wraps.
"""

from __future__ import annotations

from enum import Enum
from typing import Final, Literal

__all__ = ["NONE", "Absent"]


class Absent(Enum):
    """Type of the absence marker. ``NONE`` is its only member."""

    NONE = "NONE"

    def __repr__(self) -> str:
        return "NONE"


NONE: Final[Literal[Absent.NONE]] = Absent.NONE
