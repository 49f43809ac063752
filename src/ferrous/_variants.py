"""Metaclass behind the ``Ok``/``Err``/``Some``/``Nothing`` factories.

The factories are classes only so that ``isinstance`` and ``match`` class
patterns can use them. Calling one builds a ``Result``/``Option``; asking
``isinstance(x, Ok)`` runs the factory's predicate against ``x``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar

if TYPE_CHECKING:
    from collections.abc import Callable

__all__ = ["VariantMeta"]


class VariantMeta(type):
    """Answer ``isinstance`` checks with a per-factory predicate."""

    _variant_check: ClassVar[Callable[[object], bool]]

    def __instancecheck__(cls, instance: Any) -> bool:
        return bool(cls._variant_check(instance))

    def __subclasscheck__(cls, subclass: type) -> bool:
        # Variants are states of a container, not types.
        return subclass is cls

    def __repr__(cls) -> str:
        return f"<variant {cls.__name__}>"
