"""Optional-value container.

``Option[T]`` holds either a value or the ``NONE`` absence marker. Unlike a
bare ``T | None`` it can wrap ``None`` itself without ambiguity:
``Some(None)`` is present, ``Nothing()`` is absent.

Example:
    def find_user(name: str) -> Option[User]:
        user = users.get(name)
        return Some(user) if user is not None else Nothing()

    match find_user("ada"):
        case Some(user):
            greet(user)
        case Nothing():
            signup()
"""

from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING, Any, Generic, ParamSpec, TypeGuard, TypeVar, cast, overload

from ferrous._variants import VariantMeta
from ferrous.errors import UnwrapError
from ferrous.sentinel import NONE, Absent

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Iterator

    from ferrous.result import Result

__all__ = ["Nothing", "Option", "Some", "is_none_option", "is_some_option"]

T = TypeVar("T")
D = TypeVar("D")
U = TypeVar("U")
V = TypeVar("V")
P = ParamSpec("P")


@dataclasses.dataclass(frozen=True, slots=True, repr=False)
class Option(Generic[T]):
    """A value that may be absent.

    Build instances with ``Some(value)`` or ``Nothing()``. Instances are
    immutable; every combinator returns a new container or a plain value.
    """

    val: T | Absent

    def __repr__(self) -> str:
        if self.val is NONE:
            return "Nothing()"
        return f"Some({self.val!r})"

    def __iter__(self) -> Iterator[T]:
        """Yield the value once when present; yield nothing when absent."""
        if self.val is not NONE:
            yield cast("T", self.val)

    def is_some(self) -> bool:
        """Return True if a value is present."""
        return self.val is not NONE

    def is_none(self) -> bool:
        """Return True if the value is absent."""
        return self.val is NONE

    def expect(self, msg: str) -> T:
        """Return the value, or raise ``UnwrapError(msg)`` when absent."""
        if self.val is NONE:
            raise UnwrapError(msg, container=self)
        return cast("T", self.val)

    def unwrap(self) -> T:
        """Return the value, or raise ``UnwrapError`` when absent."""
        if self.val is NONE:
            raise UnwrapError(
                "unwrap called on Nothing",
                container=self,
                hint="Check is_some() first or use unwrap_or()/unwrap_or_else().",
            )
        return cast("T", self.val)

    def unwrap_or(self, fallback: D) -> T | D:
        """Return the value, or *fallback* when absent."""
        if self.val is NONE:
            return fallback
        return cast("T", self.val)

    def unwrap_or_else(self, fn: Callable[[], D]) -> T | D:
        """Return the value, or compute a fallback with ``fn()`` when absent."""
        if self.val is NONE:
            return fn()
        return cast("T", self.val)

    def map(self, fn: Callable[[T], U]) -> Option[U]:
        """Apply *fn* to a present value; leave ``Nothing`` untouched."""
        if self.val is NONE:
            return cast("Option[U]", self)
        return Option(fn(cast("T", self.val)))

    def map_or(self, fallback: U, fn: Callable[[T], U]) -> U:
        """Return ``fn(value)`` when present, else the eager *fallback*."""
        if self.val is NONE:
            return fallback
        return fn(cast("T", self.val))

    def or_(self, alt: Option[T]) -> Option[T]:
        """Return self when present, else *alt*."""
        if self.val is NONE:
            return alt
        return self

    def ok_or(self, err: BaseException | str) -> Result[T, BaseException]:
        """Convert to a ``Result``: ``Some(v)`` -> ``Ok(v)``, ``Nothing`` -> ``Err(err)``.

        Args:
            err: The failure for the absent case. A string is wrapped in
                ``Exception``.
        """
        from ferrous.result import Err, Ok

        if self.val is NONE:
            return Err(err)
        return Ok(cast("T", self.val))

    def peek(self) -> T | Absent:
        """Return the raw contained value, ``NONE`` when absent.

        Meant for ``match``/``if`` branching. Test for absence with
        ``is NONE`` (or ``is_none()``), never with ``==`` against domain values.
        """
        return self.val

    def flatten(self) -> Option[Any]:
        """Collapse ``Option[Option[T]]`` by one level; otherwise return self."""
        if isinstance(self.val, Option):
            return self.val
        return self

    @classmethod
    def from_call(
        cls,
        fn: Callable[P, V | None],
        /,
        *args: P.args,
        **kwargs: P.kwargs,
    ) -> Option[V]:
        """Call *fn* and wrap its return value.

        ``None`` becomes ``Nothing()``; anything else, including falsy values
        such as ``0`` or ``""``, becomes ``Some(result)``. Exceptions raised by
        *fn* propagate to the caller.
        """
        result = fn(*args, **kwargs)
        if result is None:
            return Option(NONE)
        return Option(result)

    @classmethod
    async def from_async(
        cls,
        fn: Callable[P, Awaitable[V | None]],
        /,
        *args: P.args,
        **kwargs: P.kwargs,
    ) -> Option[V]:
        """Await ``fn(*args, **kwargs)`` and wrap the result like ``from_call``.

        Exceptions and cancellation propagate to the caller.
        """
        result = await fn(*args, **kwargs)
        if result is None:
            return Option(NONE)
        return Option(result)


def is_some_option(value: object) -> TypeGuard[Option[Any]]:
    """Return True if *value* is an ``Option`` holding a value.

    Equivalent to ``isinstance(value, Some)``.
    """
    return isinstance(value, Option) and value.is_some()


def is_none_option(value: object) -> TypeGuard[Option[Any]]:
    """Return True if *value* is an empty ``Option``.

    Equivalent to ``isinstance(value, Nothing)``.
    """
    return isinstance(value, Option) and value.is_none()


class Some(metaclass=VariantMeta):
    """Build a present ``Option``; also usable with ``isinstance`` and ``match``.

    Example:
        opt = Some(3)
        assert isinstance(opt, Some)
        match opt:
            case Some(v):
                print(v)
    """

    __match_args__ = ("val",)
    _variant_check = staticmethod(is_some_option)

    @overload
    def __new__(cls) -> Option[None]: ...
    @overload
    def __new__(cls, value: V) -> Option[V]: ...
    def __new__(cls, value: Any = None) -> Option[Any]:
        return Option(value)


class Nothing(metaclass=VariantMeta):
    """Build an empty ``Option``; also usable with ``isinstance`` and ``match``."""

    __match_args__ = ()
    _variant_check = staticmethod(is_none_option)

    def __new__(cls) -> Option[Any]:
        return Option(NONE)
