"""Success/failure container.

``Result[T, E]`` holds a single value. The value is a failure when it is an
exception instance (any ``BaseException``) and a success otherwise; there is
no separate tag. Success values must therefore never be exceptions
themselves.

Example:
    def divide(left: float, right: float) -> Result[float, Exception]:
        if right == 0:
            return Err("Divided by zero")
        return Ok(left / right)

    match divide(10, 2):
        case Ok(value):
            print(f"Result: {value}")
        case Err(error):
            print(f"Error: {error}")
"""

from __future__ import annotations

import asyncio
import dataclasses
import logging
from typing import (
    TYPE_CHECKING,
    Any,
    Generic,
    NamedTuple,
    NoReturn,
    ParamSpec,
    TypeGuard,
    TypeVar,
    cast,
    overload,
)

from ferrous._diagnostics import extraction_message
from ferrous._variants import VariantMeta
from ferrous.errors import UnwrapError
from ferrous.option import Nothing, Some

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Iterable, Iterator

    from ferrous.option import Option

__all__ = [
    "CONTROL_FLOW_EXCEPTIONS",
    "Err",
    "Ok",
    "Partition",
    "Result",
    "is_err_result",
    "is_ok_result",
]

log = logging.getLogger(__name__)

T = TypeVar("T")
E = TypeVar("E")
D = TypeVar("D")
U = TypeVar("U")
V = TypeVar("V")
F = TypeVar("F", bound=BaseException)
X = TypeVar("X", bound=BaseException)
P = ParamSpec("P")

# Interpreter control flow: never captured as a failure.
CONTROL_FLOW_EXCEPTIONS: tuple[type[BaseException], ...] = (
    KeyboardInterrupt,
    SystemExit,
    GeneratorExit,
    asyncio.CancelledError,
)


def _is_failure(value: object) -> bool:
    return isinstance(value, BaseException)


def _callable_name(fn: object) -> str:
    return getattr(fn, "__qualname__", None) or repr(fn)


class Partition(NamedTuple):
    """Success values and failures split out of a sequence of results."""

    ok: list[Any]
    err: list[Any]


@dataclasses.dataclass(frozen=True, slots=True, repr=False)
class Result(Generic[T, E]):
    """The outcome of an operation that may fail.

    Build instances with ``Ok(value)`` or ``Err(error)``. Instances are
    immutable; every combinator returns a new container or a plain value.
    """

    val: T | E

    def __repr__(self) -> str:
        tag = "Err" if _is_failure(self.val) else "Ok"
        return f"{tag}({self.val!r})"

    def __iter__(self) -> Iterator[T]:
        """Yield the success value once; yield nothing on failure."""
        if not _is_failure(self.val):
            yield cast("T", self.val)

    def is_ok(self) -> bool:
        """Return True if the contained value is not an exception."""
        return not _is_failure(self.val)

    def is_err(self) -> bool:
        """Return True if the contained value is an exception."""
        return _is_failure(self.val)

    def _fail(self, message: str) -> NoReturn:
        error = UnwrapError(extraction_message(message, self.val), container=self)
        if _is_failure(self.val):
            raise error from cast("BaseException", self.val)
        raise error

    def expect(self, msg: str) -> T:
        """Return the success value, or raise ``UnwrapError`` on failure.

        The error message is *msg* followed by the best available description
        of the contained failure (its traceback, else its message), and the
        error is chained to the failure.
        """
        if _is_failure(self.val):
            self._fail(msg)
        return cast("T", self.val)

    def expect_err(self, msg: str) -> E:
        """Return the failure, or raise ``UnwrapError`` on success."""
        if not _is_failure(self.val):
            self._fail(msg)
        return cast("E", self.val)

    def unwrap(self) -> T:
        """Return the success value, or raise ``UnwrapError`` on failure."""
        if _is_failure(self.val):
            self._fail(f"unwrap called on {type(self.val).__name__}")
        return cast("T", self.val)

    def unwrap_err(self) -> E:
        """Return the failure, or raise ``UnwrapError`` on success."""
        if not _is_failure(self.val):
            raise UnwrapError(
                f"unwrap_err called on Ok value: {self.val!r}",
                container=self,
                hint="Check is_err() first.",
            )
        return cast("E", self.val)

    def unwrap_or(self, fallback: D) -> T | D:
        """Return the success value, or *fallback* on failure."""
        if _is_failure(self.val):
            return fallback
        return cast("T", self.val)

    def unwrap_or_else(self, fn: Callable[[E], D]) -> T | D:
        """Return the success value, or ``fn(failure)`` on failure."""
        if _is_failure(self.val):
            return fn(cast("E", self.val))
        return cast("T", self.val)

    def map(self, fn: Callable[[T], U]) -> Result[U, E]:
        """Apply *fn* to a success value; leave a failure untouched."""
        if _is_failure(self.val):
            return cast("Result[U, E]", self)
        return Result(fn(cast("T", self.val)))

    def map_err(
        self, fn: Callable[[E], F | str]
    ) -> Result[T, F | Exception]:
        """Apply *fn* to a failure; leave a success untouched.

        The new failure goes through ``Err``: a string is wrapped in
        ``Exception`` and a non-exception return raises ``TypeError`` rather
        than silently turning the result into a success.
        """
        if not _is_failure(self.val):
            return cast("Result[T, F | Exception]", self)
        return Err(fn(cast("E", self.val)))

    def map_or(self, fallback: U, fn: Callable[[T], U]) -> U:
        """Return ``fn(value)`` on success, else the eager *fallback*."""
        if _is_failure(self.val):
            return fallback
        return fn(cast("T", self.val))

    def or_(self, alt: Result[T, E]) -> Result[T, E]:
        """Return self on success, else *alt*."""
        if _is_failure(self.val):
            return alt
        return self

    def ok(self) -> Option[T]:
        """Convert to an ``Option``, discarding the failure."""
        if _is_failure(self.val):
            return Nothing()
        return Some(cast("T", self.val))

    def peek(self) -> T | E:
        """Return the raw contained value for ``match``/``if`` branching."""
        return self.val

    def throw(self) -> None:
        """Raise the contained failure; do nothing on success.

        This is the one operation that deliberately re-enters exception-based
        control flow, for use at the boundary with code that expects raises.
        """
        if _is_failure(self.val):
            raise cast("BaseException", self.val)

    def flatten(self) -> Result[Any, Any]:
        """Collapse ``Result[Result[T, E], E]`` by one level; otherwise return self."""
        if isinstance(self.val, Result):
            return self.val
        return self

    @classmethod
    def from_call(
        cls,
        fn: Callable[P, V],
        /,
        *args: P.args,
        **kwargs: P.kwargs,
    ) -> Result[V, BaseException]:
        """Call *fn* and capture its outcome.

        A return value becomes ``Ok(value)``; any raised exception, including
        user-defined ``BaseException`` subclasses, becomes ``Err(exception)``.
        The one deliberate exception is interpreter control flow
        (``CONTROL_FLOW_EXCEPTIONS``: ``KeyboardInterrupt``, ``SystemExit``,
        ``GeneratorExit``, ``asyncio.CancelledError``), which is re-raised so
        interrupts, exits and cancellation keep working.
        """
        try:
            value = fn(*args, **kwargs)
        except CONTROL_FLOW_EXCEPTIONS:
            raise
        except BaseException as exc:
            log.debug("Captured %s from %s", type(exc).__name__, _callable_name(fn))
            return Result(exc)
        return Result(value)

    @classmethod
    async def from_async(
        cls,
        fn: Callable[P, Awaitable[V]],
        /,
        *args: P.args,
        **kwargs: P.kwargs,
    ) -> Result[V, BaseException]:
        """Await ``fn(*args, **kwargs)`` and capture its outcome like ``from_call``.

        Exceptions raised while creating the awaitable are captured too.
        ``CONTROL_FLOW_EXCEPTIONS``, cancellation included, propagate.
        """
        try:
            value = await fn(*args, **kwargs)
        except CONTROL_FLOW_EXCEPTIONS:
            raise
        except BaseException as exc:
            log.debug("Captured %s from %s", type(exc).__name__, _callable_name(fn))
            return Result(exc)
        return Result(value)

    @staticmethod
    def partition(results: Iterable[Result[Any, Any]]) -> Partition:
        """Split results into success values and failures, preserving order.

        Example:
            oks, errs = Result.partition([Ok(2), Ok(16), Err("boom")])
            # oks == [2, 16]; errs == [Exception("boom")]
        """
        split = Partition(ok=[], err=[])
        for result in results:
            if result.is_ok():
                split.ok.append(result.val)
            else:
                split.err.append(result.val)
        return split


def is_ok_result(value: object) -> TypeGuard[Result[Any, Any]]:
    """Return True if *value* is a successful ``Result``.

    Equivalent to ``isinstance(value, Ok)``.
    """
    return isinstance(value, Result) and value.is_ok()


def is_err_result(value: object) -> TypeGuard[Result[Any, Any]]:
    """Return True if *value* is a failed ``Result``.

    Equivalent to ``isinstance(value, Err)``.
    """
    return isinstance(value, Result) and value.is_err()


class Ok(metaclass=VariantMeta):
    """Build a successful ``Result``; also usable with ``isinstance`` and ``match``.

    Example:
        res = Ok("Foo!")
        assert isinstance(res, Ok)
    """

    __match_args__ = ("val",)
    _variant_check = staticmethod(is_ok_result)

    @overload
    def __new__(cls) -> Result[None, Any]: ...
    @overload
    def __new__(cls, value: V) -> Result[V, Any]: ...
    def __new__(cls, value: Any = None) -> Result[Any, Any]:
        return Result(value)


class Err(metaclass=VariantMeta):
    """Build a failed ``Result``; also usable with ``isinstance`` and ``match``.

    A message string is wrapped in ``Exception``. Any other non-exception
    payload is rejected, since it would be classified as a success.
    """

    __match_args__ = ("val",)
    _variant_check = staticmethod(is_err_result)

    @overload
    def __new__(cls, error: str) -> Result[Any, Exception]: ...
    @overload
    def __new__(cls, error: X) -> Result[Any, X]: ...
    def __new__(cls, error: BaseException | str) -> Result[Any, Any]:
        if isinstance(error, str):
            return Result(Exception(error))
        if not isinstance(error, BaseException):
            raise TypeError(
                f"Err expects an exception instance or a message string, "
                f"got {type(error).__name__}"
            )
        return Result(error)
