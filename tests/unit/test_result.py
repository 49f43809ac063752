from __future__ import annotations

import pytest

from ferrous import Err, Nothing, Ok, Partition, Result, Some, UnwrapError

pytestmark = pytest.mark.unit


def _raised(exc: BaseException) -> BaseException:
    """Return *exc* after it has been raised, so it carries a traceback."""
    try:
        raise exc
    except BaseException as caught:
        return caught


def test_ok_and_err_predicates() -> None:
    assert Ok(1).is_ok() is True
    assert Ok(1).is_err() is False
    assert Err("boom").is_err() is True
    assert Err("boom").is_ok() is False


def test_err_wraps_message_string_in_exception() -> None:
    res = Err("boom")
    err = res.unwrap_err()
    assert type(err) is Exception
    assert str(err) == "boom"


def test_err_keeps_exception_instances_as_is() -> None:
    cause = ValueError("bad")
    assert Err(cause).unwrap_err() is cause


def test_err_rejects_non_exception_payloads() -> None:
    with pytest.raises(TypeError, match="int"):
        Err(42)  # type: ignore[call-overload]


def test_classification_is_structural() -> None:
    """Any exception instance is a failure, however it was built."""
    assert Result(KeyboardInterrupt()).is_err()
    assert Result(ValueError.__new__(ValueError)).is_err()
    assert Result(ValueError).is_ok()  # the class itself is not a failure
    assert Ok(None).is_ok()
    assert Ok().peek() is None


def test_expect_returns_success_value() -> None:
    assert Ok(3).expect("should not fail") == 3


def test_expect_on_err_chains_and_describes_failure() -> None:
    cause = _raised(ValueError("disk full"))
    res = Err(cause)

    with pytest.raises(UnwrapError) as exc_info:
        res.expect("saving report")

    message = str(exc_info.value)
    assert message.startswith("saving report: ")
    assert "ValueError: disk full" in message
    assert "Traceback" in message
    assert exc_info.value.__cause__ is cause
    assert exc_info.value.container is res


def test_expect_uses_message_when_no_traceback_is_available() -> None:
    with pytest.raises(UnwrapError) as exc_info:
        Err("never raised").expect("loading")
    assert str(exc_info.value) == "loading: never raised"


def test_expect_falls_back_to_type_name_for_empty_message() -> None:
    with pytest.raises(UnwrapError) as exc_info:
        Err(LookupError()).expect("loading")
    assert str(exc_info.value) == "loading: LookupError"


def test_expect_err_returns_failure_or_raises_on_ok() -> None:
    cause = RuntimeError("x")
    assert Err(cause).expect_err("wanted failure") is cause

    with pytest.raises(UnwrapError) as exc_info:
        Ok([1, 2]).expect_err("wanted failure")
    assert str(exc_info.value) == "wanted failure: [1, 2]"
    assert exc_info.value.__cause__ is None


def test_unwrap_on_err_always_raises() -> None:
    with pytest.raises(UnwrapError, match="unwrap called on ValueError"):
        Err(ValueError("bad")).unwrap()


def test_unwrap_err_on_ok_raises() -> None:
    with pytest.raises(UnwrapError, match=r"unwrap_err called on Ok value: 'v'"):
        Ok("v").unwrap_err()


def test_unwrap_or_and_unwrap_or_else() -> None:
    assert Ok(1).unwrap_or(0) == 1
    assert Err("x").unwrap_or(0) == 0
    assert Ok(1).unwrap_or_else(lambda e: len(str(e))) == 1
    assert Err("four").unwrap_or_else(lambda e: len(str(e))) == 4


def test_map_and_map_err_touch_only_their_side() -> None:
    assert Ok(2).map(lambda v: v + 1) == Ok(3)
    failed = Err("x")
    assert failed.map(lambda v: v + 1) is failed

    succeeded = Ok(2)
    assert succeeded.map_err(lambda e: RuntimeError(f"wrapped: {e}")) is succeeded
    remapped = Err("x").map_err(lambda e: RuntimeError(f"wrapped: {e}"))
    assert remapped.is_err()
    assert isinstance(remapped.unwrap_err(), RuntimeError)
    assert str(remapped.unwrap_err()) == "wrapped: x"


def test_map_err_wraps_message_strings() -> None:
    remapped = Err("x").map_err(lambda e: f"wrapped: {e}")

    assert remapped.is_err()
    assert type(remapped.unwrap_err()) is Exception
    assert str(remapped.unwrap_err()) == "wrapped: x"


def test_map_err_rejects_non_exception_output() -> None:
    with pytest.raises(TypeError, match="got int"):
        Err("x").map_err(lambda e: 42)  # type: ignore[arg-type,return-value]


def test_map_or() -> None:
    assert Ok(2).map_or(0, lambda v: v * 2) == 4
    assert Err("x").map_or(0, lambda v: v * 2) == 0


def test_or_prefers_self_on_success() -> None:
    first = Ok(1)
    assert first.or_(Ok(2)) is first
    assert Err("x").or_(Ok(2)) == Ok(2)


def test_ok_converts_to_option() -> None:
    assert Ok(5).ok() == Some(5)
    assert Ok(None).ok() == Some(None)
    assert Err("x").ok() == Nothing()


def test_peek_returns_raw_value() -> None:
    cause = ValueError("x")
    assert Ok("cool").peek() == "cool"
    assert Err(cause).peek() is cause


def test_throw_reraises_failure_and_is_noop_on_success() -> None:
    assert Ok(1).throw() is None

    cause = KeyError("missing")
    with pytest.raises(KeyError) as exc_info:
        Err(cause).throw()
    assert exc_info.value is cause


def test_flatten_collapses_exactly_one_level() -> None:
    inner = Err("x")
    assert Ok(inner).flatten() is inner
    assert Ok(Ok(Ok(1))).flatten() == Ok(Ok(1))
    flat = Ok(1)
    assert flat.flatten() is flat


def test_iteration_yields_success_value_only() -> None:
    assert list(Ok(1)) == [1]
    assert list(Err("x")) == []
    assert [v for r in (Ok(1), Err("x"), Ok(3)) for v in r] == [1, 3]


def test_repr() -> None:
    assert repr(Ok(1)) == "Ok(1)"
    assert repr(Err(ValueError("x"))) == "Err(ValueError('x'))"


def test_from_call_captures_exceptions() -> None:
    def boom() -> int:
        raise Exception("x")

    res = Result.from_call(boom)
    assert res.is_err()
    assert str(res.unwrap_err()) == "x"


def test_from_call_wraps_return_value_and_forwards_arguments() -> None:
    assert Result.from_call(int, "12") == Ok(12)
    assert Result.from_call(lambda: None) == Ok(None)

    res = Result.from_call(int, "twelve")
    assert isinstance(res.unwrap_err(), ValueError)


def test_from_call_captures_library_errors_too() -> None:
    res = Result.from_call(lambda: Err("inner").unwrap())
    assert isinstance(res.unwrap_err(), UnwrapError)


@pytest.mark.parametrize("control", [KeyboardInterrupt, SystemExit, GeneratorExit])
def test_from_call_does_not_capture_interpreter_control_flow(
    control: type[BaseException],
) -> None:
    def interrupt() -> None:
        raise control

    with pytest.raises(control):
        Result.from_call(interrupt)


def test_from_call_captures_user_defined_base_exception() -> None:
    class Abort(BaseException):
        pass

    def abort() -> None:
        raise Abort("stop here")

    res = Result.from_call(abort)

    assert isinstance(res, Err)
    assert isinstance(res.unwrap_err(), Abort)
    assert str(res.unwrap_err()) == "stop here"


def test_from_call_logs_captures(ferrous_debug_logs) -> None:
    def failing_step() -> None:
        raise ValueError("nope")

    Result.from_call(failing_step)

    messages = [r.getMessage() for r in ferrous_debug_logs.records]
    assert any("ValueError" in m and "failing_step" in m for m in messages)


def test_partition_preserves_order() -> None:
    oks, errs = Result.partition([Ok(2), Err("a"), Ok(16), Err("b")])
    assert oks == [2, 16]
    assert [str(e) for e in errs] == ["a", "b"]


def test_partition_example() -> None:
    split = Result.partition([Ok(2), Ok(16), Err("boom")])
    assert isinstance(split, Partition)
    assert split.ok == [2, 16]
    assert len(split.err) == 1
    assert str(split.err[0]) == "boom"


def test_partition_empty_and_generator_input() -> None:
    assert Result.partition([]) == Partition(ok=[], err=[])
    split = Result.partition(Ok(i) for i in range(3))
    assert split.ok == [0, 1, 2]
    assert split.err == []
