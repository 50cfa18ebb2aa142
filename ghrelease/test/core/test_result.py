"""Tests for ghrelease.core.result module."""

import pytest

from ghrelease.core.result import Err, Ok, Result


def test_ok_holds_value() -> None:
    assert Ok("v1.2.4").value == "v1.2.4"
    assert Ok(1) == Ok(1)
    assert Ok(1) != Err(1)


def test_ok_map_err_is_noop() -> None:
    result = Ok(2)
    assert result.map_err(lambda e: f"context: {e}") is result


def test_err_map_err_adds_context() -> None:
    result: Result[int, str] = Err("timeout")
    assert result.map_err(lambda e: f"unable to list branches: {e}") == Err(
        "unable to list branches: timeout"
    )


def test_pattern_matching() -> None:
    match Err("nope"):
        case Ok(_):
            pytest.fail("expected Err")
        case Err(error):
            assert error == "nope"
