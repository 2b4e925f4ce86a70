"""Monad and functor laws for Result, with ok as unit and and_then as bind."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from resultkit.result import Result, err, ok

if TYPE_CHECKING:
    from collections.abc import Callable


def f(x: int) -> Result[int, str]:
    return ok(x * 2)


def g(x: int) -> Result[int, str]:
    return ok(x + 10)


def f_err(x: int) -> Result[int, str]:
    return err(f"failed at {x}")


RESULTS: list[Result[int, str]] = [ok(5), ok(0), err("error")]
FUNCTIONS = [f, g, f_err]


class TestMonadLaws:
    """Tests for the three monad laws."""

    @pytest.mark.parametrize("a", [0, 5, -3])
    @pytest.mark.parametrize("fn", FUNCTIONS)
    def test_left_identity(self, a: int, fn: Callable[[int], Result[int, str]]) -> None:
        """ok(a).and_then(fn) == fn(a)."""
        assert ok(a).and_then(fn) == fn(a)

    @pytest.mark.parametrize("m", RESULTS)
    def test_right_identity(self, m: Result[int, str]) -> None:
        """m.and_then(ok) == m."""
        assert m.and_then(ok) == m

    @pytest.mark.parametrize("m", RESULTS)
    @pytest.mark.parametrize("first", FUNCTIONS)
    @pytest.mark.parametrize("second", FUNCTIONS)
    def test_associativity(
        self,
        m: Result[int, str],
        first: Callable[[int], Result[int, str]],
        second: Callable[[int], Result[int, str]],
    ) -> None:
        """(m >>= f) >>= g == m >>= (x -> f(x) >>= g)."""
        left = m.and_then(first).and_then(second)
        right = m.and_then(lambda x: first(x).and_then(second))

        assert left == right

    def test_associativity_value(self) -> None:
        """Chaining f then g on ok(5) gives (5 * 2) + 10."""
        assert ok(5).and_then(f).and_then(g) == ok(20)

    def test_error_from_first_step_wins(self) -> None:
        """When f fails, g never changes the error."""
        assert ok(5).and_then(f_err).and_then(g) == err("failed at 5")


class TestFunctorLaws:
    """Tests for the two functor laws."""

    @pytest.mark.parametrize("m", RESULTS)
    def test_identity(self, m: Result[int, str]) -> None:
        """m.map(id) == m."""
        assert m.map(lambda x: x) == m

    @pytest.mark.parametrize("m", RESULTS)
    def test_composition(self, m: Result[int, str]) -> None:
        """m.map(g . f) == m.map(f).map(g)."""

        def double(x: int) -> int:
            return x * 2

        def add_ten(x: int) -> int:
            return x + 10

        assert m.map(lambda x: add_ten(double(x))) == m.map(double).map(add_ten)

    def test_composition_value(self) -> None:
        """Composition on ok(5) gives 20."""
        assert ok(5).map(lambda x: x * 2).map(lambda x: x + 10) == ok(20)
