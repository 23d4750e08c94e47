"""Tests for trot.server.pipeline — handler chain execution."""

import pytest

from trot.http.request import Request
from trot.http.response import Response
from trot.server.pipeline import (
    COMPLETE,
    CONTINUE,
    Abort,
    Advance,
    Complete,
    run_chain,
    run_single,
)


def _pair() -> tuple[Request, Response]:
    return Request(method="GET", url="/"), Response()


class TestAdvance:
    def test_starts_complete(self) -> None:
        assert Advance().signal is COMPLETE

    def test_call_continues(self) -> None:
        advance = Advance()
        advance()
        assert advance.signal is CONTINUE

    def test_call_with_error_aborts(self) -> None:
        error = ValueError("boom")
        advance = Advance()
        advance(error)
        assert advance.signal == Abort(error)

    def test_only_first_call_counts(self) -> None:
        advance = Advance()
        advance()
        advance(ValueError("late"))
        assert advance.signal is CONTINUE


@pytest.mark.anyio
class TestRunChain:
    async def test_runs_in_order(self) -> None:
        calls: list[str] = []

        def first(request, response, next):
            calls.append("first")
            next()

        def second(request, response, next):
            calls.append("second")
            next()

        def last(request, response, next):
            calls.append("last")
            response.end("done")

        request, response = _pair()
        outcome = await run_chain([first, second, last], request, response)

        assert outcome is COMPLETE
        assert calls == ["first", "second", "last"]
        assert response.text == "done"

    async def test_last_handler_gets_no_continuation(self) -> None:
        seen: list[object] = []

        def first(request, response, next):
            seen.append(next)
            next()

        def last(request, response, next):
            seen.append(next)

        request, response = _pair()
        await run_chain([first, last], request, response)

        assert isinstance(seen[0], Advance)
        assert seen[1] is None

    async def test_not_calling_next_halts(self) -> None:
        calls: list[str] = []

        def gate(request, response, next):
            calls.append("gate")
            response.end("stopped")

        def never(request, response, next):
            calls.append("never")

        request, response = _pair()
        outcome = await run_chain([gate, never], request, response)

        assert isinstance(outcome, Complete)
        assert calls == ["gate"]

    async def test_next_with_error_aborts(self) -> None:
        error = PermissionError("nope")
        calls: list[str] = []

        def guard(request, response, next):
            next(error)

        def never(request, response, next):
            calls.append("never")

        request, response = _pair()
        outcome = await run_chain([guard, never], request, response)

        assert outcome == Abort(error)
        assert calls == []

    async def test_raise_aborts(self) -> None:
        calls: list[str] = []

        def broken(request, response, next):
            raise KeyError("missing")

        def never(request, response, next):
            calls.append("never")

        request, response = _pair()
        outcome = await run_chain([broken, never], request, response)

        assert isinstance(outcome, Abort)
        assert isinstance(outcome.error, KeyError)
        assert calls == []

    async def test_async_handlers_are_awaited(self) -> None:
        calls: list[str] = []

        async def load(request, response, next):
            request.state["user"] = "alice"
            calls.append("load")
            next()

        async def show(request, response, next):
            calls.append("show")
            response.end(request.state["user"])

        request, response = _pair()
        outcome = await run_chain([load, show], request, response)

        assert outcome is COMPLETE
        assert calls == ["load", "show"]
        assert response.text == "alice"

    async def test_async_failure_aborts(self) -> None:
        async def broken(request, response, next):
            raise RuntimeError("rejected")

        def never(request, response, next):
            raise AssertionError("should not run")

        request, response = _pair()
        outcome = await run_chain([broken, never], request, response)

        assert isinstance(outcome, Abort)
        assert str(outcome.error) == "rejected"

    async def test_async_failure_after_next_still_aborts(self) -> None:
        async def flaky(request, response, next):
            next()
            raise RuntimeError("after next")

        def never(request, response, next):
            raise AssertionError("should not run")

        request, response = _pair()
        outcome = await run_chain([flaky, never], request, response)

        assert isinstance(outcome, Abort)
        assert str(outcome.error) == "after next"

    async def test_callable_objects(self) -> None:
        class Tag:
            def __init__(self, name: str) -> None:
                self.name = name

            def __call__(self, request, response, next):
                request.state.setdefault("tags", []).append(self.name)
                if next is not None:
                    next()

        request, response = _pair()
        await run_chain([Tag("a"), Tag("b")], request, response)

        assert request.state["tags"] == ["a", "b"]


@pytest.mark.anyio
class TestRunSingle:
    async def test_called_without_continuation(self) -> None:
        seen: list[object] = []

        def only(request, response, next):
            seen.append(next)
            response.end("single")

        request, response = _pair()
        outcome = await run_single(only, request, response)

        assert outcome is COMPLETE
        assert seen == [None]
        assert response.text == "single"

    async def test_raise_aborts(self) -> None:
        def only(request, response, next):
            raise ValueError("bad")

        request, response = _pair()
        outcome = await run_single(only, request, response)

        assert isinstance(outcome, Abort)

    async def test_async_failure_aborts(self) -> None:
        async def only(request, response, next):
            raise ValueError("bad")

        request, response = _pair()
        outcome = await run_single(only, request, response)

        assert isinstance(outcome, Abort)
        assert str(outcome.error) == "bad"
