from __future__ import annotations

from typing import Callable

import pytest

from core.errors import CommandError

Responder = Callable[[str, tuple[str, ...]], bytes]


class FakeClient:
    """Scripted `Client`: records every call, answers by command name."""

    def __init__(self, responses: dict[str, object] | None = None) -> None:
        self.calls: list[tuple[str, ...]] = []
        self.responses: dict[str, object] = dict(responses or {})

    def exec(self, name: str, *args: str) -> bytes:
        self.calls.append((name, *args))
        response = self.responses.get(name, b"")
        if callable(response):
            response = response(name, args)
        if isinstance(response, BaseException):
            raise response
        if isinstance(response, str):
            return response.encode("utf-8")
        return response

    @property
    def names(self) -> list[str]:
        return [call[0] for call in self.calls]


def fail(name: str, exit_code: int = 1, stderr: str = "boom") -> CommandError:
    return CommandError([name], exit_code=exit_code, stderr=stderr)


@pytest.fixture
def fake_client() -> FakeClient:
    return FakeClient()
