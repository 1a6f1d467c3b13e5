# tests/conftest.py
from __future__ import annotations

from collections import deque
from collections.abc import Iterator

import pytest

from longseq.layout import DEFAULT_EPOCH_MS


class FakeClock:
    """Millisecond clock driven by the test.

    Reads consume queued values first, then return ``now``.
    """

    def __init__(self, now: int) -> None:
        self.now = now
        self.queued: deque[int] = deque()
        self.reads = 0

    def __call__(self) -> int:
        self.reads += 1
        if self.queued:
            return self.queued.popleft()
        return self.now

    def queue(self, *values: int) -> None:
        self.queued.extend(values)


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock(DEFAULT_EPOCH_MS + 5000)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Iterator[None]:
    """Keep host environment and .env files out of settings."""
    for name in (
        "LONGSEQ_CUSTOM_EPOCH_MS",
        "LONGSEQ_NODE_ID_SOURCE",
        "LONGSEQ_EXPLICIT_NODE_ID",
        "LONGSEQ_SPIN_TIMEOUT_MS",
        "LONGSEQ_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    yield
