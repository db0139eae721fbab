"""Shared fixtures: an in-memory pasteboard standing in for the platform clipboard."""
from __future__ import annotations

import threading
from typing import Sequence

import pytest


class FakePasteboard:
    """Pasteboard whose counter and text are set directly by the test.

    When ``script`` is given, each ``read_change_counter`` call consumes the
    next (counter, text) pair; ``text_reads`` counts how often text was read.
    """

    def __init__(self, counter: int = 0, text: str | None = None,
                 script: Sequence[tuple[int, str | None]] | None = None) -> None:
        self.counter = counter
        self.text = text
        self._script = list(script or ())
        self.text_reads = 0
        self.writes: list[str] = []
        self.fail_reads = False
        self._lock = threading.Lock()

    def copy(self, text: str | None) -> None:
        with self._lock:
            self.counter += 1
            self.text = text

    def read_change_counter(self) -> int:
        with self._lock:
            if self._script:
                self.counter, self.text = self._script.pop(0)
            return self.counter

    def read_text(self) -> str | None:
        with self._lock:
            self.text_reads += 1
            if self.fail_reads:
                raise OSError("clipboard busy")
            return self.text

    def write_text(self, text: str) -> None:
        self.writes.append(text)
        self.copy(text)


@pytest.fixture
def pasteboard() -> FakePasteboard:
    return FakePasteboard()
