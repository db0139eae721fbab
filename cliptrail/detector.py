from __future__ import annotations

import logging
import threading
from typing import Callable

from .pasteboard import Pasteboard

log = logging.getLogger(__name__)


DEFAULT_INTERVAL_S = 0.5

TextCallback = Callable[[str], object]


class ChangeDetector:
    """Polls a pasteboard's change counter and reports each new text once.

    ``last_counter`` is the only state carried between ticks. A change is
    consumed as soon as it is observed, whether or not its text could be read,
    so a non-text copy is never re-read on later ticks.
    """

    def __init__(
        self,
        pasteboard: Pasteboard,
        on_text: TextCallback,
        interval_s: float = DEFAULT_INTERVAL_S,
        initial_counter: int | None = None,
    ) -> None:
        if interval_s <= 0:
            raise ValueError("interval_s must be > 0")
        self._pasteboard = pasteboard
        self._on_text = on_text
        self._interval_s = interval_s
        self._last_counter = initial_counter
        self._timer_lock = threading.Lock()
        self._tick_lock = threading.Lock()
        self._timer: threading.Timer | None = None
        self._running = False

    @property
    def interval_s(self) -> float:
        return self._interval_s

    @property
    def last_counter(self) -> int | None:
        return self._last_counter

    @property
    def is_running(self) -> bool:
        return self._running

    def start(self) -> None:
        with self._timer_lock:
            if self._running:
                return
            self._running = True
            self._arm_locked()

    def stop(self) -> None:
        with self._timer_lock:
            self._running = False
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

    def tick(self) -> bool:
        with self._tick_lock:
            return self._step()

    def _step(self) -> bool:
        counter = self._pasteboard.read_change_counter()
        if counter == self._last_counter:
            return False
        self._last_counter = counter

        try:
            text = self._pasteboard.read_text()
        except Exception:
            log.debug("读取剪贴板文本失败 (counter=%s)", counter, exc_info=True)
            return False
        if text is None:
            log.debug("剪贴板内容无文本形式，跳过 (counter=%s)", counter)
            return False

        self._on_text(text)
        return True

    def _arm_locked(self) -> None:
        timer = threading.Timer(self._interval_s, self._on_timer)
        timer.daemon = True
        self._timer = timer
        timer.start()

    def _is_current_timer(self) -> bool:
        return self._running and self._timer is threading.current_thread()

    def _on_timer(self) -> None:
        # a stop()/start() pair may arm a new timer while an older tick is still running
        with self._tick_lock:
            if not self._is_current_timer():
                return
            try:
                self._step()
            except Exception:
                log.debug("剪贴板轮询异常", exc_info=True)
        with self._timer_lock:
            if self._is_current_timer():
                self._arm_locked()
