"""pywin32-backed pasteboard: sequence number as change counter, CF_UNICODETEXT as text."""
from __future__ import annotations

import logging
import time
from contextlib import contextmanager

import win32clipboard
import win32con

log = logging.getLogger(__name__)


@contextmanager
def open_clipboard(hwnd: int | None, retries: int = 10, delay_s: float = 0.02):
    """Open the Windows clipboard with retry logic, yielding inside the lock."""
    last_exc: Exception | None = None
    for _ in range(max(1, retries)):
        try:
            win32clipboard.OpenClipboard(hwnd)
            last_exc = None
            break
        except Exception as exc:
            last_exc = exc
            time.sleep(delay_s)
    if last_exc is not None:
        raise last_exc
    try:
        yield
    finally:
        try:
            win32clipboard.CloseClipboard()
        except Exception:
            log.debug("CloseClipboard 异常", exc_info=True)


class WindowsPasteboard:
    def __init__(self, hwnd: int | None = None) -> None:
        self._hwnd = hwnd

    def read_change_counter(self) -> int:
        # does not require opening the clipboard
        return int(win32clipboard.GetClipboardSequenceNumber())

    def read_text(self) -> str | None:
        with open_clipboard(self._hwnd):
            if not win32clipboard.IsClipboardFormatAvailable(win32con.CF_UNICODETEXT):
                return None
            text = win32clipboard.GetClipboardData(win32con.CF_UNICODETEXT)
        if isinstance(text, bytes):
            text = text.decode("utf-16-le", errors="replace")
        return str(text)

    def write_text(self, text: str) -> None:
        with open_clipboard(self._hwnd):
            win32clipboard.EmptyClipboard()
            win32clipboard.SetClipboardData(win32con.CF_UNICODETEXT, text)
