"""Narrow clipboard contract shared by the detector and the tray menu."""
from __future__ import annotations

import logging
from typing import Protocol

from .models import EntryId
from .store import HistoryStore

log = logging.getLogger(__name__)


class Pasteboard(Protocol):
    def read_change_counter(self) -> int:
        """Platform counter that changes whenever clipboard content changes."""
        ...

    def read_text(self) -> str | None:
        """Current clipboard content as text, or ``None`` if it has no text form."""
        ...

    def write_text(self, text: str) -> None:
        """Replace the clipboard content entirely with ``text``."""
        ...


def restore_entry(history: HistoryStore, pasteboard: Pasteboard, entry_id: EntryId) -> bool:
    text = history.text_for(entry_id)
    if text is None:
        log.debug("条目已被淘汰，忽略选择: %s", entry_id)
        return False
    pasteboard.write_text(text)
    return True
