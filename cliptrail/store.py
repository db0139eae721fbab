from __future__ import annotations

from collections import deque
from threading import RLock
from typing import Deque, Iterator

from .models import Entry, EntryId


DEFAULT_MAX_ENTRIES = 10


class HistoryStore:
    def __init__(self, max_entries: int = DEFAULT_MAX_ENTRIES) -> None:
        if isinstance(max_entries, bool) or not isinstance(max_entries, int):
            raise TypeError("max_entries must be an int")
        if max_entries <= 0:
            raise ValueError("max_entries must be > 0")
        self._max_entries = max_entries
        # appendleft on a full deque drops the rightmost (oldest) entry
        self._entries: Deque[Entry] = deque(maxlen=max_entries)
        self._lock = RLock()

    @property
    def max_entries(self) -> int:
        return self._max_entries

    def insert(self, text: str) -> EntryId:
        if not isinstance(text, str):
            raise TypeError(f"text must be str, not {type(text).__name__}")
        entry = Entry(text=text)
        with self._lock:
            self._entries.appendleft(entry)
        return entry.entry_id

    def entries(self) -> tuple[Entry, ...]:
        with self._lock:
            return tuple(self._entries)

    def entry(self, entry_id: EntryId) -> Entry | None:
        with self._lock:
            for e in self._entries:
                if e.entry_id == entry_id:
                    return e
        return None

    def text_for(self, entry_id: EntryId) -> str | None:
        e = self.entry(entry_id)
        return e.text if e is not None else None

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __iter__(self) -> Iterator[Entry]:
        return iter(self.entries())
