from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone


EntryId = uuid.UUID

EMPTY_PREVIEW = "(空白)"


def now_utc() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True, slots=True)
class Entry:
    text: str
    created_at: datetime = field(default_factory=now_utc)
    entry_id: EntryId = field(default_factory=uuid.uuid4)

    def preview(self, max_len: int = 50) -> str:
        s = self.text[:max_len].strip()
        return s or EMPTY_PREVIEW
