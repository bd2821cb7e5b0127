"""Journal entries: redact-before-persist for private notes.

Journal notes are private, so they are redacted but never moderated or
held. Mood scores use a 1-5 scale.
"""
import logging
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple

from mannmitra.shared.utils import hash_pii
from mannmitra.services.safety_service.redactor import PIIRedactor, get_redactor

logger = logging.getLogger(__name__)


class EntryType(Enum):
    MOOD = "mood"
    THOUGHT_RECORD = "thought_record"
    NOTE = "note"


@dataclass(frozen=True)
class JournalEntry:
    """A stored journal entry. Notes are kept only in redacted form."""
    entry_id: str
    uid: str
    entry_type: EntryType
    mood_score: Optional[int] = None
    tags: Tuple[str, ...] = ()
    note_redacted: Optional[str] = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self):
        if self.mood_score is not None and not 1 <= self.mood_score <= 5:
            raise ValueError(f"Mood score must be 1-5, got {self.mood_score}")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.entry_id,
            "uid": self.uid,
            "type": self.entry_type.value,
            "moodScore": self.mood_score,
            "tags": list(self.tags),
            "note_redacted": self.note_redacted,
            "timestamp": self.timestamp.isoformat(),
        }


class JournalStore(ABC):
    """Key-value journal storage keyed by entry id."""

    @abstractmethod
    def put(self, entry: JournalEntry) -> None:
        pass

    @abstractmethod
    def entries_for(self, uid: str) -> List[JournalEntry]:
        pass

    @abstractmethod
    def delete(self, entry_id: str) -> None:
        pass


class InMemoryJournalStore(JournalStore):

    def __init__(self):
        self._entries: Dict[str, JournalEntry] = {}

    def put(self, entry: JournalEntry) -> None:
        self._entries[entry.entry_id] = entry

    def entries_for(self, uid: str) -> List[JournalEntry]:
        return [e for e in self._entries.values() if e.uid == uid]

    def delete(self, entry_id: str) -> None:
        self._entries.pop(entry_id, None)


class JournalService:
    """Saves and lists journal entries for a user."""

    def __init__(self, store: JournalStore, redactor: Optional[PIIRedactor] = None):
        self.store = store
        self.redactor = redactor if redactor is not None else get_redactor()

    def save_entry(
        self,
        uid: str,
        entry_type: EntryType,
        mood_score: Optional[int] = None,
        tags: Sequence[str] = (),
        note: Optional[str] = None,
    ) -> JournalEntry:
        """Redact the note and persist a new entry.

        Raises:
            ValueError: If uid is empty or the mood score is out of range
        """
        if not uid:
            raise ValueError("uid is required")

        uid_hash = hash_pii(uid)
        entry = JournalEntry(
            entry_id=f"jr_{uuid.uuid4().hex[:12]}",
            uid=uid,
            entry_type=entry_type,
            mood_score=mood_score,
            tags=tuple(tags),
            note_redacted=self.redactor.redact(note) if note else None,
        )
        self.store.put(entry)

        logger.info(
            "JOURNAL_ENTRY_SAVED",
            extra={
                "entry_id": entry.entry_id,
                "uid_hash": uid_hash,
                "entry_type": entry_type.value,
                "has_note": entry.note_redacted is not None,
            }
        )
        return entry

    def list_entries(self, uid: str, limit: Optional[int] = None) -> List[JournalEntry]:
        """Entries for uid, newest first."""
        entries = sorted(self.store.entries_for(uid), key=lambda e: e.timestamp, reverse=True)
        return entries[:limit] if limit else entries

    def delete_user_data(self, uid: str) -> int:
        """Delete every entry belonging to uid; returns how many were removed."""
        uid_hash = hash_pii(uid)
        entries = self.store.entries_for(uid)
        for entry in entries:
            self.store.delete(entry.entry_id)

        logger.info(
            "JOURNAL_USER_DATA_DELETED",
            extra={"uid_hash": uid_hash, "deleted_count": len(entries)}
        )
        return len(entries)
