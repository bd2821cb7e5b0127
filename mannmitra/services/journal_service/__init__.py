"""Journal Service: private mood and thought-record entries.

Notes are redacted before they are persisted and are never moderated.
"""

from .entries import (
    EntryType,
    InMemoryJournalStore,
    JournalEntry,
    JournalService,
    JournalStore,
)

__all__ = [
    "EntryType",
    "InMemoryJournalStore",
    "JournalEntry",
    "JournalService",
    "JournalStore",
]
