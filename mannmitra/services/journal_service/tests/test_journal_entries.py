"""Tests for JournalService - redact-before-persist for private notes."""
from datetime import datetime, timedelta, timezone

import pytest

from mannmitra.shared.utils import configure_pii_salt, pii
from mannmitra.services.journal_service.entries import (
    EntryType,
    InMemoryJournalStore,
    JournalEntry,
    JournalService,
)


@pytest.fixture(autouse=True)
def setup_pii_salt():
    """Configure PII salt before each test."""
    configure_pii_salt("test_salt_that_is_at_least_32_characters_long")


@pytest.fixture
def store():
    return InMemoryJournalStore()


@pytest.fixture
def journal(store):
    return JournalService(store=store)


class TestSaveEntry:
    """Tests for save_entry()."""

    def test_note_redacted(self, journal, store):
        entry = journal.save_entry(
            "uid_1", EntryType.THOUGHT_RECORD, note="Asha Verma called me on 9876543210"
        )

        assert entry.note_redacted == "[name] called me on [phone]"
        assert store.entries_for("uid_1") == [entry]

    def test_crisis_text_stored_not_moderated(self, journal):
        """Journals are private: crisis language is kept, only PII is removed."""
        entry = journal.save_entry("uid_1", EntryType.NOTE, note="I want to die")
        assert entry.note_redacted == "I want to die"

    def test_mood_only_entry(self, journal):
        entry = journal.save_entry("uid_1", EntryType.MOOD, mood_score=4, tags=["sleep", "exams"])

        assert entry.note_redacted is None
        assert entry.mood_score == 4
        assert entry.tags == ("sleep", "exams")

    @pytest.mark.parametrize("score", [0, 6, -1])
    def test_mood_out_of_range(self, journal, score):
        with pytest.raises(ValueError):
            journal.save_entry("uid_1", EntryType.MOOD, mood_score=score)

    def test_empty_uid_rejected(self, journal):
        with pytest.raises(ValueError):
            journal.save_entry("", EntryType.NOTE, note="hello")

    def test_to_dict(self, journal):
        data = journal.save_entry("uid_1", EntryType.MOOD, mood_score=3).to_dict()

        assert data["type"] == "mood"
        assert data["moodScore"] == 3
        assert data["id"].startswith("jr_")


class TestListAndDelete:

    def _entry(self, entry_id, uid, minutes_ago):
        return JournalEntry(
            entry_id=entry_id,
            uid=uid,
            entry_type=EntryType.MOOD,
            mood_score=3,
            timestamp=datetime.now(timezone.utc) - timedelta(minutes=minutes_ago),
        )

    def test_newest_first(self, journal, store):
        store.put(self._entry("jr_old", "uid_1", 30))
        store.put(self._entry("jr_new", "uid_1", 1))
        store.put(self._entry("jr_mid", "uid_1", 10))

        ids = [e.entry_id for e in journal.list_entries("uid_1")]
        assert ids == ["jr_new", "jr_mid", "jr_old"]

    def test_limit(self, journal, store):
        for i in range(5):
            store.put(self._entry(f"jr_{i}", "uid_1", i))

        assert len(journal.list_entries("uid_1", limit=2)) == 2

    def test_other_users_not_listed(self, journal, store):
        store.put(self._entry("jr_a", "uid_1", 1))
        store.put(self._entry("jr_b", "uid_2", 1))

        assert [e.entry_id for e in journal.list_entries("uid_2")] == ["jr_b"]

    def test_delete_user_data(self, journal, store):
        store.put(self._entry("jr_a", "uid_1", 1))
        store.put(self._entry("jr_b", "uid_1", 2))
        store.put(self._entry("jr_c", "uid_2", 1))

        assert journal.delete_user_data("uid_1") == 2
        assert journal.list_entries("uid_1") == []
        assert len(journal.list_entries("uid_2")) == 1


class TestUnconfiguredSalt:
    """A missing PII salt fails before anything is written or deleted."""

    def test_save_entry_stores_nothing(self, journal, store, monkeypatch):
        monkeypatch.setattr(pii, "_PII_SALT", None)

        with pytest.raises(RuntimeError):
            journal.save_entry("uid_1", EntryType.NOTE, note="call 9876543210")

        assert store.entries_for("uid_1") == []

    def test_delete_user_data_deletes_nothing(self, journal, store, monkeypatch):
        journal.save_entry("uid_1", EntryType.MOOD, mood_score=2)
        monkeypatch.setattr(pii, "_PII_SALT", None)

        with pytest.raises(RuntimeError):
            journal.delete_user_data("uid_1")

        assert len(store.entries_for("uid_1")) == 1
