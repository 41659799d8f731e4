import json

from english_optimizer.history import HistoryEntry, HistoryLogger
from tests._utils.fakes import make_result


def test_creates_empty_file(tmp_path):
    path = tmp_path / "nested" / "history.json"
    HistoryLogger(path)
    assert json.loads(path.read_text(encoding="utf-8")) == []


def test_newest_first(tmp_path):
    history = HistoryLogger(tmp_path / "history.json")
    history.add_entry(make_result(original="first"))
    history.add_entry(make_result(original="second"))

    entries = history.get_history()
    assert [e.original for e in entries] == ["second", "first"]
    assert entries[0].mode == "grammar"
    assert entries[0].timestamp == "2024-01-02T03:04:05+00:00"
    assert entries[0].provider == "ollama"


def test_cap_drops_oldest(tmp_path):
    history = HistoryLogger(tmp_path / "history.json", limit=3)
    for i in range(5):
        history.add_entry(make_result(original=str(i)))

    assert [e.original for e in history.get_history()] == ["4", "3", "2"]


def test_recent_entries_and_lookup(tmp_path):
    history = HistoryLogger(tmp_path / "history.json")
    stored = [history.add_entry(make_result(original=str(i))) for i in range(4)]

    assert [e.original for e in history.get_recent_entries(2)] == ["3", "2"]
    assert history.get_entry_by_id(stored[1].id) == stored[1]
    assert history.get_entry_by_id("missing") is None
    assert len({e.id for e in stored}) == 4


def test_clear(tmp_path):
    history = HistoryLogger(tmp_path / "history.json")
    history.add_entry(make_result())
    history.clear_history()
    assert history.get_history() == []


def test_corrupt_file_reads_as_empty(tmp_path):
    path = tmp_path / "history.json"
    path.write_text("{not json", encoding="utf-8")
    history = HistoryLogger(path)
    assert history.get_history() == []

    history.add_entry(make_result())
    assert len(history.get_history()) == 1


def test_entry_round_trip_with_missing_optional_fields():
    entry = HistoryEntry.from_dict({"id": "1", "original": "a", "optimized": "b"})
    assert entry.mode == "professional"
    assert HistoryEntry.from_dict(entry.to_dict()) == entry
