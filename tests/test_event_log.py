from datetime import timezone

import pytest

from app.services.forwards import EventKind, EventLog


def test_append_timestamps_and_prepends():
    log = EventLog(max_entries=10)

    first = log.append(EventKind.START, "first")
    second = log.append("Stop", "second")

    entries = log.snapshot()
    assert [e.details for e in entries] == ["second", "first"]
    assert entries[0].kind is EventKind.STOP
    assert first.timestamp.tzinfo == timezone.utc
    assert second.timestamp >= first.timestamp


def test_cap_drops_oldest():
    log = EventLog(max_entries=5)
    for i in range(8):
        log.append(EventKind.START, f"entry {i}")

    entries = log.snapshot()
    assert len(entries) == 5
    assert [e.details for e in entries] == [f"entry {i}" for i in range(7, 2, -1)]


def test_snapshot_is_a_copy():
    log = EventLog(max_entries=5)
    log.append(EventKind.START, "a")

    snapshot = log.snapshot()
    snapshot.clear()
    log.append(EventKind.DIED, "b")

    assert snapshot == []
    assert len(log.snapshot()) == 2


def test_unknown_kind_is_rejected():
    log = EventLog()
    with pytest.raises(ValueError):
        log.append("Restarted", "nope")
    assert len(log) == 0


def test_max_entries_must_be_positive():
    with pytest.raises(ValueError):
        EventLog(max_entries=0)
