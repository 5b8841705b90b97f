"""Tests for the backup store."""

from workerai.tools.backup import TIMESTAMP_PATTERN, BackupStore


def test_snapshot_missing_file_is_noop(tmp_path):
    store = BackupStore()
    assert store.snapshot(tmp_path / "missing.txt") is None
    assert list(tmp_path.iterdir()) == []


def test_snapshot_copies_content(tmp_path):
    f = tmp_path / "notes.md"
    f.write_text("before")

    backup = BackupStore().snapshot(f)

    assert backup is not None
    assert backup.parent == tmp_path
    assert backup.name.startswith("notes.md.bak.")
    assert TIMESTAMP_PATTERN.match(backup.name[len("notes.md.bak.") :])
    assert backup.read_text() == "before"


def test_timestamps_strictly_increase(tmp_path):
    """Back-to-back snapshots never collide and sort chronologically."""
    f = tmp_path / "a.txt"
    store = BackupStore()
    names = []
    for i in range(20):
        f.write_text(str(i))
        names.append(store.snapshot(f).name)

    assert len(set(names)) == 20
    assert names == sorted(names)
    assert store.latest(f).read_text() == "19"


def test_list_backups_ignores_unrelated_files(tmp_path):
    f = tmp_path / "a.txt"
    f.write_text("x")
    store = BackupStore()
    backup = store.snapshot(f)

    (tmp_path / "a.txt.bak.manual").write_text("not ours")
    (tmp_path / "ab.txt.bak.2020-01-01T00-00-00-000000Z").write_text("other file")

    assert store.list_backups(f) == [backup]


def test_latest_without_backups(tmp_path):
    assert BackupStore().latest(tmp_path / "a.txt") is None
