import json
import os
import sys

ROOT = os.path.dirname(os.path.dirname(__file__))
sys.path.insert(0, os.path.join(ROOT, "scripts"))

from inspect_session import main  # noqa: E402

from gridnav.persistence.storage import JsonFileSessionStorage  # noqa: E402
from gridnav.store.store import GridNavigationStore  # noqa: E402


def seed(tmp_path, session_id="tab-1"):
    store = GridNavigationStore.create(storage=JsonFileSessionStorage(str(tmp_path), session_id))
    store.update_grid_state("products", {"page": 3})
    store.push_navigation("products", "/products")
    return store


def test_prints_payload(tmp_path, capsys):
    seed(tmp_path)

    code = main(["--session-id", "tab-1", "--backend", "file", "--storage-dir", str(tmp_path)])

    assert code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["activeGridState"]["products"]["page"] == 3
    assert len(payload["navigationStack"]) == 1


def test_clear_history(tmp_path, capsys):
    seed(tmp_path)

    main([
        "--session-id", "tab-1", "--backend", "file",
        "--storage-dir", str(tmp_path), "--clear-history",
    ])

    payload = json.loads(capsys.readouterr().out)
    assert payload["navigationStack"] == []
    assert payload["activeGridState"]["products"]["page"] == 3


def test_end_session(tmp_path, capsys):
    seed(tmp_path)

    code = main([
        "--session-id", "tab-1", "--backend", "file",
        "--storage-dir", str(tmp_path), "--end-session",
    ])

    assert code == 0
    assert "Ended session tab-1" in capsys.readouterr().out
    assert not (tmp_path / "tab-1.json").exists()


def test_end_session_memory_backend_fails(capsys):
    code = main(["--session-id", "x", "--backend", "memory", "--end-session"])
    assert code == 1
    assert "has no sessions" in capsys.readouterr().err


def test_purge_older_than_removes_abandoned_rows(tmp_path, capsys):
    db_url = f"sqlite:///{tmp_path / 'gridnav.db'}"
    common = ["--backend", "sqlite", "--database-url", db_url]
    main(["--session-id", "old-tab", *common])
    capsys.readouterr()

    code = main(["--session-id", "admin", *common, "--purge-older-than", "-1"])

    assert code == 0
    assert "Purged 1 stale row(s)" in capsys.readouterr().out


def test_purge_requires_sqlite_backend(capsys):
    code = main(["--session-id", "x", "--backend", "memory", "--purge-older-than", "24"])
    assert code == 1
    assert "cannot purge" in capsys.readouterr().err
