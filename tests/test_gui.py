from pathlib import Path

import pytest

from smartorganizer.gui import OrganizeJob
from smartorganizer.history import HistoryManager


@pytest.fixture
def tree(tmp_path: Path) -> Path:
    src = tmp_path / "src"
    src.mkdir()
    (src / "a.txt").write_text("alpha")
    (src / "b.PNG").write_text("beta")
    return src


def test_job_moves_files_and_records_history(tmp_path, tree):
    dst = tmp_path / "dst"
    history = tmp_path / "state" / "history.json"
    job = OrganizeJob(tree, dst, history_path=history)
    job.start()
    assert job.wait(10) is True
    assert job.is_running() is False
    assert (dst / "txt" / "a.txt").read_text() == "alpha"
    assert (dst / "png" / "b.PNG").read_text() == "beta"
    assert not (tree / "a.txt").exists()
    assert len(HistoryManager(history).load().moves) == 2
    assert job.last_error() is None


def test_job_without_destination_nests_in_source(tmp_path, tree):
    job = OrganizeJob(tree, None, history_path=tmp_path / "h.json")
    job.start()
    assert job.wait(10)
    assert (tree / "txt" / "a.txt").read_text() == "alpha"


def test_dry_run_leaves_files(tmp_path, tree):
    history = tmp_path / "h.json"
    job = OrganizeJob(tree, tmp_path / "dst", dry_run=True, history_path=history)
    job.start()
    assert job.wait(10)
    assert (tree / "a.txt").read_text() == "alpha"
    assert HistoryManager(history).load().moves == []


def test_cancel_before_start_moves_nothing(tmp_path, tree):
    job = OrganizeJob(tree, tmp_path / "dst", history_path=tmp_path / "h.json")
    job.cancel()
    job.start()
    assert job.wait(10)
    assert sorted(p.name for p in tree.iterdir()) == ["a.txt", "b.PNG"]


def test_start_twice_raises(tmp_path, tree):
    job = OrganizeJob(tree, tmp_path / "dst", history_path=tmp_path / "h.json")
    job.start()
    with pytest.raises(RuntimeError):
        job.start()
    assert job.wait(10)


def test_wait_before_start_is_immediate(tmp_path, tree):
    job = OrganizeJob(tree, history_path=tmp_path / "h.json")
    assert job.wait(0) is True
    assert job.is_running() is False


def test_unwritable_history_is_reported(tmp_path, tree):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a folder")
    job = OrganizeJob(tree, tmp_path / "dst", history_path=blocker / "history.json")
    job.start()
    assert job.wait(10)
    error = job.last_error()
    assert error is not None and error.strip() != ""