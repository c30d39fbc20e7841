from pathlib import Path

from wom_sync import paths


def test_repo_root_finds_pyproject_from_nested_start():
    start = Path(__file__).resolve().parent / "classes"
    root = paths.find_repo_root(start)
    assert root == Path(__file__).resolve().parents[1]


def test_repo_file_joins_repo_root():
    resolved = paths.repo_file("logging.ini")
    assert resolved == Path(__file__).resolve().parents[1] / "logging.ini"


def test_find_repo_root_falls_back_to_cwd(tmp_path, monkeypatch, caplog):
    caplog.set_level("DEBUG", logger="wom_sync.paths")
    monkeypatch.chdir(tmp_path)
    start = tmp_path / "a" / "b"
    start.mkdir(parents=True)
    assert paths.find_repo_root(start) == tmp_path
    assert "using working directory" in caplog.text
