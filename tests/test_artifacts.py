import re
from types import SimpleNamespace

from bdd_junitkit.utils.artifacts import MAX_FILENAME_SIZE, ReportManager


def suite(name):
    return SimpleNamespace(name=name)


def test_filename_is_sanitized(tmp_path):
    manager = ReportManager("features", str(tmp_path))
    path = manager.filename_for(suite("Login succeeds (uid:42)"))
    assert path == tmp_path / "FEATURES-Login-succeeds-uid-42-.xml"


def test_long_names_are_shortened_with_digest(tmp_path):
    manager = ReportManager("features", str(tmp_path))
    path = manager.filename_for(suite("x" * 400))
    assert len(path.name) == MAX_FILENAME_SIZE
    assert re.search(r"-[0-9a-f]{8}\.xml$", path.name)
    other = manager.filename_for(suite("x" * 399 + "y"))
    assert other != path


def test_repeated_names_are_numbered(tmp_path):
    manager = ReportManager("features", str(tmp_path))
    first = manager.write_report(suite("Same (uid:1)"), b"<a/>")
    second = manager.write_report(suite("Same (uid:1)"), b"<b/>")
    assert first.name == "FEATURES-Same-uid-1-.xml"
    assert second.name == "FEATURES-Same-uid-1--1.xml"
    assert first.read_bytes() == b"<a/>"
    assert second.read_bytes() == b"<b/>"


def test_base_dir_from_environment(tmp_path, monkeypatch):
    target = tmp_path / "ci" / "reports"
    monkeypatch.setenv("CI_REPORTS", str(target))
    manager = ReportManager()
    assert manager.base_dir == target
    assert target.is_dir()


def test_default_base_dir(tmp_path, monkeypatch):
    monkeypatch.delenv("CI_REPORTS", raising=False)
    monkeypatch.chdir(tmp_path)
    manager = ReportManager("Features")
    assert manager.base_dir == tmp_path / "features" / "reports"
    assert manager.base_dir.is_dir()
    assert manager.filename_for(suite("A")).name == "FEATURES-A.xml"
