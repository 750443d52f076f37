import pytest

from bdd_junitkit.config import ReporterConfig, capture_enabled, load_config
from bdd_junitkit.errors import ConfigError


def test_defaults():
    cfg = load_config(env={})
    assert cfg == ReporterConfig()
    assert cfg.capture is True
    assert cfg.wrapped is False
    assert cfg.report_prefix == "features"
    assert cfg.indent == 2


def test_capture_toggle():
    assert capture_enabled({}) is True
    assert capture_enabled({"CI_CAPTURE": "on"}) is True
    assert capture_enabled({"CI_CAPTURE": "OFF"}) is True
    assert capture_enabled({"CI_CAPTURE": "off"}) is False


def test_yaml_and_environment(tmp_path):
    path = tmp_path / "reporter.yaml"
    path.write_text("wrapped: true\nreport_prefix: acceptance\nreport_dir: reports\n")
    cfg = load_config(str(path), env={"CI_CAPTURE": "off", "CI_REPORTS": "/tmp/ci"})
    assert cfg.wrapped is True
    assert cfg.report_prefix == "acceptance"
    assert cfg.capture is False
    assert cfg.report_dir == "/tmp/ci"


def test_empty_file(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert load_config(str(path), env={}) == ReporterConfig()


@pytest.mark.parametrize("content", ["indent: -1\n", "- a\n- b\n", "wrapped: [unclosed\n"])
def test_invalid_config(tmp_path, content):
    path = tmp_path / "bad.yaml"
    path.write_text(content)
    with pytest.raises(ConfigError):
        load_config(str(path), env={})


def test_missing_file(tmp_path):
    with pytest.raises(ConfigError):
        load_config(str(tmp_path / "nope.yaml"), env={})
