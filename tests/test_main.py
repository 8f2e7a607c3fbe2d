"""Tests for the command-line entrypoint."""

import os
import tomllib
from unittest.mock import patch

import pytest

from args import parse_args
from constants import Constants, ExitCodes
from pydepsync import main, run

PYPROJECT = '[project]\nname = "demo"\nversion = "0.1.0"\ndependencies = ["requests"]\n'


@pytest.fixture
def project(tmp_path, monkeypatch):
    (tmp_path / "pyproject.toml").write_text(PYPROJECT, encoding="utf-8")
    (tmp_path / "app.py").write_text("import requests\nimport yaml\nimport os\n", encoding="utf-8")
    # keep any .pydepsync.toml in the caller's cwd out of the picture
    monkeypatch.chdir(tmp_path)
    return tmp_path


def _pin(spec):
    return spec.with_version("~=", "6.0.1")


@patch("registry.pypi.resolver.PackageIndexResolver.resolve", side_effect=_pin)
def test_run_updates_pyproject(mock_resolve, project):
    code = run(parse_args([str(project)]))

    assert code == ExitCodes.SUCCESS.value
    data = tomllib.loads((project / "pyproject.toml").read_text(encoding="utf-8"))
    assert data["project"]["dependencies"] == ["PyYAML~=6.0.1", "requests"]
    assert mock_resolve.call_count == 1


@patch("registry.pypi.resolver.PackageIndexResolver.resolve", side_effect=_pin)
def test_dry_run_prints_and_leaves_file(mock_resolve, project, capsys):
    code = run(parse_args([str(project), "--dry-run"]))

    assert code == ExitCodes.SUCCESS.value
    assert capsys.readouterr().out.strip() == "PyYAML~=6.0.1"
    assert (project / "pyproject.toml").read_text(encoding="utf-8") == PYPROJECT


@patch("registry.pypi.resolver.PackageIndexResolver.resolve")
def test_nothing_new(mock_resolve, project, caplog):
    (project / "app.py").write_text("import requests\n", encoding="utf-8")

    with caplog.at_level("INFO"):
        code = run(parse_args([str(project)]))

    assert code == ExitCodes.SUCCESS.value
    assert "nothing to do" in caplog.text
    mock_resolve.assert_not_called()


def test_missing_pyproject(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert run(parse_args([str(tmp_path)])) == ExitCodes.FILE_ERROR.value


def test_parse_failure_exit_code(project):
    (project / "bad.py").write_text("import (\n", encoding="utf-8")
    assert run(parse_args([str(project)])) == ExitCodes.FILE_ERROR.value


def test_bad_explicit_config(project):
    assert run(parse_args([str(project), "-c", str(project / "missing.yml")])) == \
        ExitCodes.FILE_ERROR.value


@patch("registry.pypi.resolver.PackageIndexResolver.resolve", side_effect=_pin)
def test_explicit_pyproject_path(mock_resolve, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    src = tmp_path / "src"
    src.mkdir()
    (src / "mod.py").write_text("import yaml\n", encoding="utf-8")
    manifest = tmp_path / "pyproject.toml"
    manifest.write_text(PYPROJECT, encoding="utf-8")

    code = run(parse_args([str(src), "--pyproject", str(manifest)]))

    assert code == ExitCodes.SUCCESS.value
    assert "PyYAML~=6.0.1" in manifest.read_text(encoding="utf-8")


@patch("pydepsync.configure_logging")
@patch("registry.pypi.resolver.PackageIndexResolver.resolve", side_effect=_pin)
def test_main_exits_with_run_code(mock_resolve, mock_logging, project, monkeypatch):
    monkeypatch.setenv(Constants.ENV_LOG_LEVEL, "INFO")
    with pytest.raises(SystemExit) as exc:
        main([str(project), "--dry-run", "--loglevel", "DEBUG"])
    assert exc.value.code == ExitCodes.SUCCESS.value
    mock_logging.assert_called_once_with(None)


@patch("pydepsync.configure_logging")
@patch("registry.pypi.resolver.PackageIndexResolver.resolve", side_effect=_pin)
def test_env_log_level_used_without_flag(mock_resolve, mock_logging, project, monkeypatch):
    monkeypatch.setenv(Constants.ENV_LOG_LEVEL, "DEBUG")
    with pytest.raises(SystemExit):
        main([str(project), "--dry-run"])
    assert os.environ[Constants.ENV_LOG_LEVEL] == "DEBUG"


@patch("pydepsync.configure_logging")
@patch("registry.pypi.resolver.PackageIndexResolver.resolve", side_effect=_pin)
def test_flag_overrides_env_log_level(mock_resolve, mock_logging, project, monkeypatch):
    monkeypatch.setenv(Constants.ENV_LOG_LEVEL, "DEBUG")
    with pytest.raises(SystemExit):
        main([str(project), "--dry-run", "--loglevel", "WARNING"])
    assert os.environ[Constants.ENV_LOG_LEVEL] == "WARNING"
