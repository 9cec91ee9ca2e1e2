from pathlib import Path

import pytest
from typer.testing import CliRunner

from cli import main as cli_main
from cli.main import app


runner = CliRunner()


class RecordingLauncher:
    def __init__(self):
        self.launched = []

    def launch(self, conf_path: Path) -> None:
        self.launched.append(conf_path)


@pytest.fixture
def launcher(monkeypatch):
    recording = RecordingLauncher()
    monkeypatch.setattr(cli_main, "build_launcher", lambda settings: recording)
    return recording


@pytest.fixture
def paths(tmp_path):
    return {
        "config": tmp_path / "conf" / "config.yaml",
        "out": tmp_path / "nginx" / "default.conf",
    }


def _invoke(paths, *args):
    return runner.invoke(
        app,
        ["--config-file", str(paths["config"]), "--nginx-conf", str(paths["out"]), *args],
    )


def test_single_cli_mapping_then_handoff(paths, launcher):
    result = _invoke(paths, "-r", "/foo:http://localhost:3000/foo")
    assert result.exit_code == 0, result.output
    text = paths["out"].read_text(encoding="utf-8")
    assert text.count("location ") == 1
    assert "location /foo {" in text
    assert "proxy_pass http://localhost:3000/foo;" in text
    assert launcher.launched == [paths["out"]]


def test_yaml_mappings_in_order(paths, launcher):
    paths["config"].parent.mkdir(parents=True)
    paths["config"].write_text(
        "reverse_proxy: [{path: /foo, url: http://a/foo}, {path: /bar, url: http://b/bar}]\n",
        encoding="utf-8",
    )
    result = _invoke(paths)
    assert result.exit_code == 0, result.output
    text = paths["out"].read_text(encoding="utf-8")
    assert text.count("location ") == 2
    assert text.index("proxy_pass http://a/foo;") < text.index("proxy_pass http://b/bar;")


def test_nothing_configured_exits_with_config_missing(paths, launcher):
    result = _invoke(paths)
    assert result.exit_code != 0
    assert "ConfigMissing" in result.output
    assert not paths["out"].exists()
    assert launcher.launched == []


def test_duplicate_cli_paths_exit_with_duplicate_path(paths, launcher):
    result = _invoke(
        paths,
        "-r",
        "/foo:http://localhost:3000/a",
        "-r",
        "/foo:http://localhost:3000/b",
    )
    assert result.exit_code != 0
    assert "DuplicatePath" in result.output
    assert "/foo" in result.output
    assert not paths["out"].exists()
    assert launcher.launched == []


def test_cli_flags_ignore_malformed_yaml(paths, launcher):
    paths["config"].parent.mkdir(parents=True)
    paths["config"].write_text("reverse_proxy: [{path: /x\n", encoding="utf-8")
    result = _invoke(paths, "-r", "/foo:http://localhost:3000/foo")
    assert result.exit_code == 0, result.output
    assert "location /foo {" in paths["out"].read_text(encoding="utf-8")


def test_malformed_token_is_reported(paths, launcher):
    result = _invoke(paths, "-r", "/foo")
    assert result.exit_code != 0
    assert "MalformedMapping" in result.output


def test_no_exec_skips_handoff_and_print_echoes_conf(paths, launcher):
    result = _invoke(
        paths, "--no-exec", "--print", "-H", "127.0.0.1", "-p", "8080", "-d", "example.com",
        "-r", "/:http://app:8000",
    )
    assert result.exit_code == 0, result.output
    assert launcher.launched == []
    assert "listen 127.0.0.1:8080;" in result.output
    assert "server_name example.com;" in result.output


def test_invalid_port_is_invalid_settings(paths, launcher):
    result = _invoke(paths, "-p", "0", "-r", "/foo:http://a/")
    assert result.exit_code != 0
    assert "InvalidSettings" in result.output


def test_write_failure_exits_non_zero(tmp_path, launcher):
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    result = runner.invoke(
        app,
        ["--nginx-conf", str(blocker / "default.conf"), "-r", "/foo:http://a/"],
    )
    assert result.exit_code != 0
    assert "OutputWriteFailed" in result.output
    assert launcher.launched == []


def test_launch_failure_exits_non_zero(paths, monkeypatch):
    from core.domain.errors import LaunchFailed

    class FailingLauncher:
        def launch(self, conf_path):
            raise LaunchFailed("nginx: No such file or directory")

    monkeypatch.setattr(cli_main, "build_launcher", lambda settings: FailingLauncher())
    result = _invoke(paths, "-r", "/foo:http://a/")
    assert result.exit_code != 0
    assert "LaunchFailed" in result.output
    assert paths["out"].exists()


def test_unusable_nginx_command_fails_before_writing(paths, monkeypatch):
    monkeypatch.setenv("NGINX_RP_NGINX_COMMAND", 'nginx -g "daemon off;')
    result = _invoke(paths, "-r", "/foo:http://a/")
    assert result.exit_code == 1
    assert "InvalidSettings" in result.output
    assert "nginx_command" in result.output
    assert not paths["out"].exists()


def test_errors_are_logged_with_traceback(paths, launcher, monkeypatch):
    records = []
    monkeypatch.setattr(
        cli_main.logger, "debug", lambda msg, *args, **kwargs: records.append((msg, kwargs))
    )
    result = _invoke(paths, "-r", "/foo")
    assert result.exit_code == 1
    failures = [kwargs for msg, kwargs in records if msg == "generation failed"]
    assert len(failures) == 1
    assert type(failures[0]["exc_info"]).__name__ == "MalformedMapping"
