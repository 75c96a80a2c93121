import pytest

from xray import cli
from xray.store.json_store import JsonRecordStore


@pytest.fixture
def env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("XRAY_STORE_BACKEND", "json")
    monkeypatch.setenv("XRAY_TRACES_DIR", str(tmp_path / "traces"))
    monkeypatch.setenv("LOG_DIR", str(tmp_path / "logs"))
    return tmp_path


def test_generate_fixtures_writes_two_runs(env):
    (env / "traces").mkdir()
    (env / "traces" / "stale.json").write_text("{}", encoding="utf-8")

    assert cli.main(["generate-fixtures"]) == 0

    entries = JsonRecordStore(env / "traces").list()
    assert len(entries) == 6
    assert not (env / "traces" / "stale.json").exists()


def test_generate_fixtures_fails_when_store_unwritable(env, monkeypatch):
    (env / "blocker").write_text("x", encoding="utf-8")
    monkeypatch.setenv("XRAY_TRACES_DIR", str(env / "blocker" / "traces"))
    assert cli.main(["generate-fixtures"]) == 1


def test_serve_launches_streamlit(env, monkeypatch):
    calls = []
    monkeypatch.setattr(cli.subprocess, "call", lambda cmd: calls.append(cmd) or 0)
    assert cli.main(["serve", "--port", "8600"]) == 0
    cmd = calls[0]
    assert cmd[1:4] == ["-m", "streamlit", "run"]
    assert cmd[4].endswith("streamlit_app.py")
    assert cmd[-2:] == ["--server.port", "8600"]


def test_unknown_command_exits_nonzero(env):
    with pytest.raises(SystemExit) as exc:
        cli.main(["explode"])
    assert exc.value.code != 0
