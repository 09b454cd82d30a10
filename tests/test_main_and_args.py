import json

import pytest

import ccconfig.launcher as launcher
import ccconfig.main_flow as main_flow
from ccconfig.args import parse_args
from ccconfig.main_flow import main

WORK = {"ANTHROPIC_BASE_URL": "https://api.x.com", "ANTHROPIC_AUTH_TOKEN": "tok"}

_SHELL_HINTS = (
    "SHELL",
    "FISH_VERSION",
    "ZSH_NAME",
    "ZSH_VERSION",
    "POWERSHELL_DISTRIBUTION_CHANNEL",
)


@pytest.fixture
def home(monkeypatch, tmp_path):
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("CCCONFIG_HOME", str(tmp_path / "cfg"))
    monkeypatch.setenv("CLAUDE_CONFIG_DIR", str(tmp_path / "claude"))
    for key in _SHELL_HINTS:
        monkeypatch.delenv(key, raising=False)
    return tmp_path


def seed(home, **profiles):
    cfg = home / "cfg"
    cfg.mkdir(parents=True, exist_ok=True)
    data = {"profiles": {name: {"env": env} for name, env in profiles.items()}}
    (cfg / "profiles.json").write_text(json.dumps(data), encoding="utf-8")


def test_parse_args_shapes():
    assert parse_args([]).cmd == "list"
    assert parse_args(["ls", "--names"]).names is True
    assert parse_args(["rm", "x"]).cmd == "remove"
    ns = parse_args(["use", "work", "-p"])
    assert (ns.cmd, ns.name, ns.permanent) == ("use", "work", True)
    ns = parse_args(["start", "work", "--model", "opus", "-p", "hi"])
    assert ns.claude_args == ["--model", "opus", "-p", "hi"]
    ns = parse_args(["safe-start", "work", "--", "--help"])
    assert ns.claude_args == ["--help"]
    assert parse_args(["env"]).format == "bash"


def test_version(home, capsys):
    assert main(["--version"]) == 0
    assert capsys.readouterr().out.startswith("ccconfig version ")


def test_help_exits_zero(home, capsys):
    assert main(["--help"]) == 0
    assert "safe-start" in capsys.readouterr().out


def test_no_command_lists(home, capsys):
    assert main([]) == 0
    assert "No configurations found." in capsys.readouterr().out


def test_unknown_command_exits_1(home, capsys):
    assert main(["bogus"]) == 1
    assert "invalid choice" in capsys.readouterr().err


def test_reported_errors_go_to_stderr(home, capsys):
    seed(home, work=WORK)
    assert main(["use"]) == 1
    captured = capsys.readouterr()
    assert "Missing configuration name" in captured.err
    assert "Usage: ccconfig use <name>" in captured.err
    assert captured.out == ""


def test_add_needs_a_terminal(home, capsys):
    assert main(["add", "work"]) == 1
    assert "Interactive mode required" in capsys.readouterr().err


def test_use_then_env_round_trip(home, capsys):
    seed(home, work=WORK)
    assert main(["use", "work"]) == 0
    capsys.readouterr()
    assert main(["env", "bash"]) == 0
    assert capsys.readouterr().out == (
        "export ANTHROPIC_BASE_URL='https://api.x.com'\n"
        "export ANTHROPIC_AUTH_TOKEN='tok'\n"
    )
    assert main(["ls"]) == 0
    assert "work ← current" in capsys.readouterr().out


def test_remove_alias(home, capsys):
    seed(home, work=WORK, personal=WORK)
    assert main(["rm", "personal"]) == 0
    capsys.readouterr()
    assert main(["list", "--names"]) == 0
    assert capsys.readouterr().out == "work\n"


def test_invalid_mode_exits_1(home, capsys):
    assert main(["mode", "bogus"]) == 1
    assert "Invalid mode 'bogus'" in capsys.readouterr().err
    assert not (home / "cfg" / "mode").exists()


def test_empty_mode_exits_1(home, capsys):
    assert main(["mode", ""]) == 1
    assert "Invalid mode ''" in capsys.readouterr().err
    assert not (home / "cfg" / "mode").exists()


def test_start_propagates_child_exit_code(home, monkeypatch):
    seed(home, work=WORK)
    calls = []

    def fake_run(cmd, **kwargs):
        calls.append(cmd)

        class R:
            returncode = 7

        return R()

    monkeypatch.setattr(launcher.shutil, "which", lambda name: "/opt/bin/claude")
    monkeypatch.setattr(launcher.subprocess, "run", fake_run)
    assert main(["start", "work", "--model", "opus"]) == 7
    assert calls == [["/opt/bin/claude", "--dangerously-skip-permissions", "--model", "opus"]]


def test_keyboard_interrupt_exits_130(home, monkeypatch, capsys):
    def interrupted(ctx, args):
        raise KeyboardInterrupt

    monkeypatch.setattr(main_flow, "dispatch", interrupted)
    assert main(["list"]) == 130
    assert "Aborted by user." in capsys.readouterr().err


def test_json_logs_stay_off_stdout(home, capsys):
    assert main(["--log-json", "--log-level", "info", "mode", "settings"]) == 0
    captured = capsys.readouterr()
    assert '"event": "mode_changed"' in captured.err
    assert "mode_changed" not in captured.out
