import pytest

import ccconfig.launcher as launcher
from ccconfig.commands import start_profile
from ccconfig.context import Context
from ccconfig.errors import EnvironmentSetupError, LaunchError, UserInputError
from ccconfig.registry import Profile, Registry
from ccconfig.storage import MemoryStorage

WORK = {"ANTHROPIC_BASE_URL": "https://work.example", "ANTHROPIC_AUTH_TOKEN": "tok"}


def make_ctx(tmp_path):
    storage = MemoryStorage()
    reg = Registry()
    reg.put(Profile(name="work", env=dict(WORK)))
    reg.put(Profile(name="empty", env={}))
    storage.save_registry(reg)
    return Context(
        storage=storage,
        environ={"PATH": "/usr/bin", "ANTHROPIC_AUTH_TOKEN": "outer"},
        home=tmp_path,
        platform="linux",
    )


def make_run(monkeypatch, calls, returncode=0, exc=None):
    def fake_run(cmd, **kwargs):
        calls.append((cmd, kwargs))
        if exc is not None:
            raise exc

        class R:
            pass

        r = R()
        r.returncode = returncode
        return r

    monkeypatch.setattr(launcher.subprocess, "run", fake_run)


def test_start_prepends_skip_permissions(monkeypatch, tmp_path):
    calls = []
    monkeypatch.setattr(launcher.shutil, "which", lambda name: "/usr/bin/claude")
    make_run(monkeypatch, calls, returncode=3)
    assert start_profile(make_ctx(tmp_path), "work", ["--resume", "x"]) == 3
    cmd, kwargs = calls[0]
    assert cmd == ["/usr/bin/claude", "--dangerously-skip-permissions", "--resume", "x"]
    assert kwargs["env"]["ANTHROPIC_AUTH_TOKEN"] == "tok"
    assert kwargs["env"]["ANTHROPIC_BASE_URL"] == "https://work.example"
    assert kwargs["env"]["PATH"] == "/usr/bin"


def test_safe_start_passes_args_untouched(monkeypatch, tmp_path):
    calls = []
    monkeypatch.setattr(launcher.shutil, "which", lambda name: "/usr/bin/claude")
    make_run(monkeypatch, calls)
    assert start_profile(make_ctx(tmp_path), "work", ["-p", "hi"], safe=True) == 0
    assert calls[0][0] == ["/usr/bin/claude", "-p", "hi"]


def test_start_does_not_touch_storage(monkeypatch, tmp_path):
    calls = []
    ctx = make_ctx(tmp_path)
    before = dict(ctx.storage.texts)
    monkeypatch.setattr(launcher.shutil, "which", lambda name: "/usr/bin/claude")
    make_run(monkeypatch, calls)
    start_profile(ctx, "work")
    assert ctx.storage.texts == before


def test_missing_binary_fails_before_spawn(monkeypatch, tmp_path):
    calls = []
    monkeypatch.setattr(launcher.shutil, "which", lambda name: None)
    make_run(monkeypatch, calls)
    with pytest.raises(EnvironmentSetupError) as exc:
        start_profile(make_ctx(tmp_path), "work")
    assert "npm install -g @anthropic-ai/claude-code" in " ".join(exc.value.hints)
    assert calls == []


def test_empty_profile_is_rejected(monkeypatch, tmp_path):
    calls = []
    monkeypatch.setattr(launcher.shutil, "which", lambda name: "/usr/bin/claude")
    make_run(monkeypatch, calls)
    with pytest.raises(UserInputError):
        start_profile(make_ctx(tmp_path), "empty")
    assert calls == []


def test_spawn_failure_raises_launch_error(monkeypatch, tmp_path):
    monkeypatch.setattr(launcher.shutil, "which", lambda name: "/usr/bin/claude")
    make_run(monkeypatch, [], exc=PermissionError("denied"))
    with pytest.raises(LaunchError):
        start_profile(make_ctx(tmp_path), "work")


def test_keyboard_interrupt_returns_130(monkeypatch, tmp_path):
    monkeypatch.setattr(launcher.shutil, "which", lambda name: "/usr/bin/claude")
    make_run(monkeypatch, [], exc=KeyboardInterrupt())
    assert start_profile(make_ctx(tmp_path), "work") == 130


def test_signal_exit_maps_to_128_plus_signal(monkeypatch):
    monkeypatch.setattr(launcher.shutil, "which", lambda name: "/usr/bin/claude")
    make_run(monkeypatch, [], returncode=-15)
    assert launcher.launch_claude(WORK, base_env={}) == 143


def test_build_child_env_coerces_values():
    env = launcher.build_child_env({"KEEP": "1", "N": "old"}, {"N": 5, "X": None})
    assert env == {"KEEP": "1", "N": "5", "X": ""}
