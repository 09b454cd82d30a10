import json

import pytest

from ccconfig.commands import add_profile, list_profiles, remove_profile, update_profile
from ccconfig.context import Context
from ccconfig.errors import EnvironmentSetupError, UserInputError
from ccconfig.registry import Profile, Registry
from ccconfig.storage import REGISTRY, SETTINGS, MemoryStorage

WORK = {
    "ANTHROPIC_BASE_URL": "https://work.example",
    "ANTHROPIC_AUTH_TOKEN": "tok-work",
}


def scripted(*answers):
    it = iter(answers)
    return lambda prompt: next(it)


def make_ctx(tmp_path, storage=None, answers=(), interactive=True):
    return Context(
        storage=storage or MemoryStorage(),
        environ={},
        home=tmp_path,
        platform="linux",
        interactive=interactive,
        reader=scripted(*answers),
    )


def seeded(**profiles):
    storage = MemoryStorage()
    reg = Registry()
    for name, env in profiles.items():
        reg.put(Profile(name=name, env=dict(env)))
    storage.save_registry(reg)
    return storage


def test_list_empty(tmp_path, capsys):
    assert list_profiles(make_ctx(tmp_path)) == 0
    out = capsys.readouterr().out
    assert "No configurations found." in out
    assert "ccconfig add work" in out


def test_list_names_only(tmp_path, capsys):
    ctx = make_ctx(tmp_path, seeded(work=WORK, home={"ANTHROPIC_BASE_URL": "u"}))
    assert list_profiles(ctx, names_only=True) == 0
    assert capsys.readouterr().out == "work\nhome\n"


def test_list_marks_current(tmp_path, capsys):
    storage = seeded(work={**WORK, "ANTHROPIC_MODEL": "opus"}, other={"ANTHROPIC_BASE_URL": "u"})
    storage.write_snapshot({**WORK, "ANTHROPIC_MODEL": "opus"})
    list_profiles(make_ctx(tmp_path, storage))
    out = capsys.readouterr().out
    assert "  work ← current" in out
    assert "    URL: https://work.example" in out
    assert "    Model: opus" in out
    assert "Currently active: work (env mode)" in out
    assert "tok-work" not in out


def test_list_without_active(tmp_path, capsys):
    list_profiles(make_ctx(tmp_path, seeded(work=WORK)))
    assert "not configured yet" in capsys.readouterr().out


def test_list_reports_unlisted_custom_configuration(tmp_path, capsys):
    storage = seeded(work=WORK)
    storage.texts[SETTINGS] = json.dumps({"env": {"ANTHROPIC_BASE_URL": "https://other"}})
    assert list_profiles(make_ctx(tmp_path, storage)) == 0
    out = capsys.readouterr().out
    assert "Currently using custom configuration (not in configuration list)" in out
    assert "  URL: https://other" in out
    assert "← current" not in out


def test_list_reads_corrupt_settings_once(tmp_path, capsys):
    storage = seeded(work=WORK)
    storage.set_mode("settings")
    storage.texts[SETTINGS] = "{broken"
    assert list_profiles(make_ctx(tmp_path, storage)) == 0
    captured = capsys.readouterr()
    assert captured.err.count("Unable to read Claude settings file") == 1
    assert "not configured yet" in captured.out


def test_add_with_scripted_answers(tmp_path, capsys):
    storage = MemoryStorage()
    ctx = make_ctx(tmp_path, storage, answers=["", "tok", "", "", "", "Work box"])
    assert add_profile(ctx, "work") == 0
    profile = storage.load_registry().get("work")
    assert profile.env == {
        "ANTHROPIC_BASE_URL": "https://api.anthropic.com",
        "ANTHROPIC_AUTH_TOKEN": "tok",
        "ANTHROPIC_API_KEY": "",
    }
    assert profile.description == "Work box"
    out = capsys.readouterr().out
    assert "Configuration file created" in out
    assert "Configuration 'work' added" in out
    assert "ccconfig use work" in out


def test_add_prompts_for_name(tmp_path):
    storage = MemoryStorage()
    answers = ["proxy", "https://p", "", "key", "m", "", ""]
    add_profile(make_ctx(tmp_path, storage, answers=answers))
    profile = storage.load_registry().get("proxy")
    assert profile.env == {
        "ANTHROPIC_BASE_URL": "https://p",
        "ANTHROPIC_AUTH_TOKEN": "",
        "ANTHROPIC_API_KEY": "key",
        "ANTHROPIC_MODEL": "m",
    }


def test_add_requires_interactive(tmp_path):
    storage = MemoryStorage()
    with pytest.raises(EnvironmentSetupError):
        add_profile(make_ctx(tmp_path, storage, interactive=False), "work")
    assert not storage.registry_exists()


def test_add_duplicate_is_rejected(tmp_path):
    storage = seeded(work=WORK)
    before = storage.texts[REGISTRY]
    with pytest.raises(UserInputError) as exc:
        add_profile(make_ctx(tmp_path, storage), "work")
    assert "already exists" in exc.value.message
    assert storage.texts[REGISTRY] == before


def test_add_invalid_name(tmp_path):
    with pytest.raises(UserInputError) as exc:
        add_profile(make_ctx(tmp_path), "bad name")
    assert "Invalid configuration name" in exc.value.message


def test_update_keeps_and_clears_values(tmp_path):
    storage = seeded(
        work={**WORK, "ANTHROPIC_API_KEY": "", "ANTHROPIC_MODEL": "m1", "CUSTOM_FLAG": "1"}
    )
    ctx = make_ctx(tmp_path, storage, answers=["", "new-tok", "", "null", "", ""])
    assert update_profile(ctx, "work") == 0
    assert storage.load_registry().get("work").env == {
        "ANTHROPIC_BASE_URL": "https://work.example",
        "ANTHROPIC_AUTH_TOKEN": "new-tok",
        "ANTHROPIC_API_KEY": "",
        "CUSTOM_FLAG": "1",
    }


def test_update_missing_profile(tmp_path):
    with pytest.raises(UserInputError) as exc:
        update_profile(make_ctx(tmp_path, seeded(work=WORK)), "ghost")
    assert "ccconfig add ghost" in " ".join(exc.value.hints)


def test_remove_profile(tmp_path, capsys):
    storage = seeded(work=WORK, home={"ANTHROPIC_BASE_URL": "u"})
    assert remove_profile(make_ctx(tmp_path, storage), "home") == 0
    assert [p.name for p in storage.load_registry()] == ["work"]
    assert "Configuration 'home' removed" in capsys.readouterr().out


def test_remove_ghost_leaves_registry_unchanged(tmp_path):
    storage = seeded(work=WORK)
    before = storage.texts[REGISTRY]
    with pytest.raises(UserInputError):
        remove_profile(make_ctx(tmp_path, storage), "ghost")
    assert storage.texts[REGISTRY] == before


def test_remove_without_registry(tmp_path):
    with pytest.raises(UserInputError) as exc:
        remove_profile(make_ctx(tmp_path), "work")
    assert exc.value.message == "Configuration file does not exist"


def test_remove_active_profile_warns_variables_remain(tmp_path, capsys):
    storage = seeded(work=WORK)
    storage.write_snapshot(WORK)
    remove_profile(make_ctx(tmp_path, storage), "work")
    assert "active configuration" in capsys.readouterr().out
    assert storage.read_snapshot() == WORK
