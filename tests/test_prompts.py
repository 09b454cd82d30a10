import builtins

import pytest

from ccconfig.errors import EnvironmentSetupError
from ccconfig.prompts import (
    ask,
    confirm_explicit,
    is_null_input,
    require_interactive,
    safe_input,
)


def test_is_null_input():
    assert is_null_input("null")
    assert is_null_input("  NULL ")
    assert not is_null_input("")
    assert not is_null_input("nullable")


def test_safe_input_reads_a_line(monkeypatch):
    monkeypatch.setattr(builtins, "input", lambda prompt: "answer")
    assert safe_input("Name: ") == "answer"


def test_safe_input_propagates_ctrl_c(monkeypatch, capsys):
    def interrupted(prompt):
        raise KeyboardInterrupt

    monkeypatch.setattr(builtins, "input", interrupted)
    with pytest.raises(KeyboardInterrupt):
        safe_input("Name: ")
    assert capsys.readouterr().out == "\n"


def test_ask_uses_safe_input_by_default(monkeypatch):
    seen = []
    monkeypatch.setattr(builtins, "input", lambda prompt: seen.append(prompt) or "")
    assert ask("Model", default="opus") == "opus"
    assert seen == ["Model (opus): "]


def test_confirm_explicit_only_accepts_yes():
    assert confirm_explicit("Delete?", reader=lambda prompt: " YES ")
    assert confirm_explicit("Delete?", reader=lambda prompt: "y")
    assert not confirm_explicit("Delete?", reader=lambda prompt: "sure")


def test_require_interactive():
    require_interactive(True, "add")
    with pytest.raises(EnvironmentSetupError) as exc:
        require_interactive(False, "add")
    assert exc.value.message == "Interactive mode required for add"
