from ccconfig.escaping import (
    escape_env_value,
    fish_quote,
    posix_quote,
    powershell_quote,
    unescape_env_value,
)


def test_escape_special_characters():
    assert escape_env_value("a\\b\nc\rd\te") == "a\\\\b\\nc\\rd\\te"


def test_unescape_reverses_escape_for_tricky_values():
    for value in ["C:\\new\\table", "line1\nline2", "\\n literal", "tab\there", "x=y=z", ""]:
        assert unescape_env_value(escape_env_value(value)) == value


def test_unescape_keeps_unknown_sequences():
    assert unescape_env_value("a\\qb") == "a\\qb"
    assert unescape_env_value("trailing\\") == "trailing\\"


def test_posix_quote_embedded_single_quote():
    assert posix_quote("it's") == "'it'\\''s'"
    assert posix_quote("$HOME `x`") == "'$HOME `x`'"


def test_fish_quote_escapes_backslash_quote_and_dollar():
    assert fish_quote('a"$b\\') == '"a\\"\\$b\\\\"'


def test_powershell_quote_doubles_single_quotes():
    assert powershell_quote("it's") == "'it''s'"
