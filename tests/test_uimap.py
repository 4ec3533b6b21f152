import json
from pathlib import Path

import pytest

from zermelo.zermelo_constants import CANONICAL_TOKEN_MAP, CANONICAL_TOKENS
from zermelo.zermelo_lexer import Token
from zermelo.zermelo_uimap import MappingError, UserInterfaceMapper


def test_dict_mode_basic() -> None:
    uimap = UserInterfaceMapper()
    uimap.configure({"join": "UNION", "meet": "INTERSECTION"})
    assert uimap.token_map["join"] == "UNION"
    assert uimap.token_map["meet"] == "INTERSECTION"


def test_dict_mode_alias_groups() -> None:
    uimap = UserInterfaceMapper()
    uimap.configure({("cup", "join"): "UNION"})
    assert uimap.token_map == {"cup": "UNION", "join": "UNION"}


def test_dict_mode_alias_conflict_raises() -> None:
    uimap = UserInterfaceMapper()
    uimap.configure({"join": "UNION"})
    with pytest.raises(MappingError) as e:
        uimap.configure({"join": "INTERSECTION"})
    assert "Alias collision" in str(e.value)
    assert e.value.conflicts == ["'join' → conflict between UNION and INTERSECTION"]
    assert uimap.token_map["join"] == "UNION"


def test_reconfiguring_same_alias_is_allowed() -> None:
    uimap = UserInterfaceMapper()
    uimap.configure({"join": "UNION"})
    uimap.configure({"join": "UNION"})
    assert uimap.token_map == {"join": "UNION"}


def test_rejected_configuration_changes_nothing() -> None:
    uimap = UserInterfaceMapper()
    with pytest.raises(MappingError):
        uimap.configure({"ok": "UNION", "bad word": "COMPLEMENT"})
    assert uimap.token_map == {}


def test_dict_mode_invalid_symbol_raises() -> None:
    with pytest.raises(MappingError, match="Unknown symbolic token name"):
        UserInterfaceMapper().configure({"foo": "NOT_A_SYMBOL"})


@pytest.mark.parametrize("alias", ["", "1st", "<=", "a-b", "Øx", "née"])
def test_alias_must_be_a_word(alias: str) -> None:
    with pytest.raises(MappingError, match="Alias must be a word"):
        UserInterfaceMapper().configure({alias: "UNION"})


def test_alias_cannot_shadow_keyword() -> None:
    with pytest.raises(MappingError, match="shadows a keyword"):
        UserInterfaceMapper().configure({"c": "UNION"})


def test_list_mode_basic() -> None:
    uimap = UserInterfaceMapper()
    uimap.configure([["v"], ["none", "nil"], "star"])
    assert uimap.token_map["v"] == CANONICAL_TOKENS[0] == "VARIABLE"
    assert uimap.token_map["nil"] == CANONICAL_TOKENS[1] == "EMPTY_SET"
    assert uimap.token_map["star"] == CANONICAL_TOKENS[2] == "ASTERISK"


def test_list_mode_too_many_entries_raises() -> None:
    with pytest.raises(MappingError, match="Too many entries"):
        UserInterfaceMapper().configure([["x"]] * (len(CANONICAL_TOKENS) + 1))


def test_list_mode_conflicting_aliases() -> None:
    with pytest.raises(MappingError, match="Alias collision"):
        UserInterfaceMapper().configure([["same"], ["same"]])


def test_bad_configuration_type() -> None:
    with pytest.raises(MappingError, match="either a list or a dict"):
        UserInterfaceMapper().configure("union")  # type: ignore[arg-type]


def test_extract_aliases_all_types() -> None:
    uimap = UserInterfaceMapper()
    assert uimap._extract_aliases(None) == []
    assert uimap._extract_aliases("abc") == ["abc"]
    assert uimap._extract_aliases(["a", ("b",)]) == ["a", "b"]
    assert uimap._extract_aliases({"k": None}) == ["k"]
    assert uimap._extract_aliases(3.5) == []


def test_get_token() -> None:
    uimap = UserInterfaceMapper.from_canonical()
    assert uimap.get_token("union", 2, 3) == Token("UNION", "union", 2, 3)
    assert uimap.get_token("unknown") is None


def test_from_canonical_covers_default_words() -> None:
    uimap = UserInterfaceMapper.from_canonical()
    assert uimap.token_map == CANONICAL_TOKEN_MAP
    assert uimap.session_diff() == {}


def test_session_diff_lists_user_aliases() -> None:
    uimap = UserInterfaceMapper.from_canonical()
    uimap.configure({"join": "UNION"})
    assert uimap.session_diff() == {"join": "UNION"}


def test_report() -> None:
    uimap = UserInterfaceMapper()
    uimap.configure({"join": "UNION"})
    assert uimap.report() == "        join → UNION"
    slot = CANONICAL_TOKENS.index("UNION")
    assert f"(slot {slot})" in uimap.report(verbose=True)


def test_load_from_json(tmp_path: Path) -> None:
    path = tmp_path / "sugar.json"
    path.write_text(json.dumps({"join, cup": "UNION", "meet": "INTERSECTION"}))
    uimap = UserInterfaceMapper()
    uimap.load_from_json(str(path))
    assert uimap.token_map == {"join": "UNION", "cup": "UNION", "meet": "INTERSECTION"}


def test_load_from_json_missing_file(tmp_path: Path) -> None:
    with pytest.raises(MappingError, match="Failed to load sugar file"):
        UserInterfaceMapper().load_from_json(str(tmp_path / "missing.json"))


def test_load_from_json_invalid_json(tmp_path: Path) -> None:
    path = tmp_path / "sugar.json"
    path.write_text("{not json")
    with pytest.raises(MappingError, match="Failed to load sugar file"):
        UserInterfaceMapper().load_from_json(str(path))


def test_load_from_json_propagates_mapping_errors(tmp_path: Path) -> None:
    path = tmp_path / "sugar.json"
    path.write_text(json.dumps({"join": "NOPE"}))
    with pytest.raises(MappingError, match="Unknown symbolic token name"):
        UserInterfaceMapper().load_from_json(str(path))


def test_from_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = tmp_path / "sugar.json"
    path.write_text(json.dumps({"join": "UNION"}))
    monkeypatch.setenv("ZERMELO_SUGAR", str(path))
    uimap = UserInterfaceMapper.from_env()
    assert uimap.token_map["join"] == "UNION"
    assert uimap.token_map["union"] == "UNION"


def test_from_env_unset(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("ZERMELO_SUGAR", raising=False)
    assert UserInterfaceMapper.from_env().session_diff() == {}
