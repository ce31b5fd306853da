"""Unit tests for RuleSet and the setup() hook: encoding binding, hasher injection, dispatch."""

from __future__ import annotations

import os
from typing import Callable
from unittest.mock import patch

import pytest
from pydantic import ValidationError
from structlog.testing import capture_logs

from jp_rules.config.settings import RuleSettings
from jp_rules.errors import RuleConfigurationError, UnknownRuleError
from jp_rules.rules.rule_set import RuleSet, setup


class TestSetup:
    def test_defaults_to_utf8(self) -> None:
        rule_set = setup()
        assert rule_set.encoding == "utf-8"
        assert rule_set.hasher is None

    def test_empty_encoding_means_default(self) -> None:
        assert setup(encoding="").encoding == "utf-8"

    def test_explicit_encoding(self) -> None:
        assert setup(encoding="Shift_JIS").encoding == "shift_jis"

    def test_mbstring_alias(self) -> None:
        assert setup(encoding="EUC").encoding == "euc_jp"

    def test_environment_default(self) -> None:
        with patch.dict(os.environ, {"RULES_ENCODING": "euc-jp"}):
            rule_set = setup()
        assert rule_set.encoding == "euc_jp"

    def test_unknown_encoding_raises_at_setup(self) -> None:
        with pytest.raises(RuleConfigurationError) as exc_info:
            setup(encoding="no-such-encoding")
        assert "no-such-encoding" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, ValidationError)

    def test_invalid_environment_encoding_is_reported(self) -> None:
        with patch.dict(os.environ, {"RULES_ENCODING": "klingon-8"}):
            with pytest.raises(RuleConfigurationError) as exc_info:
                setup()
        message = str(exc_info.value)
        assert "RULES_ENCODING" in message
        assert "klingon-8" in message
        assert "None" not in message

    def test_setup_logs_configuration(self, sha1_hasher: Callable[[str], str]) -> None:
        with capture_logs() as logs:
            setup(encoding="UTF-8", hasher=sha1_hasher)
        configured = [e for e in logs if e["event"] == "rule_set_configured"]
        assert configured == [
            {"event": "rule_set_configured", "log_level": "info", "encoding": "utf-8", "hasher": True}
        ]


class TestRuleSetEncoding:
    def test_length_rules_use_bound_encoding(self) -> None:
        sjis = RuleSet(RuleSettings(encoding="shift_jis"))
        value = "カタカナ".encode("shift_jis")
        assert len(value) == 8
        assert sjis.char_length(value) == 4
        assert sjis.max_length(value, 4) is True
        assert sjis.min_length(value, 5) is False

    def test_str_values_independent_of_encoding(self) -> None:
        sjis = RuleSet(RuleSettings(encoding="shift_jis"))
        utf8 = RuleSet(RuleSettings(encoding="utf-8"))
        assert sjis.char_length("テスト") == utf8.char_length("テスト") == 3

    def test_settings_are_frozen(self) -> None:
        settings = RuleSettings(encoding="utf-8")
        with pytest.raises(ValidationError):
            settings.encoding = "shift_jis"  # type: ignore[misc]


class TestRuleSetRules:
    def test_fields_equal_plain(self, rule_set: RuleSet) -> None:
        assert rule_set.fields_equal("abc", "abc") is True
        assert rule_set.fields_equal("abc", "abd") is False

    def test_fields_equal_hashed(
        self, hashing_rule_set: RuleSet, sha1_hasher: Callable[[str], str]
    ) -> None:
        stored = sha1_hasher("secret")
        assert hashing_rule_set.fields_equal(stored, "secret", hashed=True) is True
        assert hashing_rule_set.fields_equal(stored, "Secret", hashed=True) is False

    def test_fields_equal_hashed_without_hasher(self, rule_set: RuleSet) -> None:
        with pytest.raises(RuleConfigurationError):
            rule_set.fields_equal("x", "x", hashed=True)

    def test_character_rules(self, rule_set: RuleSet) -> None:
        assert rule_set.katakana_only("カタカナ") is True
        assert rule_set.katakana_only("かたかな") is False
        assert rule_set.not_space_only("　") is False
        assert rule_set.alpha_numeric_ascii("abc123") is True


class TestEvaluate:
    @pytest.mark.parametrize(
        "name,value,params,expected",
        [
            ("maxLength", "あいう", (3,), True),
            ("maxLengthJP", "あいうえ", (3,), False),
            ("min_length", "あ", (1,), True),
            ("minLengthJP", "", (1,), False),
            ("fieldsEqual", "a", ("a",), True),
            ("compare2fields", "a", ("b",), False),
            ("katakanaOnly", "カナ", (), True),
            ("katakana_only", "かな", (), False),
            ("notSpaceOnly", "   ", (), False),
            ("space_only", "a", (), True),
            ("alphaNumericAscii", "abc", (), True),
            ("alpha_number", "a_b", (), False),
        ],
    )
    def test_evaluate_by_name_and_alias(
        self, rule_set: RuleSet, name: str, value: str, params: tuple, expected: bool
    ) -> None:
        assert rule_set.evaluate(name, value, *params) is expected

    def test_unknown_rule(self, rule_set: RuleSet) -> None:
        with pytest.raises(UnknownRuleError) as exc_info:
            rule_set.evaluate("email", "a@b.c")
        assert exc_info.value.rule_name == "email"

    def test_repr(self, hashing_rule_set: RuleSet) -> None:
        assert repr(hashing_rule_set) == "RuleSet(encoding='utf-8', hasher=True)"
