"""Pytest configuration and fixtures for unit tests."""

import hashlib
from typing import Callable

import pytest

from jp_rules.config.settings import RuleSettings
from jp_rules.rules.rule_set import RuleSet

SALT = "DYhG93b0qyJfIxfs2guVoUubWwvniR2G0FgaC9mi"


def _sha1_password(value: str) -> str:
    """Salted SHA-1, the way the host's auth layer stores passwords."""
    return hashlib.sha1((SALT + value).encode("utf-8")).hexdigest()


@pytest.fixture
def sha1_hasher() -> Callable[[str], str]:
    return _sha1_password


@pytest.fixture
def rule_set() -> RuleSet:
    """UTF-8 rule set without a hasher."""
    return RuleSet(RuleSettings(encoding="UTF-8"))


@pytest.fixture
def hashing_rule_set(sha1_hasher: Callable[[str], str]) -> RuleSet:
    return RuleSet(RuleSettings(encoding="UTF-8"), hasher=sha1_hasher)


@pytest.fixture
def member_schema() -> dict:
    """Sign-up form schema in the list shorthand used by YAML schemas."""
    return {
        "name_kana": [
            {"rule": ["maxLengthJP", 5], "message": "5文字以内です"},
            {"rule": ["minLengthJP", 2], "message": "2文字以上です"},
            {"rule": "katakana_only", "message": "カタカナのみ入力してください"},
        ],
        "nickname": [
            {"rule": "space_only", "message": "スペース以外も入力してください"},
        ],
        "email": [
            {"rule": ["compare2fields", "email_conf"], "message": "値が違います"},
        ],
        "login": [
            {"rule": "alpha_number", "message": "半角英数字のみ"},
        ],
    }
