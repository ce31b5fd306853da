"""Exceptions raised by jp_rules. Rule mismatches are verdicts, not errors."""

from __future__ import annotations


class RuleError(Exception):
    """Base class for jp_rules errors."""


class RuleConfigurationError(RuleError, ValueError):
    """Raised for an invalid encoding, a missing hasher, or a bad rule binding."""


class UnknownRuleError(RuleConfigurationError):
    """Raised when a rule name is neither a canonical name nor a known alias."""

    def __init__(self, rule_name: str, message: str = "") -> None:
        self.rule_name = rule_name
        self._message = message or f"Unknown validation rule: {rule_name!r}"
        super().__init__(self._message)

    def __str__(self) -> str:
        return self._message
