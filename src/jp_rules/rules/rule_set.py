"""
Rule set bound to an encoding and an optional one-way hasher.

``setup()`` is the single configuration hook: it fixes the encoding used by the
length rules and the hasher used by hashed field comparison for every
subsequent call on the returned RuleSet.
"""

from __future__ import annotations

from typing import Any, Optional

import structlog
from pydantic import ValidationError

from jp_rules.config.settings import RuleSettings, get_settings
from jp_rules.errors import RuleConfigurationError
from jp_rules.rules import predicates
from jp_rules.rules.predicates import Hasher
from jp_rules.rules.registry import resolve_rule

logger = structlog.get_logger(__name__)


class RuleSet:
    """The validation rules, with configuration injected at construction."""

    def __init__(
        self,
        settings: Optional[RuleSettings] = None,
        hasher: Optional[Hasher] = None,
    ) -> None:
        self._settings = settings or RuleSettings()
        self._hasher = hasher

    @property
    def encoding(self) -> str:
        return self._settings.encoding

    @property
    def hasher(self) -> Optional[Hasher]:
        return self._hasher

    def __repr__(self) -> str:
        return f"RuleSet(encoding={self.encoding!r}, hasher={self._hasher is not None})"

    def char_length(self, value: Any) -> int:
        return predicates.char_length(value, self.encoding)

    def max_length(self, value: Any, limit: int) -> bool:
        return predicates.max_length(value, limit, self.encoding)

    def min_length(self, value: Any, limit: int) -> bool:
        return predicates.min_length(value, limit, self.encoding)

    def fields_equal(self, value: Any, other: Any, hashed: bool = False) -> bool:
        return predicates.fields_equal(value, other, hashed=hashed, hasher=self._hasher)

    def katakana_only(self, value: Any) -> bool:
        return predicates.katakana_only(value)

    def not_space_only(self, value: Any) -> bool:
        return predicates.not_space_only(value)

    def alpha_numeric_ascii(self, value: Any) -> bool:
        return predicates.alpha_numeric_ascii(value)

    def evaluate(self, rule_name: str, value: Any, *params: Any) -> bool:
        """Run a rule by canonical name, Python name, or legacy alias."""
        rule = getattr(self, resolve_rule(rule_name))
        return rule(value, *params)


def setup(encoding: Optional[str] = None, hasher: Optional[Hasher] = None) -> RuleSet:
    """
    Build a RuleSet. Without ``encoding`` the configured default is used
    (UTF-8 unless RULES_ENCODING says otherwise).

    Raises RuleConfigurationError for an unknown encoding.
    """
    try:
        settings = RuleSettings(encoding=encoding) if encoding else get_settings().rules
    except ValidationError as e:
        source = repr(encoding) if encoding else "from RULES_ENCODING"
        reason = "; ".join(err["msg"] for err in e.errors())
        logger.warning("rule_set_config_invalid", encoding=encoding, error=reason)
        raise RuleConfigurationError(f"Invalid rule configuration (encoding {source}): {reason}") from e
    rule_set = RuleSet(settings, hasher)
    logger.info("rule_set_configured", encoding=rule_set.encoding, hasher=hasher is not None)
    return rule_set
