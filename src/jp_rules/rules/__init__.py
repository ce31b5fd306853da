"""Validation rules: pure predicates, the configured rule set, and record validation."""

from jp_rules.rules.predicates import (
    alpha_numeric_ascii,
    char_length,
    fields_equal,
    katakana_only,
    max_length,
    min_length,
    not_space_only,
)
from jp_rules.rules.record import (
    FieldRule,
    RecordValidator,
    RuleViolation,
    ValidationReport,
    load_schema,
    parse_schema,
)
from jp_rules.rules.registry import RULE_ALIASES, RULE_NAMES, resolve_rule
from jp_rules.rules.rule_set import RuleSet, setup

__all__ = [
    "FieldRule",
    "RULE_ALIASES",
    "RULE_NAMES",
    "RecordValidator",
    "RuleSet",
    "RuleViolation",
    "ValidationReport",
    "alpha_numeric_ascii",
    "char_length",
    "fields_equal",
    "katakana_only",
    "load_schema",
    "max_length",
    "min_length",
    "not_space_only",
    "parse_schema",
    "resolve_rule",
    "setup",
]
