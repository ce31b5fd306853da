"""
jp_rules: field-validation rules for multibyte (Japanese) text.

Length bounds counted in logical characters, field-equality comparison with an
optional injected one-way hash, katakana-only, not-space-only, and ASCII
alphanumeric checks, plus a YAML-driven record validator.
"""

from jp_rules.errors import RuleConfigurationError, RuleError, UnknownRuleError
from jp_rules.rules import (
    FieldRule,
    RecordValidator,
    RuleSet,
    RuleViolation,
    ValidationReport,
    setup,
)

__all__ = [
    "FieldRule",
    "RecordValidator",
    "RuleConfigurationError",
    "RuleError",
    "RuleSet",
    "RuleViolation",
    "UnknownRuleError",
    "ValidationReport",
    "setup",
]
