"""Rule names, aliases, and parameter arity."""

from __future__ import annotations

from typing import Dict, Tuple

from jp_rules.errors import UnknownRuleError

# Python rule name -> (min params, max params), not counting the field value
RULE_ARITY: Dict[str, Tuple[int, int]] = {
    "max_length": (1, 1),
    "min_length": (1, 1),
    "fields_equal": (1, 2),
    "katakana_only": (0, 0),
    "not_space_only": (0, 0),
    "alpha_numeric_ascii": (0, 0),
}

# camelCase names and the legacy behavior-plugin names
RULE_ALIASES: Dict[str, str] = {
    "maxLength": "max_length",
    "maxLengthJP": "max_length",
    "minLength": "min_length",
    "minLengthJP": "min_length",
    "fieldsEqual": "fields_equal",
    "compare2fields": "fields_equal",
    "katakanaOnly": "katakana_only",
    "notSpaceOnly": "not_space_only",
    "space_only": "not_space_only",
    "alphaNumericAscii": "alpha_numeric_ascii",
    "alpha_number": "alpha_numeric_ascii",
}

RULE_NAMES: Tuple[str, ...] = tuple(RULE_ARITY)


def resolve_rule(name: str) -> str:
    """Return the Python rule name for ``name``; raise UnknownRuleError otherwise."""
    if name in RULE_ARITY:
        return name
    try:
        return RULE_ALIASES[name]
    except KeyError:
        raise UnknownRuleError(name) from None


def check_arity(rule_name: str, param_count: int) -> None:
    """Raise ValueError if ``rule_name`` does not take ``param_count`` parameters."""
    low, high = RULE_ARITY[resolve_rule(rule_name)]
    if not low <= param_count <= high:
        expected = str(low) if low == high else f"{low}-{high}"
        raise ValueError(
            f"Rule {rule_name!r} takes {expected} parameter(s), got {param_count}"
        )
