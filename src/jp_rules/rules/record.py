"""
Record validation: bind named rules to named fields and check a whole record.

A schema maps field names to lists of FieldRule entries, e.g. in YAML:

    password:
      - rule: [fieldsEqual, password_conf, true]
        message: Passwords do not match
    name_kana:
      - rule: [maxLength, 20]
        message: 20 characters or fewer
      - rule: katakanaOnly
        message: Katakana only

For fields_equal the first parameter is the name of the other field in the
record and the optional second one is the hashed flag.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Mapping, Sequence, Union

import structlog
import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from jp_rules.errors import RuleConfigurationError
from jp_rules.rules.registry import check_arity, resolve_rule
from jp_rules.rules.rule_set import RuleSet

logger = structlog.get_logger(__name__)


class FieldRule(BaseModel):
    """One rule bound to a field, with its parameters and failure message."""

    rule: str = Field(..., description="Rule name (canonical, Python name, or legacy alias).")
    params: List[Any] = Field(default_factory=list, description="Rule parameters after the field value.")
    message: str = Field(default="", description="Message reported when the rule fails.")
    last: bool = Field(default=False, description="Stop checking this field after this rule fails.")

    @model_validator(mode="before")
    @classmethod
    def expand_rule_list(cls, data: Any) -> Any:
        # rule: [maxLength, 5] -> rule: maxLength, params: [5]
        if isinstance(data, str):
            return {"rule": data}
        if isinstance(data, dict) and isinstance(data.get("rule"), (list, tuple)):
            name, *params = data["rule"]
            data = {**data, "rule": name, "params": list(params) + list(data.get("params") or [])}
        return data

    @field_validator("rule")
    @classmethod
    def canonical_rule(cls, v: str) -> str:
        return resolve_rule(v)

    @model_validator(mode="after")
    def validate_params(self) -> "FieldRule":
        check_arity(self.rule, len(self.params))
        if self.rule in ("max_length", "min_length"):
            limit = self.params[0]
            if isinstance(limit, bool) or not isinstance(limit, int) or limit < 0:
                raise ValueError(f"{self.rule} limit must be a non-negative integer, got {limit!r}")
        if self.rule == "fields_equal":
            if not isinstance(self.params[0], str):
                raise ValueError("fields_equal needs the name of the field to compare with")
            if len(self.params) > 1 and not isinstance(self.params[1], bool):
                raise ValueError("fields_equal hashed flag must be true or false")
        return self

    @property
    def hashed(self) -> bool:
        return self.rule == "fields_equal" and len(self.params) > 1 and self.params[1] is True


class RuleViolation(BaseModel):
    """A failed rule on a field."""

    field: str
    rule: str
    message: str


class ValidationReport(BaseModel):
    """Result of validating one record."""

    violations: List[RuleViolation] = Field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.violations

    def errors(self) -> Dict[str, List[str]]:
        """Field name -> failure messages, in rule order."""
        out: Dict[str, List[str]] = {}
        for v in self.violations:
            out.setdefault(v.field, []).append(v.message)
        return out


SchemaInput = Mapping[str, Sequence[Union[FieldRule, Mapping[str, Any], str]]]


def parse_schema(raw: SchemaInput) -> Dict[str, List[FieldRule]]:
    """Coerce a mapping of field -> rule entries into FieldRule lists."""
    if not isinstance(raw, Mapping):
        raise RuleConfigurationError("Schema must map field names to lists of rules")
    schema: Dict[str, List[FieldRule]] = {}
    for field_name, entries in raw.items():
        if isinstance(entries, (Mapping, str, FieldRule)):
            entries = [entries]
        elif not isinstance(entries, (list, tuple)):
            raise RuleConfigurationError(
                f"Rules for field {field_name!r} must be a rule or a list of rules, got {entries!r}"
            )
        try:
            schema[str(field_name)] = [
                entry if isinstance(entry, FieldRule) else FieldRule.model_validate(entry)
                for entry in entries
            ]
        except ValidationError as e:
            raise RuleConfigurationError(f"Invalid rule binding for field {field_name!r}: {e}") from e
    return schema


def load_schema(path: str | Path) -> Dict[str, List[FieldRule]]:
    """Load a schema from a YAML file."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Schema file not found: {path}")
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (yaml.YAMLError, UnicodeDecodeError) as e:
        raise RuleConfigurationError(f"Cannot read schema {path}: {e}") from e
    return parse_schema(data)


class RecordValidator:
    """Validates records (plain mappings) against a field -> rules schema."""

    def __init__(self, rule_set: RuleSet, schema: SchemaInput) -> None:
        self.rule_set = rule_set
        self.schema = parse_schema(schema)
        if rule_set.hasher is None:
            hashed = [f for f, rules in self.schema.items() if any(r.hashed for r in rules)]
            if hashed:
                raise RuleConfigurationError(
                    f"Hashed comparison on {', '.join(hashed)} needs a rule set with a hasher"
                )

    @classmethod
    def from_yaml(cls, path: str | Path, rule_set: RuleSet) -> "RecordValidator":
        return cls(rule_set, load_schema(path))

    def _check(self, field_rule: FieldRule, value: Any, record: Mapping[str, Any]) -> bool:
        if field_rule.rule == "fields_equal":
            other_field = field_rule.params[0]
            if other_field not in record:
                return False
            return self.rule_set.fields_equal(value, record[other_field], field_rule.hashed)
        return self.rule_set.evaluate(field_rule.rule, value, *field_rule.params)

    def validate(self, record: Mapping[str, Any]) -> ValidationReport:
        """Check every schema field present in ``record``; absent fields are skipped."""
        violations: List[RuleViolation] = []
        for field_name, rules in self.schema.items():
            if field_name not in record:
                continue
            value = record[field_name]
            for field_rule in rules:
                if self._check(field_rule, value, record):
                    continue
                logger.debug("rule_failed", field=field_name, rule=field_rule.rule)
                violations.append(
                    RuleViolation(
                        field=field_name,
                        rule=field_rule.rule,
                        message=field_rule.message or f"{field_name} failed {field_rule.rule}",
                    )
                )
                if field_rule.last:
                    break
        logger.debug("record_validated", fields=len(self.schema), violations=len(violations))
        return ValidationReport(violations=violations)
