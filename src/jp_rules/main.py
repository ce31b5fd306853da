"""
CLI entry point for jp-rules.

Subcommands: check (run one rule on one value) and validate (check a JSON
record against a YAML schema). Exit codes: 0 accepted, 1 rejected,
2 configuration error.
"""

from __future__ import annotations

import argparse
import hashlib
import json
import sys
from pathlib import Path
from typing import Any, Callable, List, Optional

import structlog
from rich.console import Console
from rich.table import Table

from jp_rules.config.settings import get_settings
from jp_rules.errors import RuleConfigurationError
from jp_rules.rules.record import RecordValidator, ValidationReport
from jp_rules.rules.registry import RULE_ALIASES, RULE_NAMES, resolve_rule
from jp_rules.rules.rule_set import setup
from jp_rules.utils.logging import configure_logging

logger = structlog.get_logger(__name__)

EXIT_OK = 0
EXIT_REJECTED = 1
EXIT_CONFIG_ERROR = 2


def _coerce_param(raw: str) -> Any:
    """CLI params arrive as strings: map integers and true/false to their types."""
    lowered = raw.lower()
    if lowered in ("true", "false"):
        return lowered == "true"
    try:
        return int(raw)
    except ValueError:
        return raw


def make_salted_hasher(algorithm: str, salt: str = "") -> Callable[[str], str]:
    """Host-side hasher: hex digest of salt + value with a hashlib algorithm."""
    if algorithm not in hashlib.algorithms_available:
        raise RuleConfigurationError(f"Unknown hash algorithm: {algorithm!r}")

    def _hash(value: str) -> str:
        return hashlib.new(algorithm, (salt + value).encode("utf-8")).hexdigest()

    return _hash


def _cmd_check(
    rule: str,
    value: str,
    params: List[str],
    encoding: Optional[str],
    hash_algorithm: Optional[str] = None,
    salt: str = "",
) -> int:
    """Run a single rule and print accepted/rejected."""
    try:
        hasher = make_salted_hasher(hash_algorithm, salt) if hash_algorithm else None
        rule_set = setup(encoding=encoding, hasher=hasher)
        coerced = [_coerce_param(p) for p in params]
        if resolve_rule(rule) == "fields_equal" and params:
            # the comparison value is text even when it looks like a number
            coerced[0] = params[0]
        ok = rule_set.evaluate(rule, value, *coerced)
    except (RuleConfigurationError, TypeError) as e:
        logger.warning("check_failed", rule=rule, error=str(e))
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR
    print("accepted" if ok else "rejected")
    return EXIT_OK if ok else EXIT_REJECTED


def display_report(report: ValidationReport, record_path: str) -> None:
    """Render violations as a Rich table."""
    console = Console()
    if report.valid:
        console.print(f"[green]{record_path}: valid[/green]")
        return
    table = Table(title=f"Validation errors: {record_path}", show_header=True, header_style="bold")
    table.add_column("Field", style="cyan")
    table.add_column("Rule", style="dim")
    table.add_column("Message")
    for v in report.violations:
        table.add_row(v.field, v.rule, v.message)
    console.print(table)


def _cmd_validate(
    schema_path: str,
    record_path: str,
    encoding: Optional[str],
    as_json: bool,
    hash_algorithm: Optional[str],
    salt: str,
) -> int:
    """Validate a JSON record file against a YAML schema."""
    try:
        hasher = make_salted_hasher(hash_algorithm, salt) if hash_algorithm else None
        rule_set = setup(encoding=encoding, hasher=hasher)
        validator = RecordValidator.from_yaml(schema_path, rule_set)
        record = json.loads(Path(record_path).read_text(encoding="utf-8"))
    except (RuleConfigurationError, FileNotFoundError, json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.warning("validate_setup_failed", schema=schema_path, record=record_path, error=str(e))
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR
    if not isinstance(record, dict):
        print("Error: record file must contain a JSON object", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    report = validator.validate(record)
    if as_json:
        out = {"valid": report.valid, "errors": report.errors()}
        print(json.dumps(out, indent=2, ensure_ascii=False))
    else:
        display_report(report, record_path)
    return EXIT_OK if report.valid else EXIT_REJECTED


def _add_hash_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--hash-algorithm",
        default=None,
        help="hashlib algorithm for hashed field comparison (e.g. sha1, sha256).",
    )
    parser.add_argument("--salt", default="", help="Salt prepended before hashing.")


def main(argv: Optional[List[str]] = None) -> int:
    """Parse CLI args and dispatch to subcommands."""
    parser = argparse.ArgumentParser(
        description="jp-rules: multibyte-aware field validation rules (check or validate).",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"),
        default=None,
        help="Override LOG_LOG_LEVEL for this run.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    rule_choices = sorted(set(RULE_NAMES) | set(RULE_ALIASES))

    # check
    check_p = subparsers.add_parser("check", help="Run one rule against one value.")
    check_p.add_argument("rule", choices=rule_choices, metavar="RULE", help="Rule name or alias.")
    check_p.add_argument("value", help="Field value to check.")
    check_p.add_argument("params", nargs="*", help="Rule parameters (e.g. a length limit).")
    check_p.add_argument("--encoding", default=None, help="Encoding for length rules (default: UTF-8).")
    _add_hash_options(check_p)

    # validate
    val_p = subparsers.add_parser("validate", help="Validate a JSON record against a YAML schema.")
    val_p.add_argument("schema", help="YAML schema: field -> list of rules.")
    val_p.add_argument("record", help="JSON file holding one record (object).")
    val_p.add_argument("--encoding", default=None, help="Encoding for length rules (default: UTF-8).")
    val_p.add_argument("--json", action="store_true", help="Print the result as JSON.")
    _add_hash_options(val_p)

    args = parser.parse_args(argv)

    log_settings = get_settings().logging
    if args.log_level:
        configure_logging(log_settings, log_level=args.log_level)
    else:
        configure_logging(log_settings)

    if args.command == "check":
        return _cmd_check(
            args.rule,
            args.value,
            args.params,
            args.encoding,
            hash_algorithm=args.hash_algorithm,
            salt=args.salt,
        )
    if args.command == "validate":
        return _cmd_validate(
            schema_path=args.schema,
            record_path=args.record,
            encoding=args.encoding,
            as_json=args.json,
            hash_algorithm=args.hash_algorithm,
            salt=args.salt,
        )
    return EXIT_CONFIG_ERROR


if __name__ == "__main__":
    sys.exit(main())
