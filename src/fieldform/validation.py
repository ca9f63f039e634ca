"""Validation of submitted form data against a field schema.

Every check reports a human-readable message instead of raising; an empty
result means the submission is valid.
"""

import logging
import math
import re
from collections.abc import Mapping
from datetime import date, datetime
from typing import Any, Callable, Optional

from .consts import DATE_FORMATS, EMAIL_PATTERN, INVALID_SCHEMA_MESSAGE
from .enums import FieldType
from .schema import FieldDefinition, FieldSchema, ValidationIssue
from .utils import format_number, parse_number

logger = logging.getLogger(__name__)

FieldRule = Callable[[FieldDefinition, Any], Optional[str]]

_email = re.compile(EMAIL_PATTERN)


def is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value == "")


def _check_number(field: FieldDefinition, value: Any) -> Optional[str]:
    label = field.display_label
    num = parse_number(value)
    if math.isnan(num):
        return f"{label} must be a valid number"
    if field.min is not None and num < field.min:
        return f"{label} must be at least {format_number(field.min)}"
    if field.max is not None and num > field.max:
        return f"{label} must be at most {format_number(field.max)}"
    return None


def _check_email(field: FieldDefinition, value: Any) -> Optional[str]:
    if not _email.fullmatch(str(value)):
        return f"{field.display_label} must be a valid email address"
    return None


def _same_option(option: Any, value: Any) -> bool:
    """Strict equality: ``True`` is not ``1`` and ``"1"`` is not ``1``."""
    if isinstance(option, bool) or isinstance(value, bool):
        return option is value
    if isinstance(option, (int, float)) and isinstance(value, (int, float)):
        return option == value
    if isinstance(option, (list, dict)):
        return False
    return type(option) is type(value) and option == value


def _check_select(field: FieldDefinition, value: Any) -> Optional[str]:
    if field.options and not any(_same_option(option, value) for option in field.options):
        choices = ", ".join(str(option) for option in field.options)
        return f"{field.display_label} must be one of: {choices}"
    return None


def _check_boolean(field: FieldDefinition, value: Any) -> Optional[str]:
    if isinstance(value, bool) or value in ("true", "false"):
        return None
    return f"{field.display_label} must be true or false"


def parse_date(value: Any) -> date | None:
    """Parse a submitted date.

    Accepts ISO 8601 dates and datetimes, the textual formats in
    ``DATE_FORMATS`` and epoch timestamps in milliseconds.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value / 1000).date()
        except (OverflowError, OSError, ValueError):
            return None
    if not isinstance(value, str):
        return None

    text = value.strip()
    for parser in (date.fromisoformat, datetime.fromisoformat):
        try:
            parsed = parser(text)
        except ValueError:
            continue
        return parsed.date() if isinstance(parsed, datetime) else parsed

    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def _check_date(field: FieldDefinition, value: Any) -> Optional[str]:
    if parse_date(value) is None:
        return f"{field.display_label} must be a valid date"
    return None


def _check_text(field: FieldDefinition, value: Any) -> Optional[str]:
    label = field.display_label
    if not isinstance(value, str):
        return f"{label} must be text"
    if field.min_length and len(value) < field.min_length:
        return f"{label} must be at least {field.min_length} characters"
    if field.max_length and len(value) > field.max_length:
        return f"{label} must be at most {field.max_length} characters"
    return None


def _no_check(field: FieldDefinition, value: Any) -> Optional[str]:
    return None


RULES: dict[FieldType, FieldRule] = {
    FieldType.STRING: _check_text,
    FieldType.NUMBER: _check_number,
    FieldType.EMAIL: _check_email,
    FieldType.FILE: _no_check,
    FieldType.BOOLEAN: _check_boolean,
    FieldType.SELECT: _check_select,
    FieldType.TEXTAREA: _check_text,
    FieldType.DATE: _check_date,
}


def collect_issues(data: Any, schema: Any) -> list[ValidationIssue]:
    """Validate ``data`` against ``schema`` and return one issue per problem.

    Fields are checked in declared order. A missing required field reports
    only that it is required; empty optional fields are skipped entirely.
    """
    parsed = FieldSchema.coerce(schema)
    if parsed is None:
        logger.debug("Rejecting submission: schema is missing or malformed")
        return [ValidationIssue(field=None, message=INVALID_SCHEMA_MESSAGE)]

    values = data if isinstance(data, Mapping) else {}
    issues: list[ValidationIssue] = []

    for field in parsed.fields:
        value = values.get(field.name)

        if is_blank(value):
            if field.required:
                issues.append(
                    ValidationIssue(field=field.name, message=f"{field.display_label} is required")
                )
            continue

        rule = RULES.get(field.field_type, _no_check)
        message = rule(field, value)
        if message:
            issues.append(ValidationIssue(field=field.name, message=message))

    return issues


def validate_against_schema(data: Any, schema: Any) -> list[str]:
    """Return the validation error messages for ``data``; empty when valid."""
    return [issue.message for issue in collect_issues(data, schema)]
