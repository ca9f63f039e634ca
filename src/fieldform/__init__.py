"""FieldForm: AI-assisted form builder with schema validation and threshold alerts."""

from .schema import FieldDefinition, FieldSchema, NotificationEvent, ValidationIssue
from .triggers import check_notifications, parse_condition
from .validation import collect_issues, validate_against_schema

__version__ = "0.1.0"

__all__ = [
    "FieldDefinition",
    "FieldSchema",
    "NotificationEvent",
    "ValidationIssue",
    "check_notifications",
    "collect_issues",
    "parse_condition",
    "validate_against_schema",
]
