"""Enumeration type definitions"""

from enum import Enum


class FieldType(str, Enum):
    """Field types a form schema may declare"""

    STRING = "string"
    NUMBER = "number"
    EMAIL = "email"
    FILE = "file"
    BOOLEAN = "boolean"
    SELECT = "select"
    TEXTAREA = "textarea"
    DATE = "date"


class Role(str, Enum):
    ADMIN = "admin"
    MANAGER = "manager"
    FIELD_AGENT = "fieldAgent"


class SubmissionStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
