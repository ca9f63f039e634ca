"""Peewee ORM model definitions"""

from datetime import datetime
from zoneinfo import ZoneInfo

from peewee import (
    BooleanField,
    CharField,
    DatabaseProxy,
    DateTimeField,
    ForeignKeyField,
    Model,
    TextField,
)
from playhouse.shortcuts import ThreadSafeDatabaseMetadata
from playhouse.sqlite_ext import JSONField

from .enums import SubmissionStatus
from .schema import FieldSchema
from .utils import format_timestamp

UTC = ZoneInfo("UTC")

# Use DatabaseProxy for deferred database binding
database_proxy = DatabaseProxy()


class BaseModel(Model):
    """Base model class - supports thread-safe metadata"""

    class Meta:
        database = database_proxy
        model_metadata_class = ThreadSafeDatabaseMetadata

    def save(self, *args, **kwargs):
        """Override save method to auto-update updated_at"""
        if self._pk is not None and hasattr(self, "updated_at"):
            self.updated_at = datetime.now(UTC)
        return super().save(*args, **kwargs)


class Form(BaseModel):
    """Form definition model"""

    title = CharField()
    description = TextField(null=True)
    schema_fields = JSONField(default=list, column_name="fields")
    prompt = TextField(null=True)
    created_by = CharField(index=True)
    assigned_to = JSONField(default=list)
    is_active = BooleanField(default=True)
    created_at = DateTimeField(default=lambda: datetime.now(UTC))
    updated_at = DateTimeField(default=lambda: datetime.now(UTC))

    class Meta:
        table_name = "forms"

    def to_schema(self) -> FieldSchema:
        return FieldSchema.model_validate({"title": self.title, "fields": self.schema_fields or []})

    def is_assigned(self, user_id: str) -> bool:
        return user_id in (self.assigned_to or [])

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "fields": self.schema_fields or [],
            "prompt": self.prompt,
            "created_by": self.created_by,
            "assigned_to": self.assigned_to or [],
            "is_active": self.is_active,
            "created_at": format_timestamp(self.created_at),
            "updated_at": format_timestamp(self.updated_at),
        }


class Submission(BaseModel):
    """Form submission model"""

    form = ForeignKeyField(Form, backref="submissions", on_delete="CASCADE")
    submitted_by = CharField(index=True)
    data = JSONField(default=dict)
    notifications = JSONField(default=list)
    status = CharField(default=SubmissionStatus.PENDING.value, index=True)
    reviewed_by = CharField(null=True)
    created_at = DateTimeField(default=lambda: datetime.now(UTC))
    updated_at = DateTimeField(default=lambda: datetime.now(UTC))

    class Meta:
        table_name = "submissions"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "form_id": self.form_id,
            "form_title": self.form.title,
            "submitted_by": self.submitted_by,
            "data": self.data or {},
            "notifications": self.notifications or [],
            "status": self.status,
            "reviewed_by": self.reviewed_by,
            "created_at": format_timestamp(self.created_at),
            "updated_at": format_timestamp(self.updated_at),
        }
