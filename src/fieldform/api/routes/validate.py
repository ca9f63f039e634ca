from typing import Any

from fastapi import APIRouter
from pydantic import BaseModel, ConfigDict, Field

from ...triggers import check_notifications
from ...validation import collect_issues

router = APIRouter(prefix="/validate", tags=["validate"])


class ValidateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    form_schema: Any = Field(default=None, alias="schema")
    data: Any = None


class IssueResponse(BaseModel):
    field: str | None
    message: str


class ValidateResponse(BaseModel):
    valid: bool
    errors: list[str]
    issues: list[IssueResponse]
    notifications: list[dict[str, Any]]


@router.post("", response_model=ValidateResponse)
def validate_submission(payload: ValidateRequest):
    """Check a schema/data pair without storing anything (form preview)."""
    issues = collect_issues(payload.data, payload.form_schema)
    notifications = []
    if not issues:
        events = check_notifications(payload.form_schema, payload.data)
        notifications = [event.model_dump(mode="json") for event in events]

    return ValidateResponse(
        valid=not issues,
        errors=[issue.message for issue in issues],
        issues=[IssueResponse(field=issue.field, message=issue.message) for issue in issues],
        notifications=notifications,
    )
