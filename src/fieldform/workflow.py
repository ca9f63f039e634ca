"""Role contract and submission approval workflow.

Three roles take part: admins see and manage everything, managers own the
forms they create and review submissions to them, and field agents fill in
the forms assigned to them.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Iterable, Optional

from peewee import fn

from .consts import DASHBOARD_RECENT_LIMIT
from .enums import Role, SubmissionStatus
from .errors import AccessDenied, NotFound, WorkflowException
from .models import UTC, Form, Submission, database_proxy
from .schema import FieldSchema, NotificationEvent, SubmittedData
from .triggers import check_notifications, parse_condition
from .validation import validate_against_schema

logger = logging.getLogger(__name__)

REVIEW_STATUSES = (SubmissionStatus.APPROVED, SubmissionStatus.REJECTED)


@dataclass(frozen=True, slots=True)
class Principal:
    user_id: str
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    @property
    def can_author_forms(self) -> bool:
        return self.role in (Role.ADMIN, Role.MANAGER)


class SubmissionRejected(WorkflowException):
    """Raised when submitted data fails schema validation."""

    def __init__(self, errors: list[str]) -> None:
        super().__init__("Validation failed")
        self.errors = errors


# ==================== Forms ====================


def check_form_definition(schema: FieldSchema) -> None:
    """Reject field lists that break the unique-name invariant."""
    duplicates = schema.duplicate_names()
    if duplicates:
        raise WorkflowException(f"Field names must be unique: {', '.join(duplicates)}")

    for field in schema.fields:
        if field.notify_if and parse_condition(field.notify_if) is None:
            logger.warning(
                f"Field '{field.name}' has an unsupported notifyIf {field.notify_if!r}; "
                "it will never trigger"
            )


def get_form(form_id: int) -> Form:
    form = Form.get_or_none(Form.id == form_id)
    if form is None:
        raise NotFound("Form not found")
    return form


def forms_visible_to(principal: Principal) -> list[Form]:
    query = Form.select().order_by(Form.created_at.desc(), Form.id.desc())
    if principal.is_admin:
        return list(query)
    if principal.role == Role.MANAGER:
        return list(query.where(Form.created_by == principal.user_id))
    # assigned_to is a JSON list, so assignment is matched in Python
    return [form for form in query if form.is_assigned(principal.user_id)]


def can_view_form(principal: Principal, form: Form) -> bool:
    if principal.role == Role.FIELD_AGENT:
        return form.is_assigned(principal.user_id)
    return True


def can_manage_form(principal: Principal, form: Form) -> bool:
    if principal.is_admin:
        return True
    return principal.role == Role.MANAGER and form.created_by == principal.user_id


def ensure_can_author(principal: Principal) -> None:
    if not principal.can_author_forms:
        raise AccessDenied("Access denied")


def ensure_can_manage(principal: Principal, form: Form) -> None:
    if not can_manage_form(principal, form):
        raise AccessDenied("Access denied")


def create_form(
    principal: Principal,
    title: str,
    schema: FieldSchema,
    description: str | None = None,
    prompt: str | None = None,
    assigned_to: Iterable[str] = (),
) -> Form:
    ensure_can_author(principal)
    check_form_definition(schema)

    form = Form.create(
        title=title,
        description=description,
        schema_fields=schema.to_json_fields(),
        prompt=prompt,
        created_by=principal.user_id,
        assigned_to=list(dict.fromkeys(assigned_to)),
    )
    logger.info(f"Form created: {form.id} '{title}' by {principal.user_id}")
    return form


def update_form(
    principal: Principal,
    form: Form,
    title: str | None = None,
    description: str | None = None,
    schema: FieldSchema | None = None,
    is_active: bool | None = None,
) -> Form:
    ensure_can_manage(principal, form)

    if title:
        form.title = title
    if description:
        form.description = description
    if schema is not None:
        check_form_definition(schema)
        form.schema_fields = schema.to_json_fields()
    if is_active is not None:
        form.is_active = is_active

    form.save()
    logger.info(f"Form updated: {form.id} by {principal.user_id}")
    return form


def assign_form(principal: Principal, form: Form, agent_ids: Iterable[str]) -> Form:
    ensure_can_manage(principal, form)

    form.assigned_to = list(dict.fromkeys(agent_ids))
    form.save()
    logger.info(f"Form {form.id} assigned to {len(form.assigned_to)} agent(s)")
    return form


def delete_form(principal: Principal, form: Form) -> None:
    ensure_can_manage(principal, form)

    with database_proxy.atomic():
        Submission.delete().where(Submission.form == form).execute()
        form.delete_instance()
    logger.info(f"Form deleted: {form.id} by {principal.user_id}")


# ==================== Submissions ====================


def get_submission(submission_id: int) -> Submission:
    submission = Submission.get_or_none(Submission.id == submission_id)
    if submission is None:
        raise NotFound("Submission not found")
    return submission


def submit(
    principal: Principal, form: Form, data: SubmittedData
) -> tuple[Submission, list[NotificationEvent]]:
    """Validate and store a field agent's submission.

    Raises:
        AccessDenied: If the principal is not a field agent assigned to the form
        WorkflowException: If the form is inactive
        SubmissionRejected: If the data fails schema validation
    """
    if principal.role != Role.FIELD_AGENT:
        raise AccessDenied("Only field agents can submit forms")
    if not form.is_assigned(principal.user_id):
        raise AccessDenied("You are not assigned to this form")
    if not form.is_active:
        raise WorkflowException("Form is not accepting submissions")

    schema = form.to_schema()
    errors = validate_against_schema(data, schema)
    if errors:
        logger.info(f"Submission to form {form.id} rejected with {len(errors)} error(s)")
        raise SubmissionRejected(errors)

    events = check_notifications(schema, data)
    submission = Submission.create(
        form=form,
        submitted_by=principal.user_id,
        data=data,
        notifications=[event.model_dump(mode="json") for event in events],
        status=SubmissionStatus.PENDING.value,
    )
    logger.info(
        f"Submission created: {submission.id} for form {form.id} by {principal.user_id}. "
        f"Notifications: {len(events)}"
    )
    return submission, events


def submissions_visible_to(
    principal: Principal,
    status: Optional[SubmissionStatus] = None,
    form_id: Optional[int] = None,
):
    query = Submission.select(Submission, Form).join(Form)
    if principal.role == Role.MANAGER:
        query = query.where(Form.created_by == principal.user_id)
    elif principal.role == Role.FIELD_AGENT:
        query = query.where(Submission.submitted_by == principal.user_id)

    if status is not None:
        query = query.where(Submission.status == status.value)
    if form_id is not None:
        query = query.where(Submission.form == form_id)

    return query.order_by(Submission.created_at.desc(), Submission.id.desc())


def can_view_submission(principal: Principal, submission: Submission) -> bool:
    if principal.is_admin:
        return True
    if principal.role == Role.MANAGER:
        return submission.form.created_by == principal.user_id
    return submission.submitted_by == principal.user_id


def review_submission(principal: Principal, submission: Submission, status: str) -> Submission:
    """Approve or reject a pending submission."""
    if not principal.can_author_forms:
        raise AccessDenied("Access denied")
    if principal.role == Role.MANAGER and submission.form.created_by != principal.user_id:
        raise AccessDenied("You can only update submissions for your forms")

    if status not in [s.value for s in REVIEW_STATUSES]:
        raise WorkflowException('Status must be "approved" or "rejected"')
    if submission.status != SubmissionStatus.PENDING.value:
        raise WorkflowException(f"Submission has already been {submission.status}")

    submission.status = status
    submission.reviewed_by = principal.user_id
    submission.save()
    logger.info(f"Submission {submission.id} {status} by {principal.user_id}")
    return submission


def delete_submission(principal: Principal, submission: Submission) -> None:
    if not principal.is_admin:
        raise AccessDenied("Access denied")
    submission.delete_instance()
    logger.info(f"Submission deleted: {submission.id}")


# ==================== Dashboard ====================


def dashboard_stats(principal: Principal) -> dict[str, Any]:
    total_forms = len(forms_visible_to(principal))

    submissions = submissions_visible_to(principal)
    counts = {status.value: 0 for status in SubmissionStatus}
    rows = (
        submissions.select(Submission.status, fn.COUNT(Submission.id).alias("count"))
        .group_by(Submission.status)
        .order_by()
        .tuples()
    )
    for status, count in rows:
        counts[status] = count

    total = sum(counts.values())
    approved = counts[SubmissionStatus.APPROVED.value]
    alerts = sum(len(s.notifications or []) for s in submissions)
    recent = submissions.limit(DASHBOARD_RECENT_LIMIT)

    return {
        "total_forms": total_forms,
        "total_submissions": total,
        "pending": counts[SubmissionStatus.PENDING.value],
        "approved": approved,
        "rejected": counts[SubmissionStatus.REJECTED.value],
        "completion_rate": completion_rate(approved, total),
        "alerts": alerts,
        "recent_submissions": [s.to_dict() for s in recent],
    }


def completion_rate(approved: int, total: int) -> float:
    """Approved submissions as a percentage of all, rounded to two decimals."""
    if total == 0:
        return 0.0
    return round(approved / total * 100, 2)


# ==================== Reports ====================


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def submissions_for_report(
    principal: Principal,
    date_from: Optional[datetime] = None,
    date_to: Optional[datetime] = None,
    form_id: Optional[int] = None,
) -> list[Submission]:
    """Select the submissions a manager or admin may analyse, newest first.

    Naive datetimes are taken as UTC. Both date bounds are inclusive.

    Raises:
        AccessDenied: If the principal is a field agent, or a manager asking
            about a form they do not own
        NotFound: If a manager owns no forms or nothing matches the filters
    """
    if not principal.can_author_forms:
        raise AccessDenied("Access denied. Only managers and admins can generate reports.")

    if principal.role == Role.MANAGER:
        if not Form.select().where(Form.created_by == principal.user_id).exists():
            raise NotFound("No forms found for this manager.")

        if form_id is not None:
            owned = Form.get_or_none(
                (Form.id == form_id) & (Form.created_by == principal.user_id)
            )
            if owned is None:
                raise AccessDenied(
                    "Access denied. You can only generate reports for your own forms."
                )

    query = submissions_visible_to(principal, form_id=form_id)
    if date_from is not None:
        query = query.where(Submission.created_at >= _as_utc(date_from))
    if date_to is not None:
        query = query.where(Submission.created_at <= _as_utc(date_to))

    submissions = list(query)
    if not submissions:
        raise NotFound("No submissions found matching the criteria.")

    logger.info(f"Report requested by {principal.user_id} over {len(submissions)} submission(s)")
    return submissions
