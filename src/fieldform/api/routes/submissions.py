import logging
from typing import Any

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException
from pydantic import BaseModel

from ... import workflow
from ...config import Config
from ...db import connection_scope
from ...enums import SubmissionStatus
from ...notification import dispatch_alerts
from ...workflow import Principal
from ..deps import get_config, get_principal

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/submissions", tags=["submissions"])


class SubmissionCreateRequest(BaseModel):
    form_id: int
    data: dict[str, Any]


class StatusUpdateRequest(BaseModel):
    status: str


@router.post("", status_code=201)
@connection_scope()
def create_submission(
    payload: SubmissionCreateRequest,
    background_tasks: BackgroundTasks,
    principal: Principal = Depends(get_principal),
    config: Config = Depends(get_config),
):
    form = workflow.get_form(payload.form_id)
    submission, events = workflow.submit(principal, form, payload.data)

    if events:
        background_tasks.add_task(
            dispatch_alerts,
            config.notification,
            form_title=form.title,
            events=events,
            submission_id=submission.id,
            submitted_by=principal.user_id,
        )

    return {
        "message": "Form submitted successfully",
        "submission": submission.to_dict(),
        "notifications": [event.model_dump(mode="json") for event in events],
        "has_notifications": bool(events),
    }


@router.get("")
@connection_scope()
def list_submissions(
    status: SubmissionStatus | None = None,
    form_id: int | None = None,
    principal: Principal = Depends(get_principal),
):
    submissions = [
        s.to_dict()
        for s in workflow.submissions_visible_to(principal, status=status, form_id=form_id)
    ]
    return {"count": len(submissions), "submissions": submissions}


@router.get("/{submission_id}")
@connection_scope()
def get_submission(submission_id: int, principal: Principal = Depends(get_principal)):
    submission = workflow.get_submission(submission_id)
    if not workflow.can_view_submission(principal, submission):
        raise HTTPException(status_code=403, detail="Access denied")
    return {"submission": submission.to_dict()}


@router.put("/{submission_id}/status")
@connection_scope()
def update_status(
    submission_id: int,
    payload: StatusUpdateRequest,
    principal: Principal = Depends(get_principal),
):
    submission = workflow.review_submission(
        principal, workflow.get_submission(submission_id), payload.status
    )
    return {
        "message": "Submission status updated successfully",
        "submission": submission.to_dict(),
    }


@router.delete("/{submission_id}")
@connection_scope()
def delete_submission(submission_id: int, principal: Principal = Depends(get_principal)):
    workflow.delete_submission(principal, workflow.get_submission(submission_id))
    return {"message": "Submission deleted successfully"}
