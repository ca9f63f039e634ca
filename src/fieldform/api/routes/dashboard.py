from datetime import datetime

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from ... import workflow
from ...db import connection_scope
from ...report import ReportGenerator
from ...workflow import Principal
from ..deps import get_principal, get_report_generator

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


class ReportRequest(BaseModel):
    date_from: datetime | None = None
    date_to: datetime | None = None
    form_id: int | None = None


@router.get("/stats")
@connection_scope()
def stats(principal: Principal = Depends(get_principal)):
    return {"role": principal.role.value, "stats": workflow.dashboard_stats(principal)}


@router.post("/report")
@connection_scope()
def report(
    request: ReportRequest,
    principal: Principal = Depends(get_principal),
    generator: ReportGenerator = Depends(get_report_generator),
):
    submissions = workflow.submissions_for_report(
        principal,
        date_from=request.date_from,
        date_to=request.date_to,
        form_id=request.form_id,
    )
    return {
        "success": True,
        "report": generator.generate(submissions),
        "filters": {
            "date_from": request.date_from,
            "date_to": request.date_to,
            "form_id": request.form_id,
            "total_submissions": len(submissions),
        },
    }
