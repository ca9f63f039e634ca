"""AI summary reports over form submissions."""

import json
import logging
from typing import Any, Sequence

import requests

from .consts import TEMPLATE_REPORT_PROMPT
from .enums import SubmissionStatus
from .errors import GenerationException
from .generator import CompletionClient, strip_code_fence
from .models import Submission
from .utils import format_timestamp, sanitize

logger = logging.getLogger(__name__)

LEVELS = ("high", "medium", "low")
REPORT_SECTIONS = ("summary", "insights", "recommendations")


class ReportGenerator(CompletionClient):
    """Summarizes submissions into compliance figures, insights and recommendations.

    The report never fails outright: when no API key is configured or the
    model's reply is unusable, a report built from the status counts alone is
    returned instead.
    """

    def generate(self, submissions: Sequence[Submission]) -> dict[str, Any]:
        if not self.enabled:
            logger.warning("No AI API key configured - using fallback report")
            return build_fallback_report(submissions)

        logger.info(
            f"Generating report over {len(submissions)} submission(s) with {self.config.model} "
            f"(key {sanitize(self.config.api_key)})"
        )
        try:
            content = self._request_completion(
                self.build_system_prompt(submissions),
                "Submission data:\n" + json.dumps(report_rows(submissions), indent=2),
            )
            return parse_report_response(content)
        except (requests.RequestException, GenerationException) as e:
            logger.error(f"AI report generation error: {e}")
            return build_fallback_report(submissions)

    def build_system_prompt(self, submissions: Sequence[Submission]) -> str:
        return self.render(TEMPLATE_REPORT_PROMPT, levels=LEVELS, period=analysis_period(submissions))


def report_rows(submissions: Sequence[Submission]) -> list[dict[str, Any]]:
    """Submission records as sent to the model."""
    return [
        {
            "id": s.id,
            "form_title": s.form.title,
            "status": s.status,
            "submitted_by": s.submitted_by or "Unknown",
            "created_at": format_timestamp(s.created_at),
            "data": s.data or {},
        }
        for s in submissions
    ]


def analysis_period(submissions: Sequence[Submission]) -> str | None:
    stamps = sorted(format_timestamp(s.created_at) for s in submissions if s.created_at)
    if not stamps:
        return None
    return f"{stamps[0]} to {stamps[-1]}"


def parse_report_response(content: str) -> dict[str, Any]:
    """Parse the model's reply into a report dict.

    Raises:
        GenerationException: If the reply is not JSON or lacks a report section
    """
    try:
        report = json.loads(strip_code_fence(content))
    except json.JSONDecodeError as e:
        raise GenerationException(f"AI report is not valid JSON: {e}") from e

    if not isinstance(report, dict) or any(not report.get(key) for key in REPORT_SECTIONS):
        raise GenerationException("Invalid report structure received from AI")
    return report


def build_fallback_report(submissions: Sequence[Submission]) -> dict[str, Any]:
    total = len(submissions)
    counts = {status.value: 0 for status in SubmissionStatus}
    for s in submissions:
        counts[s.status] = counts.get(s.status, 0) + 1
    approved = counts[SubmissionStatus.APPROVED.value]

    return {
        "summary": {
            "total_submissions": total,
            "approved_count": approved,
            "rejected_count": counts[SubmissionStatus.REJECTED.value],
            "pending_count": counts[SubmissionStatus.PENDING.value],
            "compliance_rate": round(approved / total * 100) if total else 0,
            "analysis_period": "Unable to analyze",
        },
        "insights": [
            {
                "category": "Analysis Error",
                "description": "Unable to generate insights due to technical error",
                "impact": "medium",
            }
        ],
        "recommendations": [
            {
                "title": "Manual Review Required",
                "description": "Please review submissions manually due to analysis failure",
                "priority": "high",
            }
        ],
    }
