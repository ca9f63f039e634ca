"""Evaluation of ``notifyIf`` threshold conditions on submitted values."""

import logging
import operator
import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable

from .consts import CONDITION_PATTERN
from .schema import FieldSchema, NotificationEvent
from .utils import format_number, normalize_number, parse_number

logger = logging.getLogger(__name__)

_condition = re.compile(CONDITION_PATTERN, re.ASCII)

OPERATORS: dict[str, tuple[Callable[[float, float], bool], str]] = {
    ">": (operator.gt, "{label} ({value}) exceeds threshold of {threshold}"),
    ">=": (operator.ge, "{label} ({value}) is at or above threshold of {threshold}"),
    "<": (operator.lt, "{label} ({value}) is below threshold of {threshold}"),
    "<=": (operator.le, "{label} ({value}) is at or below threshold of {threshold}"),
}


@dataclass(frozen=True, slots=True)
class TriggerCondition:
    operator: str
    threshold: float
    expression: str

    def matches(self, value: float) -> bool:
        compare, _ = OPERATORS[self.operator]
        return compare(value, self.threshold)

    def describe(self, label: str, value: float) -> str:
        _, template = OPERATORS[self.operator]
        return template.format(
            label=label,
            value=format_number(value),
            threshold=format_number(self.threshold),
        )


def parse_condition(expression: Any) -> TriggerCondition | None:
    """Parse a condition such as ``">400"`` or ``"<=70"``.

    Returns None for anything outside the ``<operator><number>`` grammar,
    including operators the grammar admits but no comparison exists for
    (``"=5"``, ``"=>5"``).
    """
    if not isinstance(expression, str):
        return None

    text = expression.strip()
    match = _condition.fullmatch(text)
    if not match or match.group(1) not in OPERATORS:
        return None
    return TriggerCondition(
        operator=match.group(1),
        threshold=float(match.group(2)),
        expression=text,
    )


def check_notifications(schema: Any, data: Any) -> list[NotificationEvent]:
    """Return a NotificationEvent for every field whose condition fires.

    Intended to run after validation has passed. Fields with a malformed
    ``notifyIf`` and values that are not numeric never fire.
    """
    parsed = FieldSchema.coerce(schema)
    if parsed is None or not isinstance(data, Mapping):
        return []

    events: list[NotificationEvent] = []
    for field in parsed.fields:
        if not field.notify_if or field.name not in data:
            continue

        condition = parse_condition(field.notify_if)
        if condition is None:
            logger.debug(f"Ignoring unsupported notifyIf on {field.name}: {field.notify_if!r}")
            continue

        value = parse_number(data[field.name])
        if not condition.matches(value):
            continue

        events.append(
            NotificationEvent(
                field=field.name,
                message=condition.describe(field.display_label, value),
                value=normalize_number(value),
                threshold=normalize_number(condition.threshold),
                condition=condition.expression,
            )
        )

    return events
