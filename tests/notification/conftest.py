from __future__ import annotations

import pytest

from fieldform.schema import NotificationEvent


@pytest.fixture
def events() -> list[NotificationEvent]:
    return [
        NotificationEvent(
            field="voltage",
            message="Voltage (450) exceeds threshold of 400",
            value=450,
            threshold=400,
            condition=">400",
        ),
        NotificationEvent(
            field="humidity",
            message="Humidity (12) is below threshold of 20",
            value=12,
            threshold=20,
            condition="<20",
        ),
    ]
