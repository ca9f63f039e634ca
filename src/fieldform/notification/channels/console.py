from __future__ import annotations

import logging

alert_logger = logging.getLogger("fieldform.alerts")


class ConsoleChannel:
    """Writes alerts to the ``fieldform.alerts`` logger.

    The logger inherits the console and file handlers configured for
    ``fieldform``, so alerts land next to the service log.
    """

    def send(self, payload: str) -> None:
        alert_logger.warning(payload)
