from __future__ import annotations

import logging
from typing import Any

import requests

from ...consts import TIMEOUT_HTTP_REQUEST
from ...errors import ExternalServiceException

logger = logging.getLogger(__name__)


class FeishuChannel:
    """Posts interactive alert cards to a Feishu custom bot webhook."""

    def __init__(self, webhook_url: str, timeout: int = TIMEOUT_HTTP_REQUEST) -> None:
        self._webhook_url = webhook_url
        self._timeout = timeout

    def send(self, payload: dict[str, Any]) -> None:
        try:
            response = requests.post(
                url=self._webhook_url,
                json=payload,
                timeout=self._timeout,
            )
            response.raise_for_status()
        except requests.RequestException as e:
            raise ExternalServiceException(f"Feishu notification failed: {e}") from e

        # The bot API answers HTTP 200 with a non-zero code on rejected cards
        try:
            result = response.json()
        except ValueError:
            result = None
        if isinstance(result, dict) and result.get("code"):
            raise ExternalServiceException(
                f"Feishu notification failed: code {result['code']} {result.get('msg', '')}".rstrip()
            )
        logger.debug("Feishu webhook accepted alert card")
